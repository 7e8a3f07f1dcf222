"""
Тесты адресной арифметики.

Проверяет:
- разбор строк адрес/префикс
- маску из префикса
- попадание адреса в диапазон [start, end]
"""

import pytest

from hardware_collector.core.domain.address import (
    cidr_address,
    in_range,
    parse_cidr,
)
from hardware_collector.core.exceptions import AddressParseError


class TestParseCidr:
    """Тесты parse_cidr."""

    def test_host_bits_allowed(self):
        """Адрес с битами хоста разбирается без ошибки."""
        iface = parse_cidr("192.168.2.5/22")
        assert str(iface.ip) == "192.168.2.5"

    def test_address_without_prefix_fails(self):
        """Голый адрес без префикса: ошибка."""
        with pytest.raises(AddressParseError) as exc:
            parse_cidr("192.168.2.5", field="bmc_ip")
        assert exc.value.literal == "192.168.2.5"
        assert exc.value.field == "bmc_ip"

    @pytest.mark.parametrize("literal", ["10.800.21.31/21", "10.80.21.31/33", "abc/24", ""])
    def test_invalid_literals(self, literal):
        """Битые строки дают AddressParseError."""
        with pytest.raises(AddressParseError):
            parse_cidr(literal)

    def test_non_string_fails(self):
        """Не строка: AddressParseError."""
        with pytest.raises(AddressParseError):
            parse_cidr(None)

    def test_cidr_address_drops_mask(self):
        assert cidr_address("192.18.2.5/22") == "192.18.2.5"

    @pytest.mark.parametrize("literal", [
        "10.80.12.20/255.255.252.0",
        "10.80.12.20/0.0.3.255",
        " 10.0.0.1/24 ",
        "10.0.0.1/24\n",
    ])
    def test_mask_and_whitespace_rejected(self, literal):
        """Только длина префикса, без маски в dotted-quad и пробелов."""
        with pytest.raises(AddressParseError):
            parse_cidr(literal)

    @pytest.mark.parametrize("literal,expected", [
        ("192.168.2.5/22", "255.255.252.0"),
        ("10.80.12.20/24", "255.255.255.0"),
        ("10.0.0.1/32", "255.255.255.255"),
    ])
    def test_netmask_from_prefix(self, literal, expected):
        assert str(parse_cidr(literal).netmask) == expected

    def test_ipv6_prefix(self):
        assert str(parse_cidr("2001:db8::5/64").ip) == "2001:db8::5"


class TestInRange:
    """Тесты in_range."""

    @pytest.mark.parametrize("candidate,start,end,expected", [
        ("10.80.21.32", "10.80.21.31/21", "10.80.21.51/21", True),
        ("10.80.21.35", "10.80.21.31/21", "10.80.21.51/21", True),
        ("25.82.21.32", "10.80.21.31/21", "10.80.21.51/21", False),
        ("100.100.100.1000", "10.80.21.31/21", "10.80.21.51/21", False),
    ])
    def test_range_table(self, candidate, start, end, expected):
        """Таблица попадания в диапазон."""
        assert in_range(candidate, start, end) is expected

    def test_bounds_inclusive(self):
        """Обе границы включаются."""
        assert in_range("10.80.21.31", "10.80.21.31/21", "10.80.21.51/21")
        assert in_range("10.80.21.51", "10.80.21.31/21", "10.80.21.51/21")
        assert not in_range("10.80.21.52", "10.80.21.31/21", "10.80.21.51/21")

    def test_prefix_does_not_widen_range(self):
        """Адрес внутри подсети /21, но вне [start, end]: не попадает."""
        assert not in_range("10.80.16.1", "10.80.21.31/21", "10.80.21.51/21")

    @pytest.mark.parametrize("start,end", [
        ("10.800.21.31/21", "10.80.21.51/21"),
        ("10.80.21.31/21", "10.800.21.51/21"),
    ])
    def test_malformed_bound_is_not_a_match(self, start, end):
        """Битая граница: не ошибка, а промах."""
        assert in_range("25.82.21.32", start, end) is False

    def test_ipv6_candidate_is_not_a_match(self):
        assert in_range("2001:db8::1", "10.80.21.31/21", "10.80.21.51/21") is False

    def test_ipv4_mapped_candidate(self):
        """::ffff:a.b.c.d считается IPv4."""
        assert in_range("::ffff:10.80.21.40", "10.80.21.31/21", "10.80.21.51/21") is True

    def test_empty_candidate(self):
        assert in_range("", "10.80.21.31/21", "10.80.21.51/21") is False
