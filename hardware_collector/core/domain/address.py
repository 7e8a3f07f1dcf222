"""
Адресная арифметика.

Разбор строк адрес/префикс (как их отдаёт NetBox) и проверка
попадания адреса в диапазон [start, end].
"""

import ipaddress
import logging
import re
from typing import Any, Optional, Union

from ..exceptions import AddressParseError

logger = logging.getLogger(__name__)

# Адрес и длина префикса без пробелов; маска вида /255.255.252.0 не принимается
CIDR_PATTERN = re.compile(r"[0-9A-Fa-f:.]+/\d{1,3}")

IPInterface = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]


def parse_cidr(literal: Any, field: Optional[str] = None) -> IPInterface:
    """
    Разбирает строку адрес/префикс.

    Префикс обязателен: голый адрес без "/N" считается ошибкой,
    как и маска в dotted-quad или пробелы вокруг.
    Биты хоста допускаются (192.168.2.5/22).

    Args:
        literal: Строка вида 10.80.21.31/21
        field: Имя поля для текста ошибки

    Returns:
        IPv4Interface или IPv6Interface

    Raises:
        AddressParseError: Строка не является адресом с префиксом
    """
    if not isinstance(literal, str) or not CIDR_PATTERN.fullmatch(literal):
        raise AddressParseError(literal, field=field)
    try:
        return ipaddress.ip_interface(literal)
    except ValueError as e:
        raise AddressParseError(literal, field=field) from e


def cidr_address(literal: Any, field: Optional[str] = None) -> str:
    """Адрес из строки адрес/префикс, маска отбрасывается."""
    return str(parse_cidr(literal, field).ip)


def _to_ipv4(candidate: Any) -> Optional[ipaddress.IPv4Address]:
    """Приводит строку к IPv4 (включая ::ffff:a.b.c.d) или возвращает None."""
    if not isinstance(candidate, str):
        return None
    try:
        address = ipaddress.ip_address(candidate.strip())
    except ValueError:
        return None
    if isinstance(address, ipaddress.IPv6Address):
        return address.ipv4_mapped
    return address


def in_range(candidate: str, start: str, end: str) -> bool:
    """
    Проверяет что candidate лежит в [start, end] включительно.

    Границы задаются строками адрес/префикс, префикс игнорируется:
    start и end используются как фиксированные адреса, ширина
    диапазона от маски не зависит.

    Не-IPv4 или битый candidate просто не попадает в диапазон.
    Битая граница тоже даёт False (с предупреждением в логе).

    Args:
        candidate: Проверяемый IPv4
        start: Начало диапазона (10.80.21.31/21)
        end: Конец диапазона (10.80.21.51/21)

    Returns:
        bool: True если start <= candidate <= end

    Example:
        in_range("10.80.21.32", "10.80.21.31/21", "10.80.21.51/21")  # True
    """
    try:
        start_ip = parse_cidr(start, field="start_address").ip
        end_ip = parse_cidr(end, field="end_address").ip
    except AddressParseError as e:
        logger.warning(f"Граница диапазона не распарсилась: {e}")
        return False

    address = _to_ipv4(candidate)
    if address is None:
        logger.debug(f"{candidate!r} не является IPv4 адресом")
        return False

    if not isinstance(start_ip, ipaddress.IPv4Address) or not isinstance(
        end_ip, ipaddress.IPv4Address
    ):
        return False

    return int(start_ip) <= int(address) <= int(end_ip)
