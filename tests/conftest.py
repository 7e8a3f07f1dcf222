"""
Pytest configuration и общие fixtures для тестов.

Предоставляет переиспользуемые fixtures:
- make_device / make_interface / make_ip_range: фабрики сырых записей NetBox
- fake_client: клиент в памяти с теми же методами что NetBoxClient
- sample_machines: готовые машины для экспортеров
"""

from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from hardware_collector.core.context import set_current_context
from hardware_collector.core.models import Machine, RawDevice, RawInterface, RawIPRange


@pytest.fixture(autouse=True)
def _no_keyring(monkeypatch):
    """Тесты не должны ходить в системное хранилище токенов."""
    monkeypatch.setattr(
        "hardware_collector.core.credentials.keyring.get_password",
        lambda *args, **kwargs: None,
    )
    monkeypatch.delenv("NETBOX_TOKEN", raising=False)
    monkeypatch.delenv("NETBOX_URL", raising=False)
    yield
    set_current_context(None)


@pytest.fixture
def make_device():
    """Фабрика RawDevice с валидными custom fields по умолчанию."""
    def _make(
        name: str = "eksa-dev01",
        primary: Optional[str] = "10.80.8.21/24",
        bmc_ip: object = None,
        tags: Optional[List[str]] = None,
        **overrides,
    ) -> RawDevice:
        custom_fields = {
            "bmc_ip": bmc_ip if bmc_ip is not None else {"id": 7, "address": "10.80.12.20/22"},
            "bmc_username": "root",
            "bmc_password": "pPyU6mAO",
            "disk": "/dev/sda",
        }
        custom_fields.update(overrides)
        return RawDevice(
            name=name,
            primary_address=primary,
            custom_fields=custom_fields,
            tags=tags or [],
        )
    return _make


@pytest.fixture
def make_interface():
    """Фабрика RawInterface."""
    def _make(mac: Optional[str] = "CC:48:3A:11:F4:C1", tags=None, name: str = "eth0") -> RawInterface:
        return RawInterface(name=name, mac_address=mac, tags=tags or [])
    return _make


@pytest.fixture
def make_ip_range():
    """Фабрика RawIPRange с gateway и nameservers."""
    def _make(
        start: str = "10.80.8.1/24",
        end: str = "10.80.8.100/24",
        gateway: str = "10.80.8.254/24",
        nameservers: Optional[List[str]] = None,
        custom_fields: Optional[dict] = None,
    ) -> RawIPRange:
        if custom_fields is None:
            if nameservers is None:
                nameservers = ["1.1.1.1/32"]
            custom_fields = {
                "gateway": {"id": 1, "address": gateway},
                "nameservers": [{"id": i, "address": ns} for i, ns in enumerate(nameservers)],
            }
        return RawIPRange(start_address=start, end_address=end, custom_fields=custom_fields)
    return _make


class FakeClient:
    """Клиент NetBox в памяти."""

    def __init__(
        self,
        devices: List[RawDevice],
        interfaces: Optional[Dict[str, List[RawInterface]]] = None,
        ip_ranges: Optional[List[RawIPRange]] = None,
    ):
        self.devices = devices
        self.interfaces = interfaces or {}
        self.ip_ranges = ip_ranges or []
        self.calls: List[tuple] = []

    def list_devices(self, filter_tag=None):
        self.calls.append(("devices", filter_tag))
        return list(self.devices)

    def list_interfaces(self, device_name):
        self.calls.append(("interfaces", device_name))
        return list(self.interfaces.get(device_name, []))

    def list_ip_ranges(self):
        self.calls.append(("ip_ranges", None))
        return list(self.ip_ranges)


@pytest.fixture
def fake_client_cls():
    return FakeClient


@pytest.fixture
def mock_pynetbox_api():
    """
    Mock pynetbox.api с пустыми ответами.

    Returns:
        MagicMock: api.dcim.devices / api.dcim.interfaces / api.ipam.ip_ranges
    """
    api = MagicMock()
    api.dcim.devices.filter.return_value = []
    api.dcim.devices.all.return_value = []
    api.dcim.interfaces.filter.return_value = []
    api.ipam.ip_ranges.all.return_value = []
    return api


@pytest.fixture
def sample_machines() -> List[Machine]:
    """Две машины как после полного pipeline."""
    return [
        Machine(
            hostname="eksa-dev01",
            ip_address="10.80.8.21",
            netmask="255.255.255.0",
            gateway="192.168.2.1",
            nameservers=["1.1.1.1"],
            mac_address="CC:48:3A:11:F4:C1",
            disk="/dev/sda",
            labels={"type": "control-plane"},
            bmc_ip_address="10.80.12.20",
            bmc_username="root",
            bmc_password="root",
        ),
        Machine(
            hostname="eksa-dev02",
            ip_address="10.80.8.22",
            netmask="255.255.255.0",
            gateway="192.168.2.1",
            nameservers=["1.1.1.1"],
            mac_address="CC:48:3A:11:EA:11",
            disk="/dev/sda",
            labels={"type": "worker-plane"},
            bmc_ip_address="10.80.12.21",
            bmc_username="root",
            bmc_password="root",
        ),
    ]
