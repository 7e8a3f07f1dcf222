"""
Domain Layer для Hardware Collector.

Бизнес-логика отделена от NetBox клиента.
Клиент только получает сырые записи, Domain их проверяет и собирает Machine.

- DeviceNormalizer: устройство -> Machine
- InterfaceResolver: MAC-адрес машины
- NetworkEnricher: gateway и nameservers по IP-диапазонам
- in_range: попадание адреса в диапазон

Использование:
    from hardware_collector.core.domain import DeviceNormalizer

    machines = DeviceNormalizer().normalize(raw_devices)
"""

from .address import cidr_address, in_range, parse_cidr
from .device import DeviceNormalizer
from .interface import InterfaceResolver
from .network import NetworkEnricher, NetworkSettings

__all__ = [
    "DeviceNormalizer",
    "InterfaceResolver",
    "NetworkEnricher",
    "NetworkSettings",
    "cidr_address",
    "in_range",
    "parse_cidr",
]
