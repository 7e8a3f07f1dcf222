"""
Модуль интеграции с NetBox.

Использует библиотеку pynetbox для чтения устройств, интерфейсов
и IP-диапазонов.

Пример использования:
    from hardware_collector.netbox import NetBoxClient

    client = NetBoxClient(url="https://netbox.example.com", token="xxx")
    devices = client.list_devices(filter_tag="eks-a")
"""

from .client import NetBoxClient

__all__ = ["NetBoxClient"]
