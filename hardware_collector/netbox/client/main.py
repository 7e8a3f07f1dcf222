"""
NetBox Client - объединяет все mixins.
"""

from .base import NetBoxClientBase
from .devices import DevicesMixin
from .interfaces import InterfacesMixin
from .ipam import IPRangesMixin


class NetBoxClient(
    DevicesMixin,
    InterfacesMixin,
    IPRangesMixin,
    NetBoxClientBase,
):
    """
    Клиент NetBox для чтения инвентаря (только чтение).

    Attributes:
        url: URL NetBox сервера
        api: Объект pynetbox.api

    Example:
        client = NetBoxClient(url="localhost:8000", token="xxx")

        for device in client.list_devices(filter_tag="eks-a"):
            print(device.name)

        interfaces = client.list_interfaces("eksa-dev01")
        ranges = client.list_ip_ranges()
    """

    pass
