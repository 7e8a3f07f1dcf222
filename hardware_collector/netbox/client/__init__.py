"""
NetBox Client - чтение инвентаря из NetBox API.

Использует библиотеку pynetbox. Пагинацию выполняет pynetbox,
записи конвертируются в RawDevice / RawInterface / RawIPRange.

Модуль разбит на компоненты:
    - base.py       - базовый класс, сессия, обёртка ошибок
    - devices.py    - dcim/devices
    - interfaces.py - dcim/interfaces
    - ipam.py       - ipam/ip-ranges
    - main.py       - NetBoxClient (объединяет все mixins)
"""

from .base import NetBoxClientBase, NetBoxSession
from .main import NetBoxClient

__all__ = [
    "NetBoxClient",
    "NetBoxClientBase",
    "NetBoxSession",
]
