"""
Mixin для работы с интерфейсами NetBox.
"""

import logging
from typing import Any, List, Optional

from ...core.constants import STAGE_INTERFACES
from ...core.models import RawInterface
from .base import tag_names

logger = logging.getLogger(__name__)


def to_raw_interface(interface: Any) -> RawInterface:
    """Конвертирует pynetbox Record интерфейса в RawInterface."""
    mac: Optional[str] = getattr(interface, "mac_address", None)
    return RawInterface(
        name=str(getattr(interface, "name", "") or ""),
        mac_address=str(mac) if mac else None,
        tags=tag_names(getattr(interface, "tags", None)),
    )


class InterfacesMixin:
    """Методы для работы с интерфейсами."""

    def list_interfaces(self, device_name: str) -> List[RawInterface]:
        """
        Получает интерфейсы устройства по имени.

        Args:
            device_name: Имя устройства

        Returns:
            List[RawInterface]: Интерфейсы в порядке NetBox

        Raises:
            UpstreamFetchError: Ошибка запроса (с именем устройства)
        """
        interfaces = self._fetch(
            STAGE_INTERFACES,
            lambda: list(self.api.dcim.interfaces.filter(device=device_name)),
            device=device_name,
        )
        logger.debug(f"{device_name}: получено интерфейсов: {len(interfaces)}")
        return [to_raw_interface(interface) for interface in interfaces]
