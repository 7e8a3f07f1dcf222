"""
Mixin для работы с устройствами NetBox.
"""

import logging
from typing import Any, List, Optional

from ...core.constants import STAGE_DEVICES
from ...core.models import RawDevice
from .base import tag_names

logger = logging.getLogger(__name__)


def primary_address_of(device: Any) -> Optional[str]:
    """
    Primary IPv4 устройства (адрес/префикс) или None.

    Читается только primary_ip4: primary_ip может оказаться IPv6.
    """
    ip_obj = getattr(device, "primary_ip4", None)
    if ip_obj is None:
        return None
    address = ip_obj.get("address") if isinstance(ip_obj, dict) else getattr(ip_obj, "address", None)
    return str(address) if address else None


def to_raw_device(device: Any) -> RawDevice:
    """Конвертирует pynetbox Record устройства в RawDevice."""
    return RawDevice(
        name=getattr(device, "name", None),
        primary_address=primary_address_of(device),
        custom_fields=getattr(device, "custom_fields", None),
        tags=tag_names(getattr(device, "tags", None)),
    )


class DevicesMixin:
    """Методы для работы с устройствами."""

    def list_devices(self, filter_tag: Optional[str] = None) -> List[RawDevice]:
        """
        Получает устройства, опционально отфильтрованные по тегу.

        Args:
            filter_tag: Slug тега (eks-a). None = все устройства

        Returns:
            List[RawDevice]: Устройства в порядке NetBox

        Raises:
            UpstreamFetchError: Ошибка запроса
        """
        if filter_tag:
            devices = self._fetch(
                STAGE_DEVICES, lambda: list(self.api.dcim.devices.filter(tag=filter_tag))
            )
        else:
            devices = self._fetch(STAGE_DEVICES, lambda: list(self.api.dcim.devices.all()))

        logger.debug(f"Получено устройств: {len(devices)} (tag={filter_tag})")
        return [to_raw_device(device) for device in devices]
