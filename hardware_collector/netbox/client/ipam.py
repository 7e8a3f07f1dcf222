"""
Mixin для работы с IPAM NetBox (IP-диапазоны).
"""

import logging
from typing import Any, List

from ...core.constants import STAGE_IP_RANGES
from ...core.models import RawIPRange

logger = logging.getLogger(__name__)


def to_raw_ip_range(ip_range: Any) -> RawIPRange:
    """Конвертирует pynetbox Record диапазона в RawIPRange."""
    return RawIPRange(
        start_address=getattr(ip_range, "start_address", None),
        end_address=getattr(ip_range, "end_address", None),
        custom_fields=getattr(ip_range, "custom_fields", None),
    )


class IPRangesMixin:
    """Методы для работы с IP-диапазонами."""

    def list_ip_ranges(self) -> List[RawIPRange]:
        """
        Получает все IP-диапазоны.

        Raises:
            UpstreamFetchError: Ошибка запроса
        """
        ip_ranges = self._fetch(STAGE_IP_RANGES, lambda: list(self.api.ipam.ip_ranges.all()))
        logger.debug(f"Получено IP-диапазонов: {len(ip_ranges)}")
        return [to_raw_ip_range(ip_range) for ip_range in ip_ranges]
