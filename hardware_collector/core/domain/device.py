"""
Domain logic для устройств.

Превращает сырое устройство NetBox в каноническую Machine.
Не зависит от pynetbox, работает с RawDevice.
"""

import ipaddress
import logging
from typing import Iterable, List, Set

from ..constants import (
    CF_BMC_IP,
    CF_BMC_PASSWORD,
    CF_BMC_USERNAME,
    CF_DISK,
    CONTROL_PLANE_LABEL,
    CONTROL_PLANE_TAG,
    LABEL_KEY,
    WORKER_PLANE_LABEL,
)
from ..exceptions import AddressParseError, DuplicateHostnameError, TypeMismatchError
from ..models import Machine, RawDevice
from .address import parse_cidr
from .custom_fields import custom_fields_of, require_address, require_string, shape_of

logger = logging.getLogger(__name__)


class DeviceNormalizer:
    """
    Нормализация устройств NetBox.

    Порядок извлечения:
    1. hostname = имя устройства
    2. bmc_ip -> адрес BMC и netmask (маска берётся из bmc_ip,
       а не из primary IP)
    3. bmc_username, bmc_password, disk как есть
    4. primary IP без маски
    5. метка type: control-plane если есть такой тег, иначе worker-plane

    Example:
        normalizer = DeviceNormalizer()
        machines = normalizer.normalize(raw_devices)
    """

    def __init__(self, control_plane_tag: str = CONTROL_PLANE_TAG):
        """
        Args:
            control_plane_tag: Тег устройства для control-plane
        """
        self.control_plane_tag = control_plane_tag

    def normalize(self, devices: Iterable[RawDevice]) -> List[Machine]:
        """
        Нормализует все устройства, fail-fast.

        Raises:
            TypeMismatchError: Custom field неверной формы
            AddressParseError: Адрес не распарсился
            DuplicateHostnameError: Имя устройства повторяется
        """
        machines: List[Machine] = []
        seen: Set[str] = set()
        for device in devices:
            machine = self.normalize_device(device)
            if machine.hostname in seen:
                raise DuplicateHostnameError(machine.hostname)
            seen.add(machine.hostname)
            machines.append(machine)
        logger.info(f"Устройства прочитаны: {len(machines)} машин")
        return machines

    def normalize_device(self, device: RawDevice) -> Machine:
        """Нормализует одно устройство."""
        if not isinstance(device.name, str) or not device.name:
            raise TypeMismatchError("name", expected="non-empty string", actual=shape_of(device.name))

        machine = Machine(hostname=device.name)
        fields = custom_fields_of(device.custom_fields)

        bmc = parse_cidr(require_address(fields, CF_BMC_IP), field=CF_BMC_IP)
        machine.bmc_ip_address = str(bmc.ip)
        machine.netmask = str(bmc.netmask)

        machine.bmc_username = require_string(fields, CF_BMC_USERNAME)
        machine.bmc_password = require_string(fields, CF_BMC_PASSWORD)
        machine.disk = require_string(fields, CF_DISK)

        if not isinstance(device.primary_address, str):
            raise TypeMismatchError(
                "primary_ip4", expected="address string", actual=shape_of(device.primary_address)
            )
        primary = parse_cidr(device.primary_address, field="primary_ip4")
        if not isinstance(primary.ip, ipaddress.IPv4Address):
            raise AddressParseError(device.primary_address, field="primary_ip4")
        machine.ip_address = str(primary.ip)

        machine.labels = {LABEL_KEY: self.label_for(device.tags)}

        logger.debug(f"{machine.hostname}: ip={machine.ip_address}, bmc={machine.bmc_ip_address}")
        return machine

    def label_for(self, tags: Iterable[str]) -> str:
        """Тип машины по тегам устройства."""
        for tag in tags:
            if tag == self.control_plane_tag:
                return CONTROL_PLANE_LABEL
        return WORKER_PLANE_LABEL
