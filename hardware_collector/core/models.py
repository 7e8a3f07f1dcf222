"""
Data Models для Hardware Collector.

Типизированные dataclasses вместо Dict[str, Any].

- RawDevice, RawInterface, RawIPRange: сырые записи NetBox после
  конвертации из pynetbox Record (custom fields ещё не проверены)
- Machine: каноническая запись физической машины

Использование:
    from hardware_collector.core.models import Machine

    machine = Machine(hostname="eksa-dev01", ip_address="10.80.8.21")
    data = machine.to_dict()            # ключи промежуточной кодировки
    same = Machine.from_dict(data)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .constants import CONTROL_PLANE_TAG, DEFAULT_INTERFACE_TAG, LABEL_KEY


@dataclass
class RawDevice:
    """
    Устройство из dcim/devices.

    Attributes:
        name: Имя устройства
        primary_address: Primary IPv4 в формате адрес/префикс
        custom_fields: Custom fields как вернул NetBox
        tags: Имена тегов устройства
    """
    name: Optional[str]
    primary_address: Optional[str] = None
    custom_fields: Any = None
    tags: List[str] = field(default_factory=list)


@dataclass
class RawInterface:
    """Интерфейс из dcim/interfaces."""
    name: str = ""
    mac_address: Optional[str] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class RawIPRange:
    """
    IP-диапазон из ipam/ip-ranges.

    Attributes:
        start_address: Начало диапазона (адрес/префикс)
        end_address: Конец диапазона (адрес/префикс)
        custom_fields: Custom fields (gateway, nameservers)
    """
    start_address: str
    end_address: str
    custom_fields: Any = None

    @property
    def label(self) -> str:
        """Человекочитаемые границы для логов."""
        return f"{self.start_address}-{self.end_address}"


# Порядок полей промежуточной кодировки
MACHINE_FIELDS = (
    ("Hostname", "hostname"),
    ("IPAddress", "ip_address"),
    ("Netmask", "netmask"),
    ("Gateway", "gateway"),
    ("Nameservers", "nameservers"),
    ("MACAddress", "mac_address"),
    ("Disk", "disk"),
    ("Labels", "labels"),
    ("BMCIPAddress", "bmc_ip_address"),
    ("BMCUsername", "bmc_username"),
    ("BMCPassword", "bmc_password"),
)


@dataclass
class Machine:
    """
    Физическая машина для provisioning.

    Attributes:
        hostname: Имя устройства (уникально в наборе)
        ip_address: Primary IPv4 без маски
        netmask: Маска в dotted-quad (берётся из bmc_ip)
        gateway: Шлюз (пусто до обогащения)
        nameservers: DNS-серверы в порядке NetBox
        mac_address: MAC интерфейса (пусто если интерфейс не найден)
        disk: Путь к диску (/dev/sda)
        labels: {"type": "control-plane" | "worker-plane"}
        bmc_ip_address: Адрес BMC
        bmc_username: Логин BMC
        bmc_password: Пароль BMC
    """
    hostname: str = ""
    ip_address: str = ""
    netmask: str = ""
    gateway: str = ""
    nameservers: List[str] = field(default_factory=list)
    mac_address: str = ""
    disk: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    bmc_ip_address: str = ""
    bmc_username: str = ""
    bmc_password: str = ""

    @property
    def machine_type(self) -> str:
        """Значение метки type."""
        return self.labels.get(LABEL_KEY, "")

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь с ключами промежуточной кодировки."""
        data = {}
        for key, attr in MACHINE_FIELDS:
            value = getattr(self, attr)
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Machine":
        """
        Создаёт Machine из словаря промежуточной кодировки.

        Отсутствующие ключи и null дают пустые значения.

        Raises:
            ValueError: Значение неожиданного типа
        """
        kwargs: Dict[str, Any] = {}
        for key, attr in MACHINE_FIELDS:
            value = data.get(key)
            if attr == "nameservers":
                value = value or []
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ValueError(f"{key}: ожидался список строк")
            elif attr == "labels":
                value = value or {}
                if not isinstance(value, dict) or not all(
                    isinstance(k, str) and isinstance(v, str) for k, v in value.items()
                ):
                    raise ValueError(f"{key}: ожидался словарь строк")
            else:
                value = "" if value is None else value
                if not isinstance(value, str):
                    raise ValueError(f"{key}: ожидалась строка, получен {type(value).__name__}")
            kwargs[attr] = value
        return cls(**kwargs)

    def redacted(self) -> Dict[str, Any]:
        """Словарь для debug-логов без пароля BMC."""
        data = self.to_dict()
        if data["BMCPassword"]:
            data["BMCPassword"] = "***"
        return data


class MatchPolicy(str, Enum):
    """Что делать если у машины несколько кандидатов (интерфейсов или диапазонов)."""
    LAST = "last"        # последний совпавший перезаписывает предыдущие
    FIRST = "first"      # первый совпавший
    STRICT = "strict"    # больше одного -> AmbiguousMatchError


@dataclass
class MatchingOptions:
    """
    Настройки сопоставления интерфейсов и IP-диапазонов.

    Attributes:
        interface_policy: Выбор среди нескольких интерфейсов с тегом
        range_policy: Выбор среди нескольких совпавших диапазонов
        interface_tag: Тег нужного интерфейса
        control_plane_tag: Тег control-plane устройства
        require_mac: Считать ошибкой отсутствие интерфейсов
    """
    interface_policy: MatchPolicy = MatchPolicy.LAST
    range_policy: MatchPolicy = MatchPolicy.LAST
    interface_tag: str = DEFAULT_INTERFACE_TAG
    control_plane_tag: str = CONTROL_PLANE_TAG
    require_mac: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchingOptions":
        """Создаёт настройки из секции matching конфигурации."""
        return cls(
            interface_policy=MatchPolicy(data.get("interface_policy") or "last"),
            range_policy=MatchPolicy(data.get("range_policy") or "last"),
            interface_tag=data.get("interface_tag") or DEFAULT_INTERFACE_TAG,
            control_plane_tag=data.get("control_plane_tag") or CONTROL_PLANE_TAG,
            require_mac=bool(data.get("require_mac", False)),
        )
