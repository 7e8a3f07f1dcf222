"""
Domain logic для сетевых настроек.

Шлюз и DNS-серверы машины берутся из custom fields IP-диапазона NetBox,
в который попадает её primary IP.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..constants import CF_GATEWAY, CF_NAMESERVERS
from ..models import Machine, MatchPolicy, RawIPRange
from .address import cidr_address, in_range
from .custom_fields import custom_fields_of, require_address, require_address_list
from .matching import pick

logger = logging.getLogger(__name__)


@dataclass
class NetworkSettings:
    """Проверенные сетевые настройки одного IP-диапазона."""
    gateway: str
    nameservers: List[str] = field(default_factory=list)

    @classmethod
    def from_ip_range(cls, ip_range: RawIPRange) -> "NetworkSettings":
        """
        Извлекает gateway и nameservers из custom fields диапазона.

        Raises:
            TypeMismatchError: Поле неверной формы
            AddressParseError: Адрес не распарсился
        """
        fields = custom_fields_of(ip_range.custom_fields, owner="ip_range.custom_fields")
        gateway = cidr_address(require_address(fields, CF_GATEWAY), field=CF_GATEWAY)
        nameservers = [
            cidr_address(literal, field=CF_NAMESERVERS)
            for literal in require_address_list(fields, CF_NAMESERVERS)
        ]
        return cls(gateway=gateway, nameservers=nameservers)


class NetworkEnricher:
    """
    Назначение gateway и nameservers.

    Каждая машина проверяется против каждого диапазона (полный перебор).
    Если совпало несколько диапазонов, выбор делает policy
    (LAST: последний совпавший перезаписывает остальные).

    Example:
        enricher = NetworkEnricher()
        enricher.enrich(machines, client.list_ip_ranges())
    """

    def __init__(self, policy: MatchPolicy = MatchPolicy.LAST):
        self.policy = policy

    def enrich(self, machines: List[Machine], ip_ranges: List[RawIPRange]) -> List[Machine]:
        """
        Проставляет gateway и nameservers машинам.

        Custom fields проверяются у каждого совпавшего диапазона,
        даже если его потом перекроет другой.

        Raises:
            TypeMismatchError: Custom field неверной формы
            AddressParseError: Адрес gateway/nameserver не распарсился
            AmbiguousMatchError: STRICT и несколько совпавших диапазонов
        """
        parsed: Dict[int, NetworkSettings] = {}
        for machine in machines:
            matches: List[Tuple[RawIPRange, NetworkSettings]] = []
            for index, ip_range in enumerate(ip_ranges):
                if not in_range(machine.ip_address, ip_range.start_address, ip_range.end_address):
                    continue
                if index not in parsed:
                    parsed[index] = NetworkSettings.from_ip_range(ip_range)
                matches.append((ip_range, parsed[index]))

            chosen = pick(
                matches,
                self.policy,
                machine.hostname,
                "ip_range",
                describe=lambda match: match[0].label,
            )
            if chosen is None:
                logger.debug(f"{machine.hostname}: {machine.ip_address} не попал ни в один диапазон")
                continue

            ip_range, settings = chosen
            machine.gateway = settings.gateway
            machine.nameservers = list(settings.nameservers)
            logger.debug(f"{machine.hostname}: диапазон {ip_range.label}, gateway={settings.gateway}")

        logger.info("IPAM прочитан, gateway и nameservers назначены")
        return machines
