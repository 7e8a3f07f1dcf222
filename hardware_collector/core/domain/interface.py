"""
Domain logic для интерфейсов.

Назначает каждой машине MAC-адрес по интерфейсам её устройства в NetBox.
"""

import logging
from typing import List

from ..constants import DEFAULT_INTERFACE_TAG
from ..exceptions import MissingInterfaceError
from ..models import Machine, MatchPolicy, RawInterface
from .matching import pick

logger = logging.getLogger(__name__)


class InterfaceResolver:
    """
    Поиск MAC-адреса машины.

    Правила:
    - один интерфейс: его MAC без условий
    - несколько: только интерфейсы с тегом interface_tag, выбор по policy
      (LAST: последний в порядке NetBox)
    - ни одного: MAC остаётся пустым (или MissingInterfaceError при require_mac)

    Example:
        resolver = InterfaceResolver(client)
        resolver.resolve(machines)
    """

    def __init__(
        self,
        client,
        interface_tag: str = DEFAULT_INTERFACE_TAG,
        policy: MatchPolicy = MatchPolicy.LAST,
        require_mac: bool = False,
    ):
        """
        Args:
            client: Объект с методом list_interfaces(device_name)
            interface_tag: Тег интерфейса provisioning-сети
            policy: Политика выбора среди нескольких интерфейсов с тегом
            require_mac: Ошибка если у устройства нет интерфейсов
        """
        self.client = client
        self.interface_tag = interface_tag
        self.policy = policy
        self.require_mac = require_mac

    def resolve(self, machines: List[Machine]) -> List[Machine]:
        """
        Запрашивает интерфейсы для каждой машины и проставляет MAC.

        Raises:
            UpstreamFetchError: Ошибка запроса интерфейсов
            AmbiguousMatchError: STRICT и несколько интерфейсов с тегом
            MissingInterfaceError: require_mac и интерфейсов нет
        """
        for machine in machines:
            interfaces = self.client.list_interfaces(machine.hostname)
            mac = self.select_mac(machine.hostname, interfaces)
            if mac is not None:
                machine.mac_address = mac
        logger.info("Интерфейсы прочитаны, MAC-адреса назначены")
        return machines

    def select_mac(self, hostname: str, interfaces: List[RawInterface]):
        """MAC для машины или None если назначать нечего."""
        if not interfaces:
            if self.require_mac:
                raise MissingInterfaceError(hostname)
            logger.warning(f"{hostname}: NetBox не вернул интерфейсов, MAC не назначен")
            return None

        if len(interfaces) == 1:
            return interfaces[0].mac_address or ""

        tagged = [intf for intf in interfaces if self.interface_tag in intf.tags]
        chosen = pick(
            tagged,
            self.policy,
            hostname,
            "interface",
            describe=lambda intf: f"{intf.name}={intf.mac_address}",
        )
        if chosen is None:
            logger.debug(
                f"{hostname}: {len(interfaces)} интерфейсов, ни одного с тегом {self.interface_tag}"
            )
            return None
        return chosen.mac_address or ""
