"""
CSV экспортер для provisioning.

Фиксированный заголовок из 11 колонок:
    hostname, bmc_ip, bmc_username, bmc_password, mac, ip_address,
    netmask, gateway, nameservers, labels, disk

- nameservers: список через "|"
- labels: "type=<значение>"

Пример использования:
    exporter = HardwareCSVExporter(output_folder=".")
    exporter.export(machines)  # ./hardware.csv
"""

import csv
import logging
from pathlib import Path
from typing import Dict, List

from ..core.constants import CSV_COLUMNS, DEFAULT_CSV_FILENAME, LABEL_KEY, NAMESERVER_SEPARATOR
from ..core.models import Machine
from .base import BaseExporter

logger = logging.getLogger(__name__)


def join_nameservers(nameservers: List[str]) -> str:
    """
    Склеивает DNS-серверы через "|".

    Первый элемент без префикса, поэтому пустой первый элемент
    даёт ведущий "|".

    Example:
        join_nameservers(["", "121.63.58.96"])  # "|121.63.58.96"
    """
    return NAMESERVER_SEPARATOR.join(nameservers)


def machine_to_row(machine: Machine) -> Dict[str, str]:
    """Строка CSV для одной машины."""
    return {
        "hostname": machine.hostname,
        "bmc_ip": machine.bmc_ip_address,
        "bmc_username": machine.bmc_username,
        "bmc_password": machine.bmc_password,
        "mac": machine.mac_address,
        "ip_address": machine.ip_address,
        "netmask": machine.netmask,
        "gateway": machine.gateway,
        "nameservers": join_nameservers(machine.nameservers),
        "labels": f"{LABEL_KEY}={machine.machine_type}",
        "disk": machine.disk,
    }


class HardwareCSVExporter(BaseExporter):
    """
    Экспортер машин в CSV формат provisioning-инструмента.

    Attributes:
        delimiter: Разделитель полей
    """

    file_extension = ".csv"
    default_filename = DEFAULT_CSV_FILENAME

    def __init__(
        self,
        output_folder: str = ".",
        encoding: str = "utf-8",
        delimiter: str = ",",
    ):
        super().__init__(output_folder, encoding)
        self.delimiter = delimiter

    def _write(self, machines: List[Machine], file_path: Path) -> None:
        with open(file_path, "w", newline="", encoding=self.encoding) as f:
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS, delimiter=self.delimiter)
            writer.writeheader()
            writer.writerows(machine_to_row(machine) for machine in machines)

        logger.debug(f"CSV записан: {len(machines)} строк, {len(CSV_COLUMNS)} колонок")
