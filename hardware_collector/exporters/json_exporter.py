"""
Промежуточная JSON-кодировка машин.

Массив объектов с ключами Hostname, IPAddress, Netmask, Gateway,
Nameservers, MACAddress, Disk, Labels, BMCIPAddress, BMCUsername,
BMCPassword в этом порядке, с отступом для читаемости.

    data = serialize_machines(machines)
    assert deserialize_machines(data) == machines
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from ..core.exceptions import DecodeError
from ..core.models import Machine
from .base import BaseExporter

logger = logging.getLogger(__name__)

JSON_INDENT = 1


def serialize_machines(machines: List[Machine], indent: int = JSON_INDENT) -> bytes:
    """
    Кодирует машины в JSON.

    Порядок машин и ключей сохраняется, вывод детерминирован.
    """
    payload = [machine.to_dict() for machine in machines]
    return json.dumps(payload, indent=indent, ensure_ascii=False).encode("utf-8")


def deserialize_machines(data: Union[bytes, str]) -> List[Machine]:
    """
    Декодирует машины из JSON.

    Raises:
        DecodeError: Битый JSON или неверная структура
    """
    try:
        payload = json.loads(data)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError(e) from e

    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DecodeError(f"ожидался массив, получен {type(payload).__name__}")

    machines = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise DecodeError(f"элемент #{index}: ожидался объект, получен {type(item).__name__}")
        try:
            machines.append(Machine.from_dict(item))
        except ValueError as e:
            raise DecodeError(f"элемент #{index}: {e}") from e

    logger.debug(f"Промежуточная кодировка прочитана: {len(machines)} машин")
    return machines


class JSONExporter(BaseExporter):
    """
    Запись промежуточной кодировки в файл (для отладки и повторного запуска).

    Example:
        JSONExporter(output_folder="out").export(machines, "hardware.json")
    """

    file_extension = ".json"

    def __init__(self, output_folder: str = ".", encoding: str = "utf-8", indent: int = JSON_INDENT):
        super().__init__(output_folder, encoding)
        self.indent = indent

    def _write(self, machines: List[Machine], file_path: Path) -> None:
        file_path.write_bytes(serialize_machines(machines, indent=self.indent))
        logger.debug(f"JSON записан: {len(machines)} записей")
