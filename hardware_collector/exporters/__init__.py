"""
Модули экспорта машин.

- CSV (.csv) - файл для provisioning-инструмента
- JSON (.json) - промежуточная кодировка

Пример использования:
    from hardware_collector.exporters import HardwareCSVExporter

    HardwareCSVExporter(output_folder=".").export(machines)
"""

from .base import BaseExporter
from .csv_exporter import HardwareCSVExporter, join_nameservers, machine_to_row
from .json_exporter import JSONExporter, deserialize_machines, serialize_machines

__all__ = [
    "BaseExporter",
    "HardwareCSVExporter",
    "JSONExporter",
    "deserialize_machines",
    "join_nameservers",
    "machine_to_row",
    "serialize_machines",
]
