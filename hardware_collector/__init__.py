"""
Hardware Collector - выгрузка физических машин из NetBox для provisioning.

Читает устройства, интерфейсы и IP-диапазоны NetBox, собирает по одной
канонической записи на машину и пишет hardware.csv.

Примеры использования:
    # CLI
    python -m hardware_collector --host localhost:8000 --token xxx --tag eks-a

    # Python API
    from hardware_collector import NetBoxClient, HardwarePipeline, export_inventory

    client = NetBoxClient(url="localhost:8000", token="xxx")
    machines = HardwarePipeline(client).run(filter_tag="eks-a")
    export_inventory(machines, output_folder=".")
"""

__version__ = "1.0.0"

from .core.models import Machine
from .core.pipeline import HardwarePipeline, export_inventory
from .exporters import HardwareCSVExporter, JSONExporter, deserialize_machines, serialize_machines
from .netbox.client import NetBoxClient

__all__ = [
    "__version__",
    "HardwareCSVExporter",
    "HardwarePipeline",
    "JSONExporter",
    "Machine",
    "NetBoxClient",
    "deserialize_machines",
    "export_inventory",
    "serialize_machines",
]
