"""
Константы Hardware Collector.

Имена custom fields NetBox, теги, метки и колонки CSV.
"""

# Custom fields устройства
CF_BMC_IP = "bmc_ip"
CF_BMC_USERNAME = "bmc_username"
CF_BMC_PASSWORD = "bmc_password"
CF_DISK = "disk"

# Custom fields IP-диапазона
CF_GATEWAY = "gateway"
CF_NAMESERVERS = "nameservers"

# Ключ адреса внутри вложенного custom field (IPAM object)
ADDRESS_KEY = "address"

# Теги
CONTROL_PLANE_TAG = "control-plane"
DEFAULT_INTERFACE_TAG = "eks-a"
DEFAULT_FILTER_TAG = "eks-a"

# Метки машины
LABEL_KEY = "type"
CONTROL_PLANE_LABEL = "control-plane"
WORKER_PLANE_LABEL = "worker-plane"

# CSV для provisioning
CSV_COLUMNS = [
    "hostname",
    "bmc_ip",
    "bmc_username",
    "bmc_password",
    "mac",
    "ip_address",
    "netmask",
    "gateway",
    "nameservers",
    "labels",
    "disk",
]
NAMESERVER_SEPARATOR = "|"
DEFAULT_CSV_FILENAME = "hardware.csv"

# Стадии pipeline
STAGE_DEVICES = "devices"
STAGE_INTERFACES = "interfaces"
STAGE_IP_RANGES = "ip_ranges"
STAGE_SERIALIZE = "serialize"
STAGE_EXPORT = "export"
