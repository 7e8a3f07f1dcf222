"""
Загрузчик конфигурации из config.yaml.

Порядок: значения по умолчанию -> YAML -> переменные окружения.
Результат проверяется pydantic-схемой (core/config_schema.py).

Доступ к настройкам через точку:
    config.netbox.url
    config.output.csv_filename
    config.matching.range_policy
"""

import copy
import logging
import os
from typing import Any, Optional

import yaml

from .core.config_schema import validate_config
from .core.constants import DEFAULT_CSV_FILENAME, DEFAULT_FILTER_TAG
from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_SEARCH_PATHS = [
    "config.yaml",
    "config.yml",
    ".hardware_collector.yaml",
]

DEFAULTS = {
    "netbox": {
        "url": "",
        "token": "",
        "verify_ssl": True,
        "timeout": 30,
        "filter_tag": DEFAULT_FILTER_TAG,
    },
    "output": {
        "output_folder": ".",
        "csv_filename": DEFAULT_CSV_FILENAME,
        "json_filename": None,
        "csv_delimiter": ",",
    },
    "matching": {
        "interface_policy": "last",
        "range_policy": "last",
        "interface_tag": "eks-a",
        "control_plane_tag": "control-plane",
        "require_mac": False,
    },
    "logging": {
        "level": "INFO",
        "json_format": False,
        "console": True,
        "file_path": None,
        "max_bytes": 10 * 1024 * 1024,
        "backup_count": 5,
    },
    "debug": False,
}


class ConfigSection:
    """Секция конфигурации с доступом через точку."""

    def __init__(self, data: Optional[dict] = None):
        self._data = data or {}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Получить значение с дефолтом."""
        return self._data.get(key, default)

    def to_dict(self) -> dict:
        return dict(self._data)

    def __repr__(self) -> str:
        return f"ConfigSection({self._data})"


class Config:
    """
    Главный класс конфигурации.

    Пример:
        config.netbox.filter_tag   # "eks-a"
        config.output.csv_filename # "hardware.csv"
    """

    def __init__(self):
        self.config_file: Optional[str] = None
        self._data = copy.deepcopy(DEFAULTS)

    def reload(self, config_file: Optional[str] = None) -> None:
        """
        Перечитывает конфигурацию.

        Raises:
            ConfigError: Файл не найден, битый YAML или невалидные значения
        """
        self._data = copy.deepcopy(DEFAULTS)
        self.config_file = self._find_file(config_file)
        if self.config_file:
            self._merge_dict(self._data, self._read_yaml(self.config_file))
        self._load_env()
        validated = validate_config(self._data, config_file=self.config_file)
        self._data = validated.model_dump()

    def _find_file(self, config_file: Optional[str]) -> Optional[str]:
        if config_file:
            if not os.path.exists(config_file):
                raise ConfigError("Файл конфигурации не найден", config_file=config_file)
            return config_file
        for path in CONFIG_SEARCH_PATHS:
            if os.path.exists(path):
                return path
        return None

    @staticmethod
    def _read_yaml(config_file: str) -> dict:
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Ошибка чтения конфигурации: {e}", config_file=config_file) from e
        if not isinstance(data, dict):
            raise ConfigError("Корень конфигурации должен быть словарём", config_file=config_file)
        logger.debug(f"Конфигурация загружена из {config_file}")
        return data

    def _load_env(self) -> None:
        """Загружает настройки из переменных окружения."""
        if os.getenv("NETBOX_URL"):
            self._data["netbox"]["url"] = os.getenv("NETBOX_URL")
        if os.getenv("NETBOX_TOKEN"):
            self._data["netbox"]["token"] = os.getenv("NETBOX_TOKEN")

    def _merge_dict(self, base: dict, override: dict) -> None:
        """Рекурсивно мержит словари."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_dict(base[key], value)
            else:
                base[key] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value


# Глобальный экземпляр
config = Config()


def load_config(config_file: Optional[str] = None) -> Config:
    """
    Загружает конфигурацию из файла.

    Args:
        config_file: Путь к YAML файлу (опционально)

    Returns:
        Config: Объект конфигурации
    """
    config.reload(config_file)
    return config
