"""
Pydantic схемы для валидации config.yaml.

Валидация происходит при загрузке конфигурации.
Ошибки валидации выбрасывают ConfigError.

Пример использования:
    from hardware_collector.core.config_schema import validate_config

    config_dict = yaml.safe_load(open("config.yaml"))
    validated = validate_config(config_dict)  # raises ConfigError on failure
"""

from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .exceptions import ConfigError


class NetBoxConfig(BaseModel):
    """Настройки NetBox."""
    url: str = ""
    token: str = ""
    verify_ssl: bool = True
    timeout: int = Field(default=30, ge=1, le=300)
    filter_tag: Optional[str] = "eks-a"

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Хост или URL без пробелов; схема необязательна (localhost:8000)."""
        if v and any(ch.isspace() for ch in v.strip()):
            raise PydanticCustomError("invalid_url", "NetBox URL не должен содержать пробелов")
        return v.strip()


class OutputConfig(BaseModel):
    """Настройки вывода."""
    output_folder: str = "."
    csv_filename: str = Field(default="hardware.csv", min_length=1)
    json_filename: Optional[str] = None
    csv_delimiter: str = Field(default=",", min_length=1, max_length=1)


class MatchingConfig(BaseModel):
    """Настройки сопоставления интерфейсов и IP-диапазонов."""
    interface_policy: str = Field(default="last", pattern="^(last|first|strict)$")
    range_policy: str = Field(default="last", pattern="^(last|first|strict)$")
    interface_tag: str = Field(default="eks-a", min_length=1)
    control_plane_tag: str = Field(default="control-plane", min_length=1)
    require_mac: bool = False


class LoggingConfig(BaseModel):
    """Настройки логирования."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_format: bool = False
    console: bool = True
    file_path: Optional[str] = None
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=1, le=100)


class AppConfig(BaseModel):
    """Полная конфигурация приложения."""
    netbox: NetBoxConfig = Field(default_factory=NetBoxConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    debug: bool = False


def validate_config(data: dict, config_file: Optional[str] = None) -> AppConfig:
    """
    Валидирует словарь конфигурации.

    Args:
        data: Словарь из YAML (смерженный с дефолтами)
        config_file: Путь к файлу для текста ошибки

    Returns:
        AppConfig: Проверенная конфигурация

    Raises:
        ConfigError: Значение не прошло валидацию
    """
    try:
        return AppConfig.model_validate(data or {})
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigError(
            f"Ошибка конфигурации: {first.get('msg')}",
            config_file=config_file,
            key=key or None,
        ) from e
