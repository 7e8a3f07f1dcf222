"""
Core модули Hardware Collector.

- models: Machine и сырые записи NetBox
- domain: нормализация устройств, MAC, сетевые настройки
- pipeline: последовательный запуск стадий
- exceptions: типизированные ошибки
- context: RunContext (run_id, отмена)
- logging: JSON/Human-readable логирование
"""

from .context import RunContext, get_current_context, set_current_context
from .exceptions import (
    AddressParseError,
    DecodeError,
    HardwareCollectorError,
    StageError,
    TypeMismatchError,
    UpstreamFetchError,
)
from .logging import LogConfig, get_logger, setup_logging, setup_logging_from_config
from .models import Machine, MatchingOptions, MatchPolicy
from .pipeline import HardwarePipeline, export_inventory

__all__ = [
    "AddressParseError",
    "DecodeError",
    "HardwareCollectorError",
    "HardwarePipeline",
    "LogConfig",
    "Machine",
    "MatchPolicy",
    "MatchingOptions",
    "RunContext",
    "StageError",
    "TypeMismatchError",
    "UpstreamFetchError",
    "export_inventory",
    "get_current_context",
    "get_logger",
    "set_current_context",
    "setup_logging",
    "setup_logging_from_config",
]
