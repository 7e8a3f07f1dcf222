"""
Типизированные исключения для Hardware Collector.

Иерархия:
    HardwareCollectorError (базовый)
    ├── AddressParseError (адрес или адрес/префикс не распарсился)
    ├── TypeMismatchError (custom field неожиданной формы)
    ├── UpstreamFetchError (ошибка NetBox API)
    ├── DecodeError (битая промежуточная кодировка)
    ├── AmbiguousMatchError (strict-политика: несколько кандидатов)
    ├── DuplicateHostnameError (два устройства с одним именем)
    ├── MissingInterfaceError (require_mac: у машины нет интерфейсов)
    ├── ExportError (ошибка записи CSV/JSON)
    ├── PipelineCancelledError (отмена до старта)
    ├── StageError (ошибка стадии pipeline)
    └── ConfigError (конфигурация)

Пример использования:
    from hardware_collector.core.exceptions import StageError, TypeMismatchError

    try:
        machines = pipeline.run(filter_tag="eks-a")
    except StageError as e:
        logger.error(f"Стадия {e.stage}: {e.cause}")
"""

from typing import Any, List, Optional


class HardwareCollectorError(Exception):
    """
    Базовое исключение для всех ошибок Hardware Collector.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов/отчётов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# === Ingestion Errors ===

class AddressParseError(HardwareCollectorError):
    """
    Значение не является валидным адресом или адресом с префиксом.

    Attributes:
        literal: Строка которая не распарсилась
        field: Поле из которого взято значение (если известно)

    Пример:
        raise AddressParseError("10.800.21.31/21", field="bmc_ip")
    """

    def __init__(
        self,
        literal: Any,
        field: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.literal = literal
        self.field = field
        details = details or {}
        details["literal"] = str(literal)[:100]
        if field:
            details["field"] = field
        super().__init__("Не удалось распарсить адрес", details)


class TypeMismatchError(HardwareCollectorError):
    """
    Custom field из NetBox отсутствует или имеет неожиданную форму.

    Attributes:
        field: Имя поля (bmc_ip, nameservers, ...)
        expected: Ожидаемая форма
        actual: Фактическая форма

    Пример:
        raise TypeMismatchError("bmc_ip", expected="mapping", actual="str")
    """

    def __init__(
        self,
        field: str,
        expected: str,
        actual: str,
        details: Optional[dict] = None,
    ):
        self.field = field
        self.expected = expected
        self.actual = actual
        details = details or {}
        details.update({"field": field, "expected": expected, "actual": actual})
        super().__init__(f"Неожиданный тип поля '{field}'", details)


class UpstreamFetchError(HardwareCollectorError):
    """
    Ошибка при запросе к NetBox.

    Attributes:
        stage: Стадия (devices, interfaces, ip_ranges)
        cause: Исходное исключение
        device: Hostname (для запросов интерфейсов)
    """

    def __init__(
        self,
        stage: str,
        cause: Exception,
        device: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.stage = stage
        self.cause = cause
        self.device = device
        details = details or {}
        details["stage"] = stage
        if device:
            details["device"] = device
        super().__init__(f"Ошибка запроса к NetBox: {cause}", details)


class DecodeError(HardwareCollectorError):
    """
    Промежуточная кодировка не разбирается обратно в список машин.

    Attributes:
        cause: Описание или исходное исключение
    """

    def __init__(self, cause: Any, details: Optional[dict] = None):
        self.cause = cause
        super().__init__(f"Ошибка декодирования машин: {cause}", details)


# === Matching Errors ===

class AmbiguousMatchError(HardwareCollectorError):
    """
    Strict-политика: для машины найдено несколько кандидатов.

    Attributes:
        hostname: Машина
        kind: Что сопоставлялось (interface, ip_range)
        candidates: Список кандидатов (MAC или границы диапазонов)
    """

    def __init__(
        self,
        hostname: str,
        kind: str,
        candidates: List[str],
        details: Optional[dict] = None,
    ):
        self.hostname = hostname
        self.kind = kind
        self.candidates = list(candidates)
        details = details or {}
        details.update({"device": hostname, "candidates": self.candidates})
        super().__init__(f"Неоднозначное сопоставление ({kind})", details)


class DuplicateHostnameError(HardwareCollectorError):
    """Hostname уже встречался в этом запуске."""

    def __init__(self, hostname: str):
        self.hostname = hostname
        super().__init__("Повторяющийся hostname", {"device": hostname})


class MissingInterfaceError(HardwareCollectorError):
    """require_mac: NetBox не вернул ни одного интерфейса."""

    def __init__(self, hostname: str):
        self.hostname = hostname
        super().__init__("Не найдено интерфейсов для устройства", {"device": hostname})


# === Export Errors ===

class ExportError(HardwareCollectorError):
    """
    Ошибка записи файла экспорта.

    Attributes:
        path: Путь к файлу
        cause: Исходное исключение (OSError)
    """

    def __init__(self, path: Any, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Ошибка записи файла: {cause}", {"path": str(path)})


# === Pipeline Errors ===

class PipelineCancelledError(HardwareCollectorError):
    """Запуск отменён до старта pipeline."""

    def __init__(self):
        super().__init__("Pipeline отменён до запуска")


class StageError(HardwareCollectorError):
    """
    Ошибка одной из стадий pipeline.

    Оборачивает исходное исключение с именем стадии.

    Attributes:
        stage: devices, interfaces, ip_ranges, serialize, export
        cause: Исходное исключение

    Пример:
        raise StageError("devices", e) from e
    """

    def __init__(self, stage: str, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Стадия '{stage}' завершилась ошибкой: {format_error_for_log(cause)}")


# === Config Errors ===

class ConfigError(HardwareCollectorError):
    """
    Ошибка конфигурации.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("Missing required field", config_file="config.yaml", key="netbox.url")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


# === Utility Functions ===

def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, HardwareCollectorError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"
