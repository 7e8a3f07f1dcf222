"""
Проверка формы custom fields NetBox.

NetBox отдаёт custom fields как свободный JSON. Каждое поле проверяется
здесь ровно один раз; дальше по pipeline идут только типизированные
значения. Любое расхождение формы -> TypeMismatchError.

Формы полей:
    bmc_ip        {"address": "192.168.2.5/22", ...}     (IPAM object)
    bmc_username  "root"
    nameservers   [{"address": "1.1.1.1/32"}, ...]       (multi-object)
"""

from typing import Any, List, Mapping

from ..constants import ADDRESS_KEY
from ..exceptions import TypeMismatchError

_MISSING = object()

SHAPE_MAPPING = "mapping"
SHAPE_STRING = "string"
SHAPE_LIST = "list"
SHAPE_ADDRESS_OBJECT = "mapping with 'address' string"
SHAPE_ADDRESS_LIST = "list of mappings with 'address' string"


def shape_of(value: Any) -> str:
    """Название фактической формы значения для текста ошибки."""
    if value is _MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, Mapping):
        return SHAPE_MAPPING
    if isinstance(value, str):
        return SHAPE_STRING
    if isinstance(value, (list, tuple)):
        return SHAPE_LIST
    return type(value).__name__


def custom_fields_of(value: Any, owner: str = "custom_fields") -> Mapping[str, Any]:
    """Проверяет что custom fields объекта пришли словарём."""
    if not isinstance(value, Mapping):
        raise TypeMismatchError(owner, expected=SHAPE_MAPPING, actual=shape_of(value))
    return value


def require_string(fields: Mapping[str, Any], name: str) -> str:
    """
    Строковое custom field.

    Raises:
        TypeMismatchError: Поле отсутствует или не строка
    """
    value = fields.get(name, _MISSING)
    if not isinstance(value, str):
        raise TypeMismatchError(name, expected=SHAPE_STRING, actual=shape_of(value))
    return value


def _address_from(value: Any, name: str, expected: str) -> str:
    if not isinstance(value, Mapping):
        raise TypeMismatchError(name, expected=expected, actual=shape_of(value))
    address = value.get(ADDRESS_KEY, _MISSING)
    if not isinstance(address, str):
        raise TypeMismatchError(
            f"{name}.{ADDRESS_KEY}", expected=SHAPE_STRING, actual=shape_of(address)
        )
    return address


def require_address(fields: Mapping[str, Any], name: str) -> str:
    """
    Custom field типа IPAM object: возвращает строку адрес/префикс.

    Raises:
        TypeMismatchError: Поле не словарь или в нём нет строки address
    """
    return _address_from(fields.get(name, _MISSING), name, SHAPE_ADDRESS_OBJECT)


def require_address_list(fields: Mapping[str, Any], name: str) -> List[str]:
    """
    Custom field типа multi-object: адреса в исходном порядке.

    Raises:
        TypeMismatchError: Поле не список или элемент неверной формы
    """
    value = fields.get(name, _MISSING)
    if not isinstance(value, (list, tuple)):
        raise TypeMismatchError(name, expected=SHAPE_ADDRESS_LIST, actual=shape_of(value))
    return [_address_from(item, name, SHAPE_ADDRESS_OBJECT) for item in value]
