"""
Typed Data — Канонический struct hash (EIP-712)

Чистые функции без сети и подписи:
- encode_type:  "Primary(type name,...)Dep(...)" (зависимости по алфавиту)
- type_hash:    keccak256(encode_type)
- encode_data:  type_hash ‖ enc(field_1) ‖ ... ‖ enc(field_n)
- hash_struct:  keccak256(encode_data)

Кодирование полей:
- struct            → hash_struct рекурсивно
- T[] / T[n]        → keccak256(enc(item_1) ‖ ... ‖ enc(item_k))
- string / bytes    → keccak256 содержимого
- атомарные типы    → ABI encode в 32 байта

Схема типов — mapping "TypeName" → [(field_name, field_type), ...].
Поля значений, не объявленные в схеме, игнорируются.
"""

import re
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from eth_abi import encode
from eth_utils import keccak, to_bytes, to_checksum_address


TypedField = Tuple[str, str]
TypeSchema = Mapping[str, Sequence[TypedField]]

_ARRAY_TYPE_RE = re.compile(r"^(.+)\[(\d*)\]$")


# =============================================================================
# TYPE ENCODING
# =============================================================================


def _strip_array(type_name: str) -> str:
    """'Person[][2]' → 'Person'"""
    match = _ARRAY_TYPE_RE.match(type_name)
    while match:
        type_name = match.group(1)
        match = _ARRAY_TYPE_RE.match(type_name)
    return type_name


def find_dependencies(
    primary_type: str, types: TypeSchema, found: Optional[List[str]] = None
) -> List[str]:
    """
    Все struct типы, достижимые из primary_type (включая его самого).

    Args:
        primary_type: Имя типа (допускается array суффикс)
        types: Схема типов
        found: Аккумулятор (для рекурсии)

    Returns:
        Список имён типов в порядке обхода
    """
    if found is None:
        found = []

    base = _strip_array(primary_type)
    if base in found or base not in types:
        return found

    found.append(base)
    for _, field_type in types[base]:
        find_dependencies(field_type, types, found)
    return found


def encode_type(primary_type: str, types: TypeSchema) -> str:
    """
    Строковое представление типа с зависимостями.

    Examples:
        >>> encode_type("Mail", {"Mail": [("from", "Person")], "Person": [("name", "string")]})
        'Mail(Person from)Person(string name)'
    """
    if primary_type not in types:
        raise ValueError(f"Unknown type: {primary_type}")

    deps = [d for d in find_dependencies(primary_type, types) if d != primary_type]
    ordered = [primary_type] + sorted(deps)

    return "".join(
        f"{name}({','.join(f'{field_type} {field_name}' for field_name, field_type in types[name])})"
        for name in ordered
    )


def type_hash(primary_type: str, types: TypeSchema) -> bytes:
    """keccak256(encode_type(primary_type))"""
    return keccak(text=encode_type(primary_type, types))


# =============================================================================
# DATA ENCODING
# =============================================================================


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return to_bytes(hexstr=value)
    raise TypeError(f"Expected bytes or hex string, got {type(value).__name__}")


def encode_field(field_type: str, value: Any, types: TypeSchema) -> bytes:
    """
    Кодирование одного значения в 32-байтовое слово.

    Raises:
        ValueError: Значение не кодируется объявленным типом
    """
    if field_type in types:
        return hash_struct(field_type, types, value)

    array_match = _ARRAY_TYPE_RE.match(field_type)
    if array_match:
        item_type, length = array_match.groups()
        if length and len(value) != int(length):
            raise ValueError(f"{field_type} expects {length} items, got {len(value)}")
        return keccak(b"".join(encode_field(item_type, item, types) for item in value))

    if field_type == "string":
        return keccak(text=value)

    if field_type == "bytes":
        return keccak(_as_bytes(value))

    if field_type == "address":
        value = to_checksum_address(value)
    elif field_type.startswith("bytes"):
        value = _as_bytes(value)

    return encode([field_type], [value])


def encode_data(primary_type: str, types: TypeSchema, values: Mapping[str, Any]) -> bytes:
    """
    type_hash ‖ закодированные поля в порядке объявления.

    Raises:
        ValueError: Если значение для объявленного поля отсутствует
    """
    if primary_type not in types:
        raise ValueError(f"Unknown type: {primary_type}")

    encoded = [type_hash(primary_type, types)]
    for field_name, field_type in types[primary_type]:
        if field_name not in values:
            raise ValueError(f"{primary_type}.{field_name} is missing")
        encoded.append(encode_field(field_type, values[field_name], types))
    return b"".join(encoded)


def hash_struct(primary_type: str, types: TypeSchema, values: Mapping[str, Any]) -> bytes:
    """
    Канонический struct hash.

    Детерминирован: одинаковые (schema, values) всегда дают одинаковый hash.

    Args:
        primary_type: Имя хэшируемого типа
        types: Схема типов
        values: Значения полей

    Returns:
        32 байта keccak256
    """
    return keccak(encode_data(primary_type, types, values))
