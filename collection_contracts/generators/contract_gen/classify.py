"""Raw field type classification."""
from enum import Enum
from typing import Dict, Optional
from collection_contracts.generators.contract_gen.types import FieldCategory, ValueType
from collection_contracts.generators.contract_gen.utils import to_snake_case

SYSTEM_FIELD_PREFIX = "_"


class RawFieldType(str, Enum):
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIME = "TIME"
    RICH_TEXT = "RICH_TEXT"
    RICH_CONTENT = "RICH_CONTENT"
    URL = "URL"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    DOCUMENT = "DOCUMENT"
    REFERENCE = "REFERENCE"
    MULTI_REFERENCE = "MULTI_REFERENCE"
    ARRAY = "ARRAY"
    OBJECT = "OBJECT"
    TAGS = "TAGS"
    ADDRESS = "ADDRESS"


_CATEGORY_BY_TYPE: Dict[RawFieldType, FieldCategory] = {
    RawFieldType.TEXT: FieldCategory.SIMPLE,
    RawFieldType.NUMBER: FieldCategory.SIMPLE,
    RawFieldType.BOOLEAN: FieldCategory.SIMPLE,
    RawFieldType.DATE: FieldCategory.SIMPLE,
    RawFieldType.DATETIME: FieldCategory.SIMPLE,
    RawFieldType.TIME: FieldCategory.SIMPLE,
    RawFieldType.RICH_TEXT: FieldCategory.RICH_CONTENT,
    RawFieldType.RICH_CONTENT: FieldCategory.RICH_CONTENT,
    RawFieldType.URL: FieldCategory.SIMPLE,
    RawFieldType.IMAGE: FieldCategory.IMAGE,
    RawFieldType.VIDEO: FieldCategory.MEDIA,
    RawFieldType.AUDIO: FieldCategory.MEDIA,
    RawFieldType.DOCUMENT: FieldCategory.SIMPLE,
    RawFieldType.REFERENCE: FieldCategory.REFERENCE,
    RawFieldType.MULTI_REFERENCE: FieldCategory.MULTI_REFERENCE,
    RawFieldType.ARRAY: FieldCategory.SIMPLE,
    RawFieldType.OBJECT: FieldCategory.SIMPLE,
    RawFieldType.TAGS: FieldCategory.SIMPLE,
    RawFieldType.ADDRESS: FieldCategory.ADDRESS,
}

_VALUE_TYPE_BY_TYPE: Dict[RawFieldType, ValueType] = {
    t: "string" for t in RawFieldType
}
_VALUE_TYPE_BY_TYPE[RawFieldType.NUMBER] = "number"
_VALUE_TYPE_BY_TYPE[RawFieldType.BOOLEAN] = "boolean"

# Adding a RawFieldType member without a category fails at import time.
_unmapped = set(RawFieldType) - set(_CATEGORY_BY_TYPE)
if _unmapped:
    raise RuntimeError(f"Raw field types without a category: {sorted(t.value for t in _unmapped)}")


def normalize_raw_type(raw_type: Optional[str]) -> Optional[RawFieldType]:
    """Map 'MULTI_REFERENCE', 'multiReference' or 'multi_reference' to the same member."""
    if not raw_type:
        return None
    try:
        return RawFieldType(to_snake_case(raw_type.strip()).upper())
    except ValueError:
        return None


def classify(key: str, raw_type: Optional[str]) -> FieldCategory:
    """Semantic category of a field; unknown types are simple."""
    if key.startswith(SYSTEM_FIELD_PREFIX):
        return FieldCategory.SYSTEM
    field_type = normalize_raw_type(raw_type)
    if field_type is None:
        return FieldCategory.SIMPLE
    return _CATEGORY_BY_TYPE[field_type]


def to_value_type(raw_type: Optional[str]) -> ValueType:
    field_type = normalize_raw_type(raw_type)
    if field_type is None:
        return "string"
    return _VALUE_TYPE_BY_TYPE[field_type]
