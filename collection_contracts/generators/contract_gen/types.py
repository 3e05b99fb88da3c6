"""Dataclasses for contract generation."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Optional, Tuple
from collection_contracts.schemas.collections import CategoryConfig, CollectionConfig

ValueType = Literal["string", "number", "boolean"]

IDENTITY_FIELD = "_id"


class FieldCategory(str, Enum):
    SIMPLE = "simple"
    IMAGE = "image"
    MEDIA = "media"
    ADDRESS = "address"
    REFERENCE = "reference"
    MULTI_REFERENCE = "multiReference"
    RICH_CONTENT = "richContent"
    SYSTEM = "system"


REFERENCE_CATEGORIES = frozenset({FieldCategory.REFERENCE, FieldCategory.MULTI_REFERENCE})


@dataclass(frozen=True)
class ProcessedField:
    """A raw field after classification and optional reference embedding."""
    key: str
    category: FieldCategory
    value_type: ValueType
    display_name: Optional[str] = None
    embedded: bool = False
    embedded_schema: Optional[ProcessedSchema] = None


def is_card_field(f: ProcessedField) -> bool:
    """Fields suitable for card/list display (no system, references or rich content)."""
    return f.category not in (
        FieldCategory.SYSTEM,
        FieldCategory.REFERENCE,
        FieldCategory.MULTI_REFERENCE,
        FieldCategory.RICH_CONTENT,
    )


def is_table_field(f: ProcessedField) -> bool:
    return f.category == FieldCategory.SIMPLE


def is_reference_field(f: ProcessedField) -> bool:
    return f.category in REFERENCE_CATEGORIES


def is_content_field(f: ProcessedField) -> bool:
    return f.category != FieldCategory.SYSTEM


@dataclass(frozen=True)
class ProcessedSchema:
    """
    Processed collection schema shared by all contract builders.

    The derived field sets are recomputed from ``fields`` on every access.
    """
    collection_id: str
    config: CollectionConfig
    fields: Tuple[ProcessedField, ...]
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or self.collection_id

    @property
    def card_fields(self) -> List[ProcessedField]:
        return [f for f in self.fields if is_card_field(f)]

    @property
    def table_fields(self) -> List[ProcessedField]:
        return [f for f in self.fields if is_table_field(f)]

    @property
    def reference_fields(self) -> List[ProcessedField]:
        return [f for f in self.fields if is_reference_field(f)]

    @property
    def embedded_references(self) -> List[ProcessedField]:
        return [f for f in self.reference_fields if f.embedded]

    @property
    def has_category(self) -> bool:
        return self.config.category is not None

    @property
    def category(self) -> Optional[CategoryConfig]:
        return self.config.category


@dataclass(frozen=True)
class ContractDescriptor:
    """A generated contract; serialized_tags holds the tag lines only."""
    name: str
    description: str
    serialized_tags: str

    def render(self) -> str:
        """Full descriptor text as consumed by the host compiler."""
        return f"name: {self.name}\ndescription: {self.description}\ntags:\n{self.serialized_tags}"
