from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Raw schemas returned by the data-collection store
# ---------------------------------------------------------------------------

class FieldSchema(_CamelModel):
    key: str
    display_name: Optional[str] = None
    type: str = "TEXT"
    required: bool = False
    referenced_collection_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_reference_metadata(cls, data: Any) -> Any:
        """Pull the referenced collection id out of the store's typeMetadata block."""
        if not isinstance(data, dict) or data.get("referencedCollectionId"):
            return data
        metadata = data.get("typeMetadata") or {}
        for kind in ("reference", "multiReference"):
            target = (metadata.get(kind) or {}).get("referencedCollectionId")
            if target:
                return {**data, "referencedCollectionId": target}
        return data


class RawCollectionSchema(_CamelModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    display_name: Optional[str] = None
    fields: List[FieldSchema] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Per-collection configuration
# ---------------------------------------------------------------------------

class ReferenceDirective(_CamelModel):
    field_name: str
    mode: Literal["embed", "link"] = "link"
    nested: List[ReferenceDirective] = Field(
        default_factory=list,
        validation_alias=AliasChoices("nested", "references"),
    )

    @field_validator("nested", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class CategoryConfig(_CamelModel):
    reference_field: str = ""
    category_slug_field: str = ""


class ComponentsConfig(_CamelModel):
    item_page: bool = False
    index_page: bool = False
    category_page: bool = False
    table_widget: bool = False
    card_widget: bool = False


class CollectionConfig(_CamelModel):
    collection_id: str = ""
    path_prefix: str = ""
    slug_field: str = ""
    references: List[ReferenceDirective] = Field(default_factory=list)
    category: Optional[CategoryConfig] = None
    components: Optional[ComponentsConfig] = None

    @field_validator("references", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def directives(self) -> Dict[str, ReferenceDirective]:
        """Reference directives keyed by field name."""
        return {r.field_name: r for r in self.references}


class DataConfig(_CamelModel):
    collections: List[CollectionConfig] = Field(default_factory=list)
