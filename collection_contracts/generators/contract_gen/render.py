"""Tag builders for contract generation (plain string templates).

Every builder returns text for one tag at the given indentation. A
sub-contract nests its tags two spaces below its own ``tags:`` key.
"""
from typing import List, Optional
from collection_contracts.generators.contract_gen.types import (
    IDENTITY_FIELD,
    FieldCategory,
    ProcessedField,
    ProcessedSchema,
    is_content_field,
)
from collection_contracts.generators.contract_gen.utils import pad

ANCHOR = "HTMLAnchorElement"
BUTTON = "HTMLButtonElement"
FAST_INTERACTIVE = "fast+interactive"


def _description(description: Optional[str]) -> str:
    return f", description: {description}" if description else ""


def data_tag(key: str, value_type: str, description: Optional[str] = None, indent: int = 2) -> str:
    return f"{pad(indent)}- {{tag: {key}, type: data, dataType: {value_type}{_description(description)}}}"


def interactive_tag(key: str, element_type: str, description: Optional[str] = None, indent: int = 2) -> str:
    return f"{pad(indent)}- {{tag: {key}, type: interactive, elementType: {element_type}{_description(description)}}}"


def variant_tag(key: str, value_type: str, phase: str, description: Optional[str] = None, indent: int = 2) -> str:
    return (
        f"{pad(indent)}- {{tag: {key}, type: variant, dataType: {value_type}, "
        f"phase: {phase}{_description(description)}}}"
    )


def sub_contract(
    key: str,
    description: str,
    tags: List[str],
    indent: int = 2,
    repeated: bool = False,
    track_by: Optional[str] = None,
) -> str:
    """
    Render a sub-contract around already-rendered nested tags.

    Nested tags must have been rendered at ``indent + 4``.
    """
    prefix = pad(indent)
    lines = [
        f"{prefix}- tag: {key}",
        f"{prefix}  type: sub-contract",
    ]
    if repeated:
        lines.append(f"{prefix}  repeated: true")
    if track_by:
        lines.append(f"{prefix}  trackBy: {track_by}")
    lines.append(f"{prefix}  description: {description}")
    lines.append(f"{prefix}  tags:")
    lines.extend(tags)
    return "\n".join(lines)


def nested(indent: int) -> int:
    """Indentation of the tags inside a sub-contract rendered at ``indent``."""
    return indent + 4


# ---------------------------------------------------------------------------
# Fixed-shape sub-contracts
# ---------------------------------------------------------------------------

def image_sub_contract(key: str, description: Optional[str] = None, indent: int = 2) -> str:
    inner = nested(indent)
    return sub_contract(key, description or key, [
        data_tag("url", "string", indent=inner),
        data_tag("altText", "string", indent=inner),
        data_tag("width", "number", indent=inner),
        data_tag("height", "number", indent=inner),
    ], indent)


def media_sub_contract(key: str, description: Optional[str] = None, indent: int = 2) -> str:
    inner = nested(indent)
    return sub_contract(key, description or key, [
        data_tag("url", "string", indent=inner),
        data_tag("title", "string", indent=inner),
    ], indent)


def address_sub_contract(key: str, description: Optional[str] = None, indent: int = 2) -> str:
    inner = nested(indent)
    return sub_contract(key, description or key, [
        data_tag("formatted", "string", indent=inner),
        data_tag("city", "string", indent=inner),
        data_tag("country", "string", indent=inner),
    ], indent)


def category_sub_contract(indent: int = 2) -> str:
    inner = nested(indent)
    return sub_contract("category", "Current category", [
        data_tag(IDENTITY_FIELD, "string", indent=inner),
        data_tag("slug", "string", indent=inner),
        data_tag("title", "string", indent=inner),
        data_tag("description", "string", indent=inner),
        interactive_tag("categoryLink", ANCHOR, indent=inner),
    ], indent)


def breadcrumbs_sub_contract(indent: int = 2) -> str:
    inner = nested(indent)
    return sub_contract("breadcrumbs", "Navigation breadcrumbs", [
        data_tag("slug", "string", indent=inner),
        data_tag("title", "string", indent=inner),
        data_tag("url", "string", indent=inner),
        interactive_tag("link", ANCHOR, indent=inner),
    ], indent, repeated=True, track_by="slug")


def embedded_reference_sub_contract(field: ProcessedField, indent: int = 2) -> str:
    """
    Sub-contract for an embedded reference field.

    Uses the referenced collection's processed schema when it was resolved,
    otherwise a minimal _id/title/slug shape. Multi-references are repeated
    and tracked by _id.
    """
    inner = nested(indent)
    if field.embedded_schema is not None:
        tags = schema_to_tags(field.embedded_schema, inner)
    else:
        tags = [
            data_tag(IDENTITY_FIELD, "string", indent=inner),
            data_tag("title", "string", indent=inner),
            data_tag("slug", "string", indent=inner),
        ]

    is_multi = field.category == FieldCategory.MULTI_REFERENCE
    return sub_contract(
        field.key,
        field.display_name or field.key,
        tags,
        indent,
        repeated=is_multi,
        track_by=IDENTITY_FIELD if is_multi else None,
    )


# ---------------------------------------------------------------------------
# Field to tag conversion
# ---------------------------------------------------------------------------

def _reference_tag(field: ProcessedField, indent: int) -> str:
    if field.embedded:
        return embedded_reference_sub_contract(field, indent)
    if field.category == FieldCategory.MULTI_REFERENCE:
        return data_tag(field.key, "string", "Reference IDs", indent)
    return data_tag(field.key, "string", "Reference ID", indent)


def field_to_tag(field: ProcessedField, indent: int = 2) -> str:
    """Render a processed field; system fields other than _id render as ''."""
    category = field.category
    if category == FieldCategory.SYSTEM:
        return data_tag(IDENTITY_FIELD, "string", "Item ID", indent) if field.key == IDENTITY_FIELD else ""
    if category == FieldCategory.IMAGE:
        return image_sub_contract(field.key, field.display_name, indent)
    if category == FieldCategory.MEDIA:
        return media_sub_contract(field.key, field.display_name, indent)
    if category == FieldCategory.ADDRESS:
        return address_sub_contract(field.key, field.display_name, indent)
    if category in (FieldCategory.REFERENCE, FieldCategory.MULTI_REFERENCE):
        return _reference_tag(field, indent)
    if category == FieldCategory.RICH_CONTENT:
        return data_tag(field.key, "string", field.display_name, indent)
    return data_tag(field.key, field.value_type, field.display_name, indent)


def fields_to_tags(fields: List[ProcessedField], indent: int = 2) -> List[str]:
    tags = []
    for f in fields:
        tag = field_to_tag(f, indent)
        if tag:
            tags.append(tag)
    return tags


def schema_to_tags(schema: ProcessedSchema, indent: int = 2) -> List[str]:
    """Identity tag followed by every non-system field of the schema."""
    tags = [data_tag(IDENTITY_FIELD, "string", "Item ID", indent)]
    tags.extend(fields_to_tags([f for f in schema.fields if is_content_field(f)], indent))
    return tags
