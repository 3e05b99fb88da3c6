"""Widget-specific contract builders (item, list, table, card)."""
from typing import List
from collection_contracts.core.widgets import WidgetKind
from collection_contracts.generators.contract_gen.render import (
    ANCHOR,
    BUTTON,
    FAST_INTERACTIVE,
    breadcrumbs_sub_contract,
    category_sub_contract,
    data_tag,
    fields_to_tags,
    interactive_tag,
    nested,
    sub_contract,
    variant_tag,
)
from collection_contracts.generators.contract_gen.types import (
    IDENTITY_FIELD,
    ContractDescriptor,
    ProcessedSchema,
    is_content_field,
)
from collection_contracts.generators.contract_gen.utils import to_pascal_case

SORT_DIRECTION_TYPE = '"enum (NONE | ASC | DESC)"'

DESCRIPTION_TEMPLATES = {
    WidgetKind.ITEM: "Item page for {label}",
    WidgetKind.LIST: "List page for {label}",
    WidgetKind.TABLE: "Table widget for {label}",
    WidgetKind.CARD: "Card widget for {label}",
}


def contract_name(collection_id: str, kind: WidgetKind) -> str:
    return to_pascal_case(collection_id) + kind.value


def _descriptor(schema: ProcessedSchema, kind: WidgetKind, tags: List[str]) -> ContractDescriptor:
    return ContractDescriptor(
        name=contract_name(schema.collection_id, kind),
        description=DESCRIPTION_TEMPLATES[kind].format(label=schema.label),
        serialized_tags="\n".join(tags),
    )


def card_tags(schema: ProcessedSchema, indent: int = 2) -> List[str]:
    """Tags of the card shape, shared by card widgets and list items."""
    tags = [
        data_tag(IDENTITY_FIELD, "string", indent=indent),
        data_tag("url", "string", "Full URL to item page", indent),
        interactive_tag("itemLink", ANCHOR, indent=indent),
    ]
    tags.extend(fields_to_tags(schema.card_fields, indent))
    return tags


def build_item_contract(schema: ProcessedSchema) -> ContractDescriptor:
    tags = [
        data_tag(IDENTITY_FIELD, "string", "Item ID"),
        interactive_tag("itemLink", ANCHOR, "Link to item"),
    ]
    tags.extend(fields_to_tags([f for f in schema.fields if is_content_field(f)]))

    if schema.has_category:
        tags.append(category_sub_contract())
    tags.append(breadcrumbs_sub_contract())

    return _descriptor(schema, WidgetKind.ITEM, tags)


def build_card_contract(schema: ProcessedSchema) -> ContractDescriptor:
    return _descriptor(schema, WidgetKind.CARD, card_tags(schema))


def build_list_contract(schema: ProcessedSchema) -> ContractDescriptor:
    tags = [
        sub_contract(
            "items",
            "Items in the list",
            card_tags(schema, nested(2)),
            repeated=True,
            track_by=IDENTITY_FIELD,
        ),
        data_tag("totalCount", "number", "Total items in collection"),
        variant_tag("hasMore", "boolean", FAST_INTERACTIVE, "More items available"),
        variant_tag("isLoading", "boolean", FAST_INTERACTIVE, "Loading state"),
        interactive_tag("loadMoreButton", BUTTON, "Load more trigger"),
    ]

    if schema.has_category:
        tags.append(category_sub_contract())
    tags.append(breadcrumbs_sub_contract())

    return _descriptor(schema, WidgetKind.LIST, tags)


def build_table_contract(schema: ProcessedSchema) -> ContractDescriptor:
    column_keys = ", ".join(f.key for f in schema.table_fields)
    inner = nested(2)
    cell_indent = nested(inner)

    columns = sub_contract(
        "columns",
        f"Table column definitions ({column_keys})" if column_keys else "Table column definitions",
        [
            data_tag("fieldName", "string", indent=inner),
            data_tag("label", "string", indent=inner),
            data_tag("sortable", "boolean", indent=inner),
            variant_tag("sortDirection", SORT_DIRECTION_TYPE, FAST_INTERACTIVE, indent=inner),
            interactive_tag("headerButton", BUTTON, indent=inner),
        ],
        repeated=True,
        track_by="fieldName",
    )

    cells = sub_contract(
        "cells",
        f"Cell values ({column_keys})" if column_keys else "Cell values",
        [
            data_tag("fieldName", "string", indent=cell_indent),
            data_tag("value", "string", "Formatted value", cell_indent),
        ],
        inner,
        repeated=True,
        track_by="fieldName",
    )

    rows = sub_contract(
        "rows",
        "Table rows",
        [
            data_tag(IDENTITY_FIELD, "string", indent=inner),
            data_tag("url", "string", indent=inner),
            interactive_tag("rowLink", ANCHOR, indent=inner),
            cells,
        ],
        repeated=True,
        track_by=IDENTITY_FIELD,
    )

    tags = [
        columns,
        rows,
        data_tag("totalCount", "number"),
        variant_tag("currentPage", "number", FAST_INTERACTIVE),
        data_tag("pageSize", "number"),
        data_tag("totalPages", "number"),
        interactive_tag("prevButton", BUTTON),
        interactive_tag("nextButton", BUTTON),
        variant_tag("hasPrev", "boolean", FAST_INTERACTIVE),
        variant_tag("hasNext", "boolean", FAST_INTERACTIVE),
    ]

    return _descriptor(schema, WidgetKind.TABLE, tags)


CONTRACT_BUILDERS = {
    WidgetKind.ITEM: build_item_contract,
    WidgetKind.LIST: build_list_contract,
    WidgetKind.TABLE: build_table_contract,
    WidgetKind.CARD: build_card_contract,
}
