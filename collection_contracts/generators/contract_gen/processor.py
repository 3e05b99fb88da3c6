"""
Resolve a raw collection schema plus its configuration into a ProcessedSchema.

Reference fields configured with ``mode: embed`` are resolved by fetching the
referenced collection and processing it recursively with the directive's
nested references. Unresolvable embeds degrade to plain references.

An embed may point back at a collection already being processed only when
its directive carries no nested references, so recursion always stops one
level below the repeated collection.
"""
import asyncio
import logging
from typing import AbstractSet, Awaitable, Callable, Dict, Optional
from collection_contracts.core.config import settings
from collection_contracts.generators.contract_gen.classify import classify, to_value_type
from collection_contracts.generators.contract_gen.types import (
    REFERENCE_CATEGORIES,
    ProcessedField,
    ProcessedSchema,
)
from collection_contracts.schemas.collections import (
    CollectionConfig,
    ComponentsConfig,
    FieldSchema,
    RawCollectionSchema,
    ReferenceDirective,
)

log = logging.getLogger(__name__)

CollectionFetcher = Callable[[str], Awaitable[Optional[RawCollectionSchema]]]


async def fetch_with_timeout(
    fetch_collection: CollectionFetcher,
    collection_id: str,
    timeout: Optional[float],
) -> Optional[RawCollectionSchema]:
    """Fetch a collection, treating a timeout as a failure (asyncio.TimeoutError)."""
    return await asyncio.wait_for(fetch_collection(collection_id), timeout=timeout)


def nested_config(collection_id: str, directive: ReferenceDirective) -> CollectionConfig:
    """Minimal config for an embedded collection carrying only the nested references."""
    return CollectionConfig(
        collection_id=collection_id,
        path_prefix="",
        slug_field="",
        references=directive.nested,
        components=ComponentsConfig(),
    )


async def _resolve_embedded(
    raw_field: FieldSchema,
    directive: ReferenceDirective,
    owner_id: str,
    fetch_collection: CollectionFetcher,
    timeout: Optional[float],
    path: AbstractSet[str],
) -> Optional[ProcessedSchema]:
    target_id = raw_field.referenced_collection_id
    extra = {"collection_id": owner_id}

    if not target_id:
        log.warning(f"Field '{raw_field.key}' has no referenced collection, not embedding", extra=extra)
        return None
    if target_id in path and directive.nested:
        log.warning(
            f"Field '{raw_field.key}' would embed {target_id} recursively, keeping it as a reference",
            extra=extra,
        )
        return None

    try:
        referenced = await fetch_with_timeout(fetch_collection, target_id, timeout)
    except asyncio.TimeoutError:
        log.warning(f"Timed out fetching referenced collection {target_id} for '{raw_field.key}'", extra=extra)
        return None
    except Exception as e:
        log.warning(f"Failed to fetch referenced collection {target_id} for '{raw_field.key}': {e}", extra=extra)
        return None

    if referenced is None:
        log.warning(f"Referenced collection {target_id} not found for '{raw_field.key}'", extra=extra)
        return None

    return await process_schema(
        referenced,
        nested_config(referenced.id or target_id, directive),
        fetch_collection,
        timeout=timeout,
        _path=path,
    )


async def _process_field(
    raw_field: FieldSchema,
    directives: Dict[str, ReferenceDirective],
    owner_id: str,
    fetch_collection: Optional[CollectionFetcher],
    timeout: Optional[float],
    path: AbstractSet[str],
) -> ProcessedField:
    category = classify(raw_field.key, raw_field.type)
    directive = directives.get(raw_field.key)
    embedded = category in REFERENCE_CATEGORIES and directive is not None and directive.mode == "embed"

    embedded_schema = None
    if embedded and fetch_collection is not None:
        embedded_schema = await _resolve_embedded(
            raw_field, directive, owner_id, fetch_collection, timeout, path
        )
        embedded = embedded_schema is not None

    return ProcessedField(
        key=raw_field.key,
        category=category,
        value_type=to_value_type(raw_field.type),
        display_name=raw_field.display_name,
        embedded=embedded,
        embedded_schema=embedded_schema,
    )


async def process_schema(
    collection: RawCollectionSchema,
    config: CollectionConfig,
    fetch_collection: Optional[CollectionFetcher] = None,
    *,
    timeout: Optional[float] = settings.fetch_timeout_seconds,
    _path: AbstractSet[str] = frozenset(),
) -> ProcessedSchema:
    """
    Process a raw collection schema into a ProcessedSchema.

    Args:
        collection: Raw schema from the data-collection store
        config: Configuration for this collection
        fetch_collection: Async lookup used to resolve embedded references;
            without it, embed requests stay unresolved
        timeout: Per-fetch timeout in seconds, defaults to
            settings.fetch_timeout_seconds (None waits forever)

    Returns:
        ProcessedSchema; never raises for unresolvable references
    """
    collection_id = collection.id or config.collection_id
    path = frozenset(_path) | {collection_id}
    directives = config.directives()

    fields = await asyncio.gather(*(
        _process_field(f, directives, collection_id, fetch_collection, timeout, path)
        for f in collection.fields
    ))

    return ProcessedSchema(
        collection_id=collection_id,
        display_name=collection.display_name,
        config=config,
        fields=tuple(fields),
    )
