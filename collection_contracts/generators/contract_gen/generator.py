"""Orchestrator for contract generation."""
import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence
from collection_contracts.core.config import settings
from collection_contracts.core.config_loader import load_config, valid_collections
from collection_contracts.core.widgets import WidgetKind
from collection_contracts.generators.contract_gen.processor import (
    CollectionFetcher,
    fetch_with_timeout,
    process_schema,
)
from collection_contracts.generators.contract_gen.render_contract import CONTRACT_BUILDERS
from collection_contracts.generators.contract_gen.types import ContractDescriptor, ProcessedSchema
from collection_contracts.generators.contract_gen.writer import write_contracts
from collection_contracts.schemas.collections import CollectionConfig

log = logging.getLogger(__name__)


def _wants_item(c: CollectionConfig) -> bool:
    return c.components.item_page


def _wants_list(c: CollectionConfig) -> bool:
    return c.components.index_page or c.components.category_page


def _wants_table(c: CollectionConfig) -> bool:
    return c.components.table_widget


def _wants_card(c: CollectionConfig) -> bool:
    return c.components.card_widget


WIDGET_SELECTORS: Dict[WidgetKind, Callable[[CollectionConfig], bool]] = {
    WidgetKind.ITEM: _wants_item,
    WidgetKind.LIST: _wants_list,
    WidgetKind.TABLE: _wants_table,
    WidgetKind.CARD: _wants_card,
}


def requested_widgets(config: CollectionConfig) -> List[WidgetKind]:
    return [kind for kind, wants in WIDGET_SELECTORS.items() if wants(config)]


@dataclass
class ContractGenerator:
    """
    Generates contract descriptors for a set of collection configs.

    Collections are fetched and processed concurrently. A collection whose
    fetch fails, times out or returns nothing is logged and skipped; the
    rest of the batch always completes.
    """
    fetch_collection: CollectionFetcher
    timeout: Optional[float] = field(default_factory=lambda: settings.fetch_timeout_seconds)

    async def _process(self, config: CollectionConfig) -> Optional[ProcessedSchema]:
        extra = {"collection_id": config.collection_id}
        try:
            collection = await fetch_with_timeout(self.fetch_collection, config.collection_id, self.timeout)
        except asyncio.TimeoutError:
            log.warning("Timed out fetching collection schema", extra=extra)
            return None
        if collection is None:
            log.warning("Collection not found, skipping", extra=extra)
            return None
        return await process_schema(collection, config, self.fetch_collection, timeout=self.timeout)

    async def processed_schemas(
        self,
        configs: Sequence[CollectionConfig],
        wants: Optional[Callable[[CollectionConfig], bool]] = None,
    ) -> List[ProcessedSchema]:
        """Process every valid config selected by ``wants``, dropping failures."""
        selected = [c for c in valid_collections(configs) if wants is None or wants(c)]
        results = await asyncio.gather(
            *(self._process(c) for c in selected),
            return_exceptions=True,
        )

        schemas = []
        for config, result in zip(selected, results):
            if isinstance(result, BaseException):
                log.error(
                    "Failed to process collection: %s", result,
                    exc_info=result,
                    extra={"collection_id": config.collection_id},
                )
                continue
            if result is not None:
                schemas.append(result)
        return schemas

    def _build(self, kind: WidgetKind, schema: ProcessedSchema) -> ContractDescriptor:
        descriptor = CONTRACT_BUILDERS[kind](schema)
        log.info(
            f"Generated {kind.value.lower()} contract: {descriptor.name}",
            extra={"collection_id": schema.collection_id, "widget": kind.value},
        )
        return descriptor

    async def generate(self, kind: WidgetKind, configs: Sequence[CollectionConfig]) -> List[ContractDescriptor]:
        """Generate one widget kind for every collection that requests it."""
        schemas = await self.processed_schemas(configs, WIDGET_SELECTORS[kind])
        return [self._build(kind, schema) for schema in schemas]

    async def generate_all(self, configs: Sequence[CollectionConfig]) -> Dict[WidgetKind, List[ContractDescriptor]]:
        """Process each collection once and build every widget it requests."""
        schemas = await self.processed_schemas(configs, lambda c: bool(requested_widgets(c)))
        contracts: Dict[WidgetKind, List[ContractDescriptor]] = {kind: [] for kind in WidgetKind}
        for schema in schemas:
            for kind in requested_widgets(schema.config):
                contracts[kind].append(self._build(kind, schema))
        return contracts


async def generate_contract_files(
    config_path: Path,
    out_dir: Path,
    fetch_collection: CollectionFetcher,
    timeout: Optional[float] = None,
) -> List[Path]:
    """
    Load a collections config, generate every requested contract and write them.

    Args:
        config_path: Path to the collections YAML config
        out_dir: Output directory for contract files
        fetch_collection: Async lookup of raw collection schemas
        timeout: Per-fetch timeout, defaults to settings.fetch_timeout_seconds

    Returns:
        Paths of the written contract files
    """
    config = load_config(config_path)
    generator = ContractGenerator(
        fetch_collection=fetch_collection,
        timeout=timeout if timeout is not None else settings.fetch_timeout_seconds,
    )
    contracts = await generator.generate_all(config.collections)
    descriptors = [d for kind in WidgetKind for d in contracts[kind]]
    return write_contracts(descriptors, out_dir)
