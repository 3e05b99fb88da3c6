"""Tests for contract generation orchestration and file output."""
import asyncio
import logging
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, patch
import pytest
from collection_contracts.core.logging import ContextFormatter, configure_logging
from collection_contracts.core.widgets import WidgetKind
from collection_contracts.generators.contract_gen.generator import (
    ContractGenerator,
    generate_contract_files,
    requested_widgets,
)
from collection_contracts.generators.contract_gen.types import ContractDescriptor
from collection_contracts.generators.contract_gen.writer import write_contracts
from collection_contracts.schemas.collections import (
    CollectionConfig,
    ComponentsConfig,
    RawCollectionSchema,
)


SCHEMAS = {
    "BlogPosts": RawCollectionSchema.model_validate({
        "_id": "BlogPosts",
        "fields": [{"key": "_id", "type": "TEXT"}, {"key": "title", "type": "TEXT"}],
    }),
    "Authors": RawCollectionSchema.model_validate({
        "_id": "Authors",
        "fields": [{"key": "name", "type": "TEXT"}],
    }),
}


async def fake_fetch(collection_id):
    return SCHEMAS.get(collection_id)


def _config(collection_id, path_prefix, **components) -> CollectionConfig:
    return CollectionConfig(
        collection_id=collection_id,
        path_prefix=path_prefix,
        slug_field="slug",
        components=ComponentsConfig(**components),
    )


def test_requested_widgets():
    config = _config("BlogPosts", "/blog", item_page=True, category_page=True, card_widget=True)
    assert requested_widgets(config) == [WidgetKind.ITEM, WidgetKind.LIST, WidgetKind.CARD]
    assert requested_widgets(_config("A", "/a")) == []


@pytest.mark.asyncio
async def test_generate_selects_collections_by_widget():
    configs = [
        _config("BlogPosts", "/blog", item_page=True),
        _config("Authors", "/authors", table_widget=True),
    ]
    generator = ContractGenerator(fetch_collection=fake_fetch, timeout=1.0)

    items = await generator.generate(WidgetKind.ITEM, configs)
    tables = await generator.generate(WidgetKind.TABLE, configs)

    assert [c.name for c in items] == ["BlogPostsItem"]
    assert [c.name for c in tables] == ["AuthorsTable"]


@pytest.mark.asyncio
async def test_missing_collection_is_skipped():
    configs = [
        _config("Missing", "/missing", item_page=True),
        _config("BlogPosts", "/blog", item_page=True),
    ]
    generator = ContractGenerator(fetch_collection=fake_fetch, timeout=1.0)

    contracts = await generator.generate(WidgetKind.ITEM, configs)

    assert [c.name for c in contracts] == ["BlogPostsItem"]


@pytest.mark.asyncio
async def test_fetch_failure_does_not_abort_batch():
    """One failing collection is dropped; the others still generate."""
    async def flaky_fetch(collection_id):
        if collection_id == "Authors":
            raise ConnectionError("store unavailable")
        return await fake_fetch(collection_id)

    configs = [
        _config("Authors", "/authors", card_widget=True),
        _config("BlogPosts", "/blog", card_widget=True),
    ]
    generator = ContractGenerator(fetch_collection=flaky_fetch, timeout=1.0)

    contracts = await generator.generate(WidgetKind.CARD, configs)

    assert [c.name for c in contracts] == ["BlogPostsCard"]


@pytest.mark.asyncio
async def test_fetch_timeout_is_skipped():
    async def slow_fetch(collection_id):
        if collection_id == "Authors":
            await asyncio.sleep(5)
        return await fake_fetch(collection_id)

    configs = [
        _config("Authors", "/authors", item_page=True),
        _config("BlogPosts", "/blog", item_page=True),
    ]
    generator = ContractGenerator(fetch_collection=slow_fetch, timeout=0.01)

    contracts = await generator.generate(WidgetKind.ITEM, configs)

    assert [c.name for c in contracts] == ["BlogPostsItem"]


@pytest.mark.asyncio
async def test_invalid_configs_are_not_fetched():
    fetch = AsyncMock(side_effect=fake_fetch)
    configs = [
        _config("BlogPosts", "blog", item_page=True),
        _config("Authors", "/authors", item_page=True),
    ]
    generator = ContractGenerator(fetch_collection=fetch, timeout=1.0)

    contracts = await generator.generate(WidgetKind.ITEM, configs)

    assert [c.name for c in contracts] == ["AuthorsItem"]
    fetch.assert_awaited_once_with("Authors")


@pytest.mark.asyncio
async def test_generate_all_processes_each_collection_once():
    fetch = AsyncMock(side_effect=fake_fetch)
    configs = [
        _config("BlogPosts", "/blog", item_page=True, index_page=True, table_widget=True, card_widget=True),
        _config("Authors", "/authors", card_widget=True),
    ]
    generator = ContractGenerator(fetch_collection=fetch, timeout=1.0)

    contracts = await generator.generate_all(configs)

    assert [c.name for c in contracts[WidgetKind.ITEM]] == ["BlogPostsItem"]
    assert [c.name for c in contracts[WidgetKind.LIST]] == ["BlogPostsList"]
    assert [c.name for c in contracts[WidgetKind.TABLE]] == ["BlogPostsTable"]
    assert [c.name for c in contracts[WidgetKind.CARD]] == ["BlogPostsCard", "AuthorsCard"]
    assert fetch.await_count == 2


def test_write_contracts():
    descriptor = ContractDescriptor(
        name="BlogPostsCard",
        description="Card widget for BlogPosts",
        serialized_tags="  - {tag: _id, type: data, dataType: string}",
    )
    with tempfile.TemporaryDirectory() as temp_dir:
        out_dir = Path(temp_dir) / "contracts" / "generated"
        written = write_contracts([descriptor], out_dir)

        assert written == [out_dir / "BlogPostsCard.jay-contract"]
        assert written[0].read_text(encoding="utf-8") == (
            "name: BlogPostsCard\n"
            "description: Card widget for BlogPosts\n"
            "tags:\n"
            "  - {tag: _id, type: data, dataType: string}\n"
        )


@pytest.mark.asyncio
async def test_generate_contract_files_end_to_end():
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        config_path = temp_path / "collections.config.yaml"
        config_path.write_text(
            """
collections:
  - collectionId: BlogPosts
    pathPrefix: /blog
    slugField: title
    components: {itemPage: true, cardWidget: true}
  - collectionId: Missing
    pathPrefix: /missing
    slugField: slug
    components: {itemPage: true}
""",
            encoding="utf-8",
        )
        out_dir = temp_path / "contracts"

        written = await generate_contract_files(config_path, out_dir, fake_fetch, timeout=1.0)

        assert sorted(p.name for p in written) == ["BlogPostsCard.jay-contract", "BlogPostsItem.jay-contract"]
        item_text = (out_dir / "BlogPostsItem.jay-contract").read_text(encoding="utf-8")
        assert item_text.startswith("name: BlogPostsItem\n")
        assert "  - {tag: title, type: data, dataType: string}" in item_text


def test_context_formatter_defaults():
    """Records without collection/widget extras render them as '-'."""
    formatter = ContextFormatter("[collection=%(collection_id)s widget=%(widget)s] %(message)s")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)
    assert formatter.format(record) == "[collection=- widget=-] hello"

    record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)
    record.collection_id = "BlogPosts"
    record.widget = "Item"
    assert formatter.format(record) == "[collection=BlogPosts widget=Item] hello"


def test_configure_logging_installs_context_handler():
    """configure_logging sets up a stdout handler with the context formatter."""
    with patch("logging.basicConfig") as basic_config:
        configure_logging(logging.DEBUG)

    basic_config.assert_called_once()
    kwargs = basic_config.call_args.kwargs
    assert kwargs["level"] == logging.DEBUG
    handler = kwargs["handlers"][0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, ContextFormatter)

    record = logging.LogRecord("collection_contracts", logging.INFO, __file__, 1, "hello", None, None)
    line = handler.formatter.format(record)
    assert "INFO collection_contracts [collection=- widget=-] - hello" in line
