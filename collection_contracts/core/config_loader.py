"""
Loading and validation of the per-collection configuration file.

The file is YAML of the form::

    collections:
      - collectionId: BlogPosts
        pathPrefix: /blog
        slugField: slug
        references:
          - {fieldName: author, mode: embed}
        components: {itemPage: true, indexPage: true}
"""
import logging
from collections import Counter
from pathlib import Path
from typing import Any, List, Sequence, Tuple

import yaml
from pydantic import ValidationError

from collection_contracts.core.config import settings
from collection_contracts.schemas.collections import CollectionConfig, DataConfig

log = logging.getLogger(__name__)


class ConfigLoadError(ValueError):
    """Raised when the configuration file cannot be parsed into a DataConfig."""


def load_config(path: Path | str | None = None) -> DataConfig:
    """
    Load the collections configuration from a YAML file.

    A missing file yields an empty configuration.

    Args:
        path: Config file path, defaults to settings.collections_config_path

    Returns:
        Parsed DataConfig (not yet validated); entries that fail
        to parse are logged and dropped
    """
    config_path = Path(path or settings.collections_config_path)
    if not config_path.exists():
        log.warning(f"Config file not found at {config_path}, using empty configuration")
        return DataConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {e}") from e

    if raw is None:
        return DataConfig()
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"Config file {config_path} must contain a mapping at the top level")

    entries = raw.get("collections") or []
    if not isinstance(entries, list):
        raise ConfigLoadError(f"'collections' in {config_path} must be a list")

    collections, _ = parse_collections(entries)
    return DataConfig(collections=collections)


def _entry_label(entry: Any, index: int) -> str:
    if isinstance(entry, dict) and entry.get("collectionId") not in (None, ""):
        return str(entry["collectionId"])
    return f"collections[{index}]"


def parse_collections(entries: Sequence[Any]) -> Tuple[List[CollectionConfig], List[str]]:
    """
    Parse raw collection entries one by one.

    An entry that fails model validation is reported as
    ``"<collectionId or collections[i]>: <problem>"`` and left out; the
    other entries are still returned. Each dropped entry is logged.
    """
    collections = []
    errors = []
    for index, entry in enumerate(entries):
        label = _entry_label(entry, index)
        if not isinstance(entry, dict):
            problem = "entry must be a mapping"
        else:
            try:
                collections.append(CollectionConfig.model_validate(entry))
                continue
            except ValidationError as e:
                problem = "; ".join(
                    f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
                )
        errors.append(f"{label}: {problem}")
        log.warning(
            "Dropping collection entry that failed to parse: %s", problem,
            extra={"collection_id": label},
        )
    return collections, errors


def validate_collection_config(config: CollectionConfig) -> List[str]:
    """Check a single collection config for structural completeness."""
    errors = []

    if not config.collection_id:
        errors.append("collectionId is required")

    if not config.path_prefix:
        errors.append("pathPrefix is required")
    elif not config.path_prefix.startswith("/"):
        errors.append("pathPrefix must start with /")

    if not config.slug_field:
        errors.append("slugField is required")

    if config.components is None:
        errors.append("components configuration is required")

    if config.category is not None:
        if not config.category.reference_field:
            errors.append("category.referenceField is required when category is configured")
        if not config.category.category_slug_field:
            errors.append("category.categorySlugField is required when category is configured")

    return errors


def duplicate_errors(configs: Sequence[CollectionConfig]) -> List[str]:
    """Report collectionId and pathPrefix values used by more than one config."""
    errors = []
    ids = Counter(c.collection_id for c in configs if c.collection_id)
    paths = Counter(c.path_prefix for c in configs if c.path_prefix)
    for collection_id, count in ids.items():
        if count > 1:
            errors.append(f"Duplicate collectionId: {collection_id}")
    for path_prefix, count in paths.items():
        if count > 1:
            errors.append(f"Duplicate pathPrefix: {path_prefix}")
    return errors


def validate_config(config: DataConfig) -> List[str]:
    """Validate the whole configuration set."""
    if not config.collections:
        return ["At least one collection must be configured"]

    errors = []
    for collection in config.collections:
        label = collection.collection_id or "<unnamed>"
        errors.extend(f"{label}: {e}" for e in validate_collection_config(collection))
    errors.extend(duplicate_errors(config.collections))
    return errors


def valid_collections(configs: Sequence[CollectionConfig]) -> List[CollectionConfig]:
    """
    Return the configs that may proceed to processing.

    Configs with their own errors, or sharing a collectionId or pathPrefix
    with another config, are dropped and logged.
    """
    ids = Counter(c.collection_id for c in configs)
    paths = Counter(c.path_prefix for c in configs)

    accepted = []
    for config in configs:
        errors = validate_collection_config(config)
        if ids[config.collection_id] > 1:
            errors.append(f"Duplicate collectionId: {config.collection_id}")
        if paths[config.path_prefix] > 1:
            errors.append(f"Duplicate pathPrefix: {config.path_prefix}")
        if errors:
            log.warning(
                "Skipping collection with configuration errors: %s",
                "; ".join(errors),
                extra={"collection_id": config.collection_id or "-"},
            )
            continue
        accepted.append(config)
    return accepted
