"""Data source registry."""

from __future__ import annotations

from sessionsync.config import DataSourceType
from sessionsync.sources.base import BaseDataSource

# Lazy registry — the HTTP stack is only imported when a networked source is used.
SOURCE_CLASSES: dict[DataSourceType, str] = {
    DataSourceType.COSMOS_REST: "sessionsync.sources.cosmos.CosmosRestSource",
    DataSourceType.MOCK: "sessionsync.sources.mock.MockDataSource",
}


def create_data_source(
    source_type: DataSourceType,
    **kwargs,
) -> BaseDataSource:
    """Instantiate a data source by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = SOURCE_CLASSES[source_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseDataSource", "SOURCE_CLASSES", "create_data_source"]
