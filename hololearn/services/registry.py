"""Read-only topic registry."""

import json
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType
from typing import Optional

import structlog
from pydantic import ValidationError

from hololearn.models.topics import Topic, TopicCatalog, TopicSummary
from hololearn.services.catalog import builtin_topics

logger = structlog.get_logger()

FALLBACK_INTENT = "explain"


class TopicNotFoundError(Exception):
    """Raised when a topic id is not in the registry."""

    def __init__(self, topic_id: Optional[str]):
        self.topic_id = topic_id
        super().__init__(f"Unknown topic: {topic_id}")


class RegistryValidationError(Exception):
    """Raised when a catalog violates the registry invariants."""

    pass


class TopicRegistry:
    """Catalog of topics keyed by id, fixed at construction.

    Every topic must carry an ``explain`` template, which serves as the
    fallback for queries the resolver cannot map.
    """

    def __init__(self, topics: Iterable[Topic]):
        entries: dict[str, Topic] = {}
        for topic in topics:
            if topic.id in entries:
                raise RegistryValidationError(f"Duplicate topic id: {topic.id}")
            if FALLBACK_INTENT not in topic.responses:
                raise RegistryValidationError(
                    f"Topic {topic.id} has no '{FALLBACK_INTENT}' response"
                )
            entries[topic.id] = topic
        self._topics = MappingProxyType(entries)

    def __contains__(self, topic_id: object) -> bool:
        return topic_id in self._topics

    def __len__(self) -> int:
        return len(self._topics)

    def get(self, topic_id: Optional[str]) -> Topic:
        """Return the topic or raise TopicNotFoundError."""
        try:
            return self._topics[topic_id]
        except KeyError:
            raise TopicNotFoundError(topic_id) from None

    def list(self) -> list[TopicSummary]:
        """Return topic summaries in insertion order."""
        return [
            TopicSummary(id=topic.id, name=topic.name, description=topic.description)
            for topic in self._topics.values()
        ]


def load_registry(path: Optional[str] = None) -> TopicRegistry:
    """Build the registry from a JSON catalog file, or the built-in catalog.

    Args:
        path: Optional path to a ``{"topics": [...]}`` JSON file

    Returns:
        Validated TopicRegistry

    Raises:
        RegistryValidationError: If the catalog is malformed or breaks an invariant
    """
    if path is None:
        registry = TopicRegistry(builtin_topics())
        logger.info("builtin_registry_loaded", topic_count=len(registry))
        return registry

    catalog_path = Path(path)
    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
        catalog = TopicCatalog.model_validate(data)
    except FileNotFoundError:
        logger.error("topic_catalog_not_found", path=str(catalog_path))
        raise
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("topic_catalog_invalid", path=str(catalog_path), error=str(e))
        raise RegistryValidationError(f"Invalid topic catalog {catalog_path}: {e}") from e

    registry = TopicRegistry(catalog.topics)
    logger.info("topic_catalog_loaded", path=str(catalog_path), topic_count=len(registry))
    return registry
