"""Keyword-based intent classification for tutor queries."""

from typing import Optional

import structlog

from hololearn.models.topics import ResponseBundle, ResponseTemplate
from hololearn.services.registry import FALLBACK_INTENT, TopicRegistry

logger = structlog.get_logger()

UNKNOWN_INTENT = "unknown"

# (keyword, topic the keyword is limited to, intent). First match wins.
INTENT_RULES: tuple[tuple[str, Optional[str], str], ...] = (
    ("explain", None, "explain"),
    ("scale", "solar-system", "scale"),
    ("function", "heart-anatomy", "function"),
    ("eruption", "volcano", "eruption"),
)

FALLBACK_RESPONSE = ResponseTemplate(
    narration="I'm not sure how to answer that. Try asking me to explain this topic.",
    actions=[],
)


class IntentResolver:
    """Maps a query on the current topic to one of that topic's responses."""

    def __init__(self, registry: TopicRegistry):
        self.registry = registry

    def classify(self, topic_id: str, query: str) -> str:
        """Return the intent key for a query using plain substring matching."""
        lowered = query.lower()
        for keyword, only_topic, intent in INTENT_RULES:
            if keyword in lowered and (only_topic is None or only_topic == topic_id):
                return intent
        return UNKNOWN_INTENT

    def resolve_intent(self, topic_id: str, query: str) -> str:
        """Return the intent whose template will answer the query.

        Raises:
            TopicNotFoundError: If the topic is not registered
        """
        return self.resolve(topic_id, query).intent

    def resolve(self, topic_id: str, query: str) -> ResponseBundle:
        """Resolve a query to a response bundle.

        Intents without a template on the topic fall back to ``explain``. A topic
        without ``explain`` gets a canned "not sure" response.

        Raises:
            TopicNotFoundError: If the topic is not registered
        """
        topic = self.registry.get(topic_id)
        intent = self.classify(topic_id, query)

        response = topic.responses.get(intent)
        if response is not None:
            logger.debug("intent_resolved", topic=topic_id, intent=intent)
            return ResponseBundle(topic=topic_id, intent=intent, response=response)

        logger.debug("intent_unresolved", topic=topic_id, intent=intent)
        return ResponseBundle(
            topic=topic_id,
            intent=FALLBACK_INTENT,
            response=topic.responses.get(FALLBACK_INTENT, FALLBACK_RESPONSE),
        )
