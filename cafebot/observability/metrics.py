"""Prometheus metrics for cafebot.

Label sets stay low-cardinality: intents and sub-conversation names come
from a fixed registry, never from free user text.
"""

from prometheus_client import Counter, Histogram

TURNS_DISPATCHED = Counter(
    "cafebot_turns_dispatched_total",
    "Total number of turns dispatched, by final outcome status",
    labelnames=["status"],
)

DISPATCH_LATENCY = Histogram(
    "cafebot_dispatch_latency_seconds",
    "Time spent dispatching and reconciling one turn",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

PERMISSION_DENIALS = Counter(
    "cafebot_permission_denials_total",
    "Turns refused by the permission policy",
    labelnames=["rule"],
)

SUB_CONVERSATIONS_STARTED = Counter(
    "cafebot_sub_conversations_started_total",
    "Sub-conversations begun",
    labelnames=["sub_conversation"],
)

REDISPATCHES = Counter(
    "cafebot_redispatches_total",
    "Re-dispatches triggered while reconciling an outcome",
    labelnames=["reason"],
)

FALLBACK_RESPONSES = Counter(
    "cafebot_fallback_responses_total",
    "Turns answered with the 'I don't understand' fallback",
)

MALFORMED_CARD_PAYLOADS = Counter(
    "cafebot_malformed_card_payloads_total",
    "Card query payloads that could not be decoded",
)
