"""
Intent Domain Ports
"""

from typing import Any, Protocol

RESOLVED_INTENT_KEY = "app:resolved_intent"
INTENT_CONFIDENCE_KEY = "app:intent_confidence"


class SessionStateSink(Protocol):
    """Write-only session state owned by the caller."""

    def put(self, key: str, value: Any) -> None:
        """Store a value under key"""
        ...
