"""Request-scoped metadata attached to probe events.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Fields a probe adds to every event it emits once bound.

    Example:
        context = ObservationContext(request_id="req-123", user_id="user_2abc")
        probe = DefaultConnectionProbe().with_context(context)
    """

    request_id: str | None = None
    user_id: str | None = None
    collection: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Logging kwargs; unset fields are left out."""
        named = {
            "request_id": self.request_id,
            "user_id": self.user_id,
            "collection": self.collection,
        }
        return {
            **{key: value for key, value in named.items() if value is not None},
            **self.extra,
        }

    def with_collection(self, collection: str) -> ObservationContext:
        return replace(self, collection=collection)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        return replace(self, extra={**self.extra, **kwargs})
