"""
Change feed: the store's change-event interface.

Writers publish a ChangeEvent after their write commits; handlers subscribe
per (collection, kind). The feed only routes — it does not catch handler
errors (handlers own their error boundary).

    feed = ChangeFeed()

    @feed.subscribe("journals", ChangeKind.created)
    def on_journal_created(store, change): ...

    feed.dispatch(change, store)
"""
from __future__ import annotations

import enum
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class ChangeKind(str, enum.Enum):
    created = "created"
    updated = "updated"


@dataclass(frozen=True)
class ChangeEvent:
    """A committed write to one document."""
    collection: str
    kind: ChangeKind
    document_id: str
    after: dict[str, Any]
    before: Optional[dict[str, Any]] = field(default=None)


Handler = Callable[[Any, ChangeEvent], None]


class ChangeFeed:
    def __init__(self) -> None:
        self._handlers: dict[tuple[str, ChangeKind], list[Handler]] = defaultdict(list)

    def subscribe(self, collection: str, kind: ChangeKind) -> Callable[[Handler], Handler]:
        def decorator(fn: Handler) -> Handler:
            self._handlers[(collection, kind)].append(fn)
            return fn
        return decorator

    def handlers_for(self, collection: str, kind: ChangeKind) -> list[Handler]:
        return list(self._handlers.get((collection, kind), []))

    def dispatch(self, change: ChangeEvent, store: Any) -> int:
        """Run every handler subscribed to the change. Returns the count run."""
        handlers = self.handlers_for(change.collection, change.kind)
        logger.debug(
            "dispatching %s/%s %s to %d handler(s)",
            change.collection, change.kind.value, change.document_id, len(handlers),
        )
        for handler in handlers:
            handler(store, change)
        return len(handlers)
