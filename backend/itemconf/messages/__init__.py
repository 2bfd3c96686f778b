"""Request-scoped success / error message collection."""

from itemconf.messages.collector import (
    Message,
    MessageCollector,
    MessageSummary,
    MessageType,
    message_scope,
)

__all__ = ["Message", "MessageCollector", "MessageSummary", "MessageType", "message_scope"]
