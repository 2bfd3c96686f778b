"""Message collector — success / error messages of one request unit.

A collector is created empty for each unit of work, passed explicitly
down the call chain, read once when the response is rendered and then
cleared. It is not thread-safe and must never be shared between units.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

import structlog
from pydantic import BaseModel

logger = structlog.get_logger()


class MessageType(str, Enum):
    ERROR = "error"
    SUCCESS = "success"


class Message(BaseModel):
    """One collected message."""

    type: MessageType
    message: str
    source: str = ""

    model_config = {"use_enum_values": True}


class MessageCollector:
    """Ordered message store with a one-way success → error severity."""

    def __init__(self):
        self._type = MessageType.SUCCESS
        self._title: Optional[str] = None
        self._messages: list[Message] = []

    def get_messages(self) -> list[Message]:
        """Messages in insertion order."""
        return list(self._messages)

    def add_error(self, message: str, source: str = "") -> None:
        """Add an error message. The unit is marked as failed from now on."""
        self._type = MessageType.ERROR
        self._messages.append(Message(type=MessageType.ERROR, message=message, source=source))

    def add_success(self, message: str) -> None:
        """Add a success message. Does not change the severity."""
        self._messages.append(Message(type=MessageType.SUCCESS, message=message))

    def get_title(self) -> Optional[str]:
        return self._title

    def set_error_title(self, title: str) -> None:
        """Set the title and mark the unit as failed, even without messages."""
        self._type = MessageType.ERROR
        self._title = title

    def set_success_title(self, title: str) -> None:
        self._title = title

    def get_type(self) -> MessageType:
        return self._type

    def clear(self) -> None:
        """Drop collected messages.

        Severity and title are kept on purpose: a unit that already failed
        stays failed and keeps its title after its messages are discarded.
        """
        self._messages = []

    def has_errors(self) -> bool:
        """True once an error message or error title was added."""
        return self._type is MessageType.ERROR

    def __len__(self) -> int:
        return len(self._messages)


class MessageSummary(BaseModel):
    """Render model read once at the end of a unit."""

    type: MessageType
    title: Optional[str] = None
    messages: list[Message] = []

    model_config = {"use_enum_values": True}

    @classmethod
    def from_collector(cls, collector: MessageCollector) -> "MessageSummary":
        return cls(
            type=collector.get_type(),
            title=collector.get_title(),
            messages=collector.get_messages(),
        )


@contextmanager
def message_scope(**context) -> Iterator[MessageCollector]:
    """Open a unit of work with a fresh collector.

    `context` (e.g. unit="item.create") is bound to structlog contextvars
    for the duration of the unit. The collector is cleared on exit.

    Usage:
        with message_scope(unit="item.update") as messages:
            service.validate_update(items, db_items, messages)
            summary = MessageSummary.from_collector(messages)
    """
    collector = MessageCollector()

    with structlog.contextvars.bound_contextvars(**context):
        try:
            yield collector
        finally:
            logger.debug(
                "message_scope_closed",
                type=collector.get_type().value,
                failed=collector.has_errors(),
                messages=len(collector),
            )
            collector.clear()
