"""
Request and response listeners.

A listener qualifies for a message when its ``kind`` matches the message's
``kind`` and its ``condition`` returns True. Qualifying listeners run in
registration order: a cancelling listener stops the pass before its action
runs, any other listener has its ``action`` called for side effects only.
"""
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .errors import HTTPRequestCancelledException
from .request import HTTPRequest
from .response import HTTPResponse
from .types import MessageKind

logger = logging.getLogger("http_kit.listeners")

Message = Union[HTTPRequest, HTTPResponse]
Condition = Callable[[Any], bool]
Action = Callable[[Any], None]


def _default_id() -> str:
    return f"defID-{uuid.uuid4()}"


def _never(message: Any) -> bool:
    return False


def _noop(message: Any) -> None:
    return None


@dataclass
class Listener:
    """Interception rule for one kind of message."""

    kind: MessageKind
    condition: Condition = _never
    action: Action = _noop
    cancel: bool = False
    retry_after_action: bool = False
    tag: str = ""
    id: str = field(default_factory=_default_id)

    def qualifies(self, message: Message) -> bool:
        return message.kind == self.kind and bool(self.condition(message))


@dataclass
class RequestListener(Listener):
    """Listener over ``HTTPRequest`` messages."""

    kind: MessageKind = field(default=MessageKind.REQUEST, init=False)


@dataclass
class ResponseListener(Listener):
    """Listener over ``HTTPResponse`` messages."""

    kind: MessageKind = field(default=MessageKind.RESPONSE, init=False)


@dataclass
class Cancelled:
    """Outcome of a pass stopped by a cancelling listener."""

    listener_id: str
    tag: str
    kind: MessageKind
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        source = "Request-Listener" if self.kind == MessageKind.REQUEST else "Response-Listener"
        lines = [
            f"The Request was intercepted and cancelled by {source} with",
            f"   ID: {self.listener_id}",
            f"   Tag: {self.tag}",
            f"{self.kind.value.capitalize()} Details",
        ]
        for key, value in self.details.items():
            if isinstance(value, list):
                value = f"[{', '.join(value)}]"
            lines.append(f"   {key}: {value}")
        return "\n".join(lines)

    def to_exception(self) -> HTTPRequestCancelledException:
        return HTTPRequestCancelledException(self.message, outcome=self)


@dataclass
class InterceptResult:
    """Result of running the qualifying listeners for one message."""

    cancelled: Optional[Cancelled] = None
    retry: bool = False
    ran: List[str] = field(default_factory=list)


def qualifying(listeners: Iterable[Listener], message: Message) -> List[Listener]:
    """Listeners that qualify for ``message``, in registration order."""
    return [listener for listener in listeners if listener.qualifies(message)]


def intercept(listeners: Iterable[Listener], message: Message) -> InterceptResult:
    """Run the qualifying listeners for ``message``."""
    result = InterceptResult()
    # snapshot the list so actions may register or remove listeners safely
    for listener in qualifying(list(listeners), message):
        if listener.cancel:
            logger.debug(f"intercept: cancelled by listener id={listener.id} tag={listener.tag!r}")
            result.cancelled = Cancelled(
                listener_id=listener.id,
                tag=listener.tag,
                kind=message.kind,
                details=message.snapshot(),
            )
            return result

        listener.action(message)
        result.ran.append(listener.id)
        if listener.retry_after_action:
            result.retry = True

    if result.ran:
        logger.debug(f"intercept: kind={message.kind.value}, ran={result.ran}, retry={result.retry}")
    return result
