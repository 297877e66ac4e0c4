"""In-memory delivery adapters for testing.

Provides a delivery gateway that satisfies the same Protocol as the SendGrid
transport but performs no HTTP requests.

Contents:
    * :class:`DeliverySpy` - Captures delivered messages for test assertions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...domain.models import DeliveryResponse, ResolvedMessage
from ..sendgrid.config import SendGridConfig
from ..sendgrid.validation import validate_message_addresses


def _empty_message_list() -> list[ResolvedMessage]:
    """Create an empty typed list for message records."""
    return []


@dataclass
class DeliverySpy:
    """Captures delivery calls for test assertions.

    Each test should create its own DeliverySpy instance to avoid cross-test
    pollution. :meth:`send_message` matches the ``SendMessage`` protocol and
    :meth:`__call__` matches ``DeliveryGateway``.

    Attributes:
        sent_messages: Messages passed to the gateway, in call order.
        configs: SendGrid configs passed alongside each message (None when
            called as a bare gateway).
        status_code: Status code reported in successful responses.
        raise_exception: When set, delivery raises this exception after
            recording the call.

    Example:
        >>> from template_mailer.domain.models import DEFAULT_SENDER, Identity
        >>> spy = DeliverySpy()
        >>> message = ResolvedMessage(
        ...     template_name="t", template_id="d-1", language="en", sender=DEFAULT_SENDER,
        ...     recipient=Identity("jo@example.com"), categories=(), parameters={},
        ... )
        >>> spy(message).status_code
        202
        >>> len(spy.sent_messages)
        1
    """

    sent_messages: list[ResolvedMessage] = field(default_factory=_empty_message_list)
    configs: list[SendGridConfig | None] = field(default_factory=list)
    status_code: int = 202
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent_messages.clear()
        self.configs.clear()
        self.raise_exception = None

    def __call__(self, message: ResolvedMessage) -> DeliveryResponse:
        return self._record(message, None)

    def send_message(self, message: ResolvedMessage, *, config: SendGridConfig) -> DeliveryResponse:
        """Record the call and return a synthetic provider response.

        Raises:
            InvalidRecipientError: When the recipient has an invalid email format.
            Exception: If raise_exception is set, raises that exception.
        """
        return self._record(message, config)

    def _record(self, message: ResolvedMessage, config: SendGridConfig | None) -> DeliveryResponse:
        validate_message_addresses(message)
        self.sent_messages.append(message)
        self.configs.append(config)
        if self.raise_exception is not None:
            raise self.raise_exception
        return DeliveryResponse(
            status_code=self.status_code,
            message_id=f"spy-{len(self.sent_messages)}",
        )


__all__ = ["DeliverySpy"]
