"""Address checks at the delivery boundary.

Resolution accepts any recipient string; SendGrid would reject a malformed
one with a 400, so delivery adapters check first and raise
:class:`~template_mailer.domain.errors.InvalidRecipientError` instead.
"""

from __future__ import annotations

from btx_lib_mail import validate_email_address

from template_mailer.domain.errors import InvalidRecipientError
from template_mailer.domain.models import ResolvedMessage


def validate_recipient(recipient: str) -> None:
    """Check one address with ``btx_lib_mail``.

    Raises:
        InvalidRecipientError: The address is malformed.

    Example:
        >>> validate_recipient("dj@example.com")
        >>> validate_recipient("not-an-address")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidRecipientError: Invalid recipient: not-an-address
    """
    try:
        validate_email_address(recipient)
    except ValueError as exc:
        raise InvalidRecipientError(f"Invalid recipient: {recipient}") from exc


def validate_message_addresses(message: ResolvedMessage) -> None:
    """Check the ``to``, ``cc`` and ``bcc`` addresses of a resolved message."""
    for address in (message.recipient.email, *message.cc, *message.bcc):
        validate_recipient(address)


__all__ = ["validate_message_addresses", "validate_recipient"]
