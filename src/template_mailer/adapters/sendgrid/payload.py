"""Map resolved messages onto the SendGrid v3 ``mail/send`` request body."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from template_mailer.domain.models import Attachment, Identity, ResolvedMessage


def identity_to_dict(identity: Identity) -> dict[str, str]:
    """Render an identity, omitting an empty display name.

    Example:
        >>> identity_to_dict(Identity("a@example.com"))
        {'email': 'a@example.com'}
    """
    data = {"email": identity.email}
    if identity.name:
        data["name"] = identity.name
    return data


def plain_data(value: Any) -> Any:
    """Recursively convert read-only mappings into dicts for JSON encoding."""
    if isinstance(value, Mapping):
        return {str(k): plain_data(v) for k, v in cast(Mapping[Any, Any], value).items()}
    return value


def _attachment(attachment: Attachment) -> dict[str, str]:
    data = {
        "content": attachment.content,
        "filename": attachment.filename,
        "disposition": attachment.disposition,
    }
    if attachment.mime_type:
        data["type"] = attachment.mime_type
    if attachment.content_id:
        data["content_id"] = attachment.content_id
    return data


def build_payload(message: ResolvedMessage) -> dict[str, Any]:
    """Build the JSON body for a dynamic-template send.

    One personalization carries the recipient, the fixed cc/bcc copies and the
    substitution parameters as ``dynamic_template_data``. Empty optional lists
    are left out because the API rejects them.

    Example:
        >>> from template_mailer.domain.models import DEFAULT_SENDER
        >>> message = ResolvedMessage(
        ...     template_name="welcome",
        ...     template_id="d-1",
        ...     language="en",
        ...     sender=DEFAULT_SENDER,
        ...     recipient=Identity("jo@example.com", "Jo"),
        ...     categories=("welcome",),
        ...     parameters={"plan_name": "DJ"},
        ... )
        >>> payload = build_payload(message)
        >>> payload["template_id"], payload["personalizations"][0]["to"]
        ('d-1', [{'email': 'jo@example.com', 'name': 'Jo'}])
        >>> "reply_to" in payload, "attachments" in payload
        (False, False)
    """
    personalization: dict[str, Any] = {
        "to": [identity_to_dict(message.recipient)],
        "dynamic_template_data": plain_data(message.parameters),
    }
    if message.cc:
        personalization["cc"] = [{"email": address} for address in message.cc]
    if message.bcc:
        personalization["bcc"] = [{"email": address} for address in message.bcc]

    payload: dict[str, Any] = {
        "personalizations": [personalization],
        "from": identity_to_dict(message.sender),
        "template_id": message.template_id,
    }
    if message.reply_to is not None:
        payload["reply_to"] = identity_to_dict(message.reply_to)
    if message.categories:
        payload["categories"] = list(message.categories)
    if message.attachments:
        payload["attachments"] = [_attachment(attachment) for attachment in message.attachments]
    return payload


__all__ = ["build_payload", "identity_to_dict", "plain_data"]
