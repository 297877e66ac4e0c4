"""SendGrid v3 HTTP transport.

Provides :func:`send_message`, the production delivery gateway that posts a
resolved message to the SendGrid ``mail/send`` endpoint via httpx.
"""

from __future__ import annotations

import logging

import httpx
import orjson

from template_mailer.domain.errors import ConfigError, DeliveryError
from template_mailer.domain.models import DeliveryResponse, ResolvedMessage

from .config import SendGridConfig
from .payload import build_payload
from .validation import validate_message_addresses

logger = logging.getLogger(__name__)

# Keywords that may indicate sensitive data in exception messages
_SENSITIVE_KEYWORDS = frozenset(
    {
        "password",
        "credential",
        "auth",
        "secret",
        "token",
        "key",
        "bearer",
    }
)


def _sanitize_exception_message(exc: Exception) -> str:
    """Sanitize exception message to prevent credential exposure.

    Example:
        >>> class FakeExc(Exception): pass
        >>> _sanitize_exception_message(FakeExc("Connection refused"))
        'Connection refused'
        >>> _sanitize_exception_message(FakeExc("Bearer SG.abc rejected"))
        'Email delivery failed. Check SendGrid configuration.'
    """
    message = str(exc).lower()
    if any(keyword in message for keyword in _SENSITIVE_KEYWORDS):
        return "Email delivery failed. Check SendGrid configuration."
    return str(exc)


def _build_headers(config: SendGridConfig) -> dict[str, str]:
    """Return request headers; the API key must already be present."""
    if config.api_key is None:
        raise ConfigError("No SendGrid API key configured (sendgrid.api_key is empty)")
    headers = {
        "Authorization": f"Bearer {config.api_key}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if config.impersonate_subuser is not None:
        headers["on-behalf-of"] = config.impersonate_subuser
    return headers


def _rejection_detail(response: httpx.Response) -> str:
    """Extract the first provider error message from a rejected request."""
    try:
        body = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return response.text[:200]
    errors = body.get("errors") if isinstance(body, dict) else None
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        return str(errors[0].get("message", ""))
    return response.text[:200]


def send_message(
    message: ResolvedMessage,
    *,
    config: SendGridConfig,
    client: httpx.Client | None = None,
) -> DeliveryResponse:
    """Deliver a resolved message through the SendGrid v3 API.

    Args:
        message: Fully resolved message.
        config: SendGrid settings (API key, host, timeout, subuser).
        client: Optional httpx client; a one-off request is made when None.

    Returns:
        The provider response (status, body, headers, ``X-Message-Id``).

    Raises:
        ConfigError: No API key configured.
        InvalidRecipientError: The recipient address is malformed.
        DeliveryError: The request failed or SendGrid rejected the message.

    Side Effects:
        Performs one HTTPS request. Logs the attempt at INFO level and
        failures at ERROR level.
    """
    headers = _build_headers(config)
    validate_message_addresses(message)
    body = orjson.dumps(build_payload(message))

    logger.info(
        "Sending templated email",
        extra={
            "template": message.template_name,
            "template_id": message.template_id,
            "recipient": message.recipient.email,
            "attachment_count": len(message.attachments),
        },
    )

    try:
        if client is not None:
            response = client.post(config.mail_send_url, content=body, headers=headers, timeout=config.timeout)
        else:
            response = httpx.post(config.mail_send_url, content=body, headers=headers, timeout=config.timeout)
    except httpx.HTTPError as exc:
        logger.debug("SendGrid request failed", exc_info=True)
        raise DeliveryError(_sanitize_exception_message(exc)) from exc

    if not response.is_success:
        detail = _rejection_detail(response)
        logger.error(
            "SendGrid rejected the message",
            extra={"status_code": response.status_code, "template": message.template_name, "detail": detail},
        )
        raise DeliveryError(
            f"SendGrid rejected the message (HTTP {response.status_code}): {detail}",
            status_code=response.status_code,
        )

    result = DeliveryResponse(
        status_code=response.status_code,
        body=response.text,
        headers=dict(response.headers),
        message_id=response.headers.get("X-Message-Id"),
    )
    logger.info(
        "Email accepted by SendGrid",
        extra={"template": message.template_name, "status_code": result.status_code, "message_id": result.message_id},
    )
    return result


__all__ = ["send_message"]
