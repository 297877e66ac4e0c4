"""Template resolution use case.

Turns a logical "send this templated notification" request into a fully
specified :class:`~template_mailer.domain.models.ResolvedMessage` and hands it
to a delivery gateway.

Contents:
    * :class:`TemplateResolver` - Resolve and send templated notifications.

System Role:
    Application layer. Depends on the :class:`TemplateLookup` and
    :class:`DeliveryGateway` ports only; the concrete template store and the
    SendGrid transport are wired in by the composition root.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from ..domain.models import (
    DEFAULT_SENDER,
    Attachment,
    DeliveryResponse,
    Identity,
    ResolvedMessage,
    SendRequest,
)
from ..domain.resolution import (
    resolve_categories,
    resolve_language,
    resolve_sender_identity,
    validate_parameters,
)
from .ports import DeliveryGateway, TemplateLookup

logger = logging.getLogger(__name__)


class TemplateResolver:
    """Resolve send requests against a template catalog and deliver them.

    The resolver holds a reference to a delivery gateway instead of being one.
    Resolution performs no I/O and is all-or-nothing: lookup and validation
    failures are raised before anything reaches the gateway.

    Args:
        templates: Template lookup, normally a loaded ``TemplateStore``.
        gateway: Callable delivering one resolved message.
        disable_delivery: When True, :meth:`send` never calls the gateway and
            returns None. Fixed for the lifetime of the resolver.
        default_sender: Sender used when a template has no ``from`` override.

    Example:
        >>> from template_mailer.domain.models import LanguageEntry, TemplateConfig
        >>> class Store:
        ...     def lookup(self, name):
        ...         return TemplateConfig(name, ("plan_name",), {"en": LanguageEntry("T-EN")})
        >>> resolver = TemplateResolver(Store(), gateway=print, disable_delivery=True)
        >>> message = resolver.resolve_template("welcome", "Jo", "jo@example.com", "", {"plan_name": "DJ"})
        >>> message.template_id
        'T-EN'
        >>> resolver.send(message) is None
        True
    """

    def __init__(
        self,
        templates: TemplateLookup,
        gateway: DeliveryGateway,
        *,
        disable_delivery: bool = False,
        default_sender: Identity = DEFAULT_SENDER,
    ) -> None:
        self._templates = templates
        self._gateway = gateway
        self._disable_delivery = disable_delivery
        self._default_sender = default_sender
        self._last_message: ResolvedMessage | None = None
        self._lock = threading.Lock()

    @property
    def disable_delivery(self) -> bool:
        """Whether :meth:`send` skips the gateway."""
        return self._disable_delivery

    @property
    def last_message(self) -> ResolvedMessage | None:
        """Most recently resolved message, or None before the first resolution."""
        with self._lock:
            return self._last_message

    def resolve(self, request: SendRequest) -> ResolvedMessage:
        """Resolve a send request into a provider-ready message.

        Runs lookup, parameter validation, language fallback, category merge
        and sender resolution in that order.

        Raises:
            UnknownTemplateError: No configuration for the template name.
            UnknownParameterError: A parameter is not declared for the template.
            InvalidParameterTypeError: A parameter value has an unsupported type.
            MissingParameterError: A declared parameter is absent.
        """
        config = self._templates.lookup(request.template_name)
        validate_parameters(request.parameters, config.template_params)

        language = resolve_language(request.language, config.languages)
        language_entry = config.languages[language]
        sender, reply_to = resolve_sender_identity(config, self._default_sender)

        message = ResolvedMessage(
            template_name=config.name,
            template_id=language_entry.template_id,
            language=language,
            sender=sender,
            recipient=request.recipient,
            categories=resolve_categories(language_entry, config.categories),
            parameters=MappingProxyType(dict(request.parameters)),
            reply_to=reply_to,
            bcc=config.bcc,
            cc=config.cc,
            attachments=tuple(request.attachments),
        )

        with self._lock:
            self._last_message = message

        logger.debug(
            "Resolved template message",
            extra={
                "template": config.name,
                "template_id": message.template_id,
                "language": language,
                "requested_language": request.language,
            },
        )
        return message

    def resolve_template(
        self,
        template_name: str,
        recipient_name: str | None,
        recipient_email: str,
        language: str,
        parameters: Mapping[str, Any],
        attachments: Sequence[Attachment] | None = None,
    ) -> ResolvedMessage:
        """Resolve a send described by plain arguments.

        See :meth:`resolve` for the raised errors.
        """
        request = SendRequest(
            template_name=template_name,
            recipient=Identity(recipient_email, recipient_name),
            language=language,
            parameters=parameters,
            attachments=tuple(attachments) if attachments else (),
        )
        return self.resolve(request)

    def send(self, message: ResolvedMessage) -> DeliveryResponse | None:
        """Forward a resolved message to the gateway.

        Returns:
            The gateway response unchanged, or None when delivery is disabled.

        Raises:
            DeliveryError: Propagated unchanged from the gateway.
        """
        if self._disable_delivery:
            logger.info(
                "Email delivery disabled; message not sent",
                extra={"template": message.template_name, "template_id": message.template_id},
            )
            return None
        return self._gateway(message)

    def send_template(
        self,
        template_name: str,
        recipient_name: str | None,
        recipient_email: str,
        language: str,
        parameters: Mapping[str, Any],
        attachments: Sequence[Attachment] | None = None,
    ) -> DeliveryResponse | None:
        """Resolve and send in one call.

        Nothing is sent when resolution fails.
        """
        message = self.resolve_template(
            template_name,
            recipient_name,
            recipient_email,
            language,
            parameters,
            attachments,
        )
        return self.send(message)


__all__ = ["TemplateResolver"]
