"""Domain-specific exceptions for typed error handling at boundaries.

Every failure the resolver can produce is raised synchronously to the caller
before any delivery gateway interaction. None of these errors is retried or
logged by the core itself.
"""

from __future__ import annotations


class MailerError(Exception):
    """Base class for all template-mailer errors.

    Example:
        >>> issubclass(ConfigError, MailerError)
        True
    """


class ConfigError(MailerError):
    """Missing, unreadable, malformed, or empty configuration.

    Raised at construction time when the template catalog cannot be loaded,
    and when delivery settings are incomplete (e.g. no API key while delivery
    is enabled). A resolver is never built from a configuration that failed.

    Example:
        >>> err = ConfigError("Invalid email configuration: document is empty")
        >>> str(err)
        'Invalid email configuration: document is empty'
    """


class UnknownTemplateError(MailerError, LookupError):
    """Requested template name has no configuration entry.

    Example:
        >>> err = UnknownTemplateError("no-such-template")
        >>> err.name
        'no-such-template'
        >>> str(err)
        'Invalid email template name: no-such-template'
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid email template name: {name}")


class TemplateParameterError(MailerError, ValueError):
    """Base for parameter validation failures; carries the offending key."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(message)


class UnknownParameterError(TemplateParameterError):
    """A supplied parameter key is not declared for the template.

    Example:
        >>> str(UnknownParameterError("invalid_param"))
        'Invalid parameter: invalid_param'
    """

    def __init__(self, key: str) -> None:
        super().__init__(key, f"Invalid parameter: {key}")


class InvalidParameterTypeError(TemplateParameterError):
    """A supplied parameter value is not a string, boolean, or mapping.

    Example:
        >>> str(InvalidParameterTypeError("product_id"))
        'Parameter value must be a string, boolean or mapping: product_id'
    """

    def __init__(self, key: str) -> None:
        super().__init__(key, f"Parameter value must be a string, boolean or mapping: {key}")


class MissingParameterError(TemplateParameterError):
    """A declared required parameter is absent from the request.

    Example:
        >>> str(MissingParameterError("plan_name"))
        'Parameter "plan_name" is missing'
    """

    def __init__(self, key: str) -> None:
        super().__init__(key, f'Parameter "{key}" is missing')


class InvalidRecipientError(MailerError, ValueError):
    """Email address validation failure.

    Inherits from ValueError so generic ``except ValueError`` handlers at the
    CLI boundary keep catching it.

    Example:
        >>> isinstance(InvalidRecipientError("Invalid recipient: nope"), ValueError)
        True
    """


class DeliveryError(MailerError):
    """The delivery gateway failed to accept a message.

    Raised by gateway adapters for transport failures and rejected requests.
    The resolver propagates it unchanged.

    Example:
        >>> err = DeliveryError("SendGrid rejected the message", status_code=400)
        >>> err.status_code
        400
        >>> DeliveryError("Connection refused").status_code is None
        True
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


__all__ = [
    "ConfigError",
    "DeliveryError",
    "InvalidParameterTypeError",
    "InvalidRecipientError",
    "MailerError",
    "MissingParameterError",
    "TemplateParameterError",
    "UnknownParameterError",
    "UnknownTemplateError",
]
