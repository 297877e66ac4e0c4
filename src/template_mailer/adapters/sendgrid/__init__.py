"""SendGrid adapter - the production delivery gateway.

Structure:
    * :mod:`.config` - SendGrid configuration model and loader
    * :mod:`.payload` - ResolvedMessage to v3 ``mail/send`` body mapping
    * :mod:`.transport` - HTTP send function
    * :mod:`.attachments` - File attachment helper
    * :mod:`.validation` - Recipient validation
"""

from __future__ import annotations

from .attachments import attachment_from_path
from .config import SendGridConfig, load_sendgrid_config_from_dict
from .payload import build_payload
from .transport import send_message
from .validation import validate_message_addresses, validate_recipient

__all__ = [
    "SendGridConfig",
    "attachment_from_path",
    "build_payload",
    "load_sendgrid_config_from_dict",
    "send_message",
    "validate_message_addresses",
    "validate_recipient",
]
