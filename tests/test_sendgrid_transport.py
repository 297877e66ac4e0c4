"""SendGrid HTTP transport against an httpx mock transport."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import orjson
import pytest

from template_mailer.adapters.sendgrid.config import SendGridConfig
from template_mailer.adapters.sendgrid.transport import send_message
from template_mailer.domain.errors import ConfigError, DeliveryError, InvalidRecipientError
from template_mailer.domain.models import Identity, ResolvedMessage

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it answered."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def accepted() -> Handler:
    def _handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(202, headers={"X-Message-Id": "msg-123"})

    return _handler


@pytest.fixture
def sendgrid_config() -> SendGridConfig:
    return SendGridConfig(api_key="SG.test-key")


@pytest.fixture
def client_factory() -> Iterator[Callable[[Handler], tuple[httpx.Client, RecordingTransport]]]:
    clients: list[httpx.Client] = []

    def _create(handler: Handler) -> tuple[httpx.Client, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = httpx.Client(transport=transport)
        clients.append(client)
        return client, transport

    yield _create
    for client in clients:
        client.close()


@pytest.mark.os_agnostic
def test_accepted_message_returns_provider_response(
    message_factory: Callable[..., ResolvedMessage],
    sendgrid_config: SendGridConfig,
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
    accepted: Handler,
) -> None:
    """A 202 is returned with the SendGrid message id."""
    client, _transport = client_factory(accepted)

    response = send_message(message_factory(), config=sendgrid_config, client=client)

    assert response.status_code == 202
    assert response.message_id == "msg-123"


@pytest.mark.os_agnostic
def test_request_targets_mail_send_with_bearer_auth(
    message_factory: Callable[..., ResolvedMessage],
    sendgrid_config: SendGridConfig,
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
    accepted: Handler,
) -> None:
    """The POST goes to /v3/mail/send with the API key and a JSON body."""
    client, transport = client_factory(accepted)

    send_message(message_factory(), config=sendgrid_config, client=client)

    (request,) = transport.requests
    assert request.method == "POST"
    assert str(request.url) == "https://api.sendgrid.com/v3/mail/send"
    assert request.headers["Authorization"] == "Bearer SG.test-key"
    assert request.headers["Content-Type"] == "application/json"
    assert "on-behalf-of" not in request.headers
    body = orjson.loads(request.content)
    assert body["template_id"] == "T-FR"
    assert body["personalizations"][0]["dynamic_template_data"]["plan_name"] == "Studio"


@pytest.mark.os_agnostic
def test_subuser_impersonation_header_and_custom_host(
    message_factory: Callable[..., ResolvedMessage],
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
    accepted: Handler,
) -> None:
    """impersonate_subuser sends on-behalf-of; host overrides the endpoint."""
    config = SendGridConfig(api_key="SG.k", host="http://sendgrid.local/", impersonate_subuser="billing")
    client, transport = client_factory(accepted)

    send_message(message_factory(), config=config, client=client)

    (request,) = transport.requests
    assert request.headers["on-behalf-of"] == "billing"
    assert str(request.url) == "http://sendgrid.local/v3/mail/send"


@pytest.mark.os_agnostic
def test_rejection_raises_delivery_error_with_status(
    message_factory: Callable[..., ResolvedMessage],
    sendgrid_config: SendGridConfig,
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
) -> None:
    """4xx responses carry the status code and the first provider error."""

    def _rejected(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"errors": [{"message": "The template_id must be a valid GUID"}]})

    client, _transport = client_factory(_rejected)

    with pytest.raises(DeliveryError) as exc:
        send_message(message_factory(), config=sendgrid_config, client=client)

    assert exc.value.status_code == 400
    assert str(exc.value) == "SendGrid rejected the message (HTTP 400): The template_id must be a valid GUID"


@pytest.mark.os_agnostic
def test_rejection_with_non_json_body_uses_text(
    message_factory: Callable[..., ResolvedMessage],
    sendgrid_config: SendGridConfig,
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
) -> None:
    """Plain-text error bodies are quoted as-is."""

    def _unavailable(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="Service Unavailable")

    client, _transport = client_factory(_unavailable)

    with pytest.raises(DeliveryError, match=r"HTTP 503\): Service Unavailable") as exc:
        send_message(message_factory(), config=sendgrid_config, client=client)

    assert exc.value.status_code == 503


@pytest.mark.os_agnostic
def test_redirect_from_misconfigured_host_is_delivery_error(
    message_factory: Callable[..., ResolvedMessage],
    sendgrid_config: SendGridConfig,
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
) -> None:
    """Only 2xx counts as accepted; a 3xx is never reported as sent."""

    def _moved(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(301, headers={"Location": "https://example.com/"}, text="Moved")

    client, transport = client_factory(_moved)

    with pytest.raises(DeliveryError, match=r"HTTP 301") as exc:
        send_message(message_factory(), config=sendgrid_config, client=client)

    assert exc.value.status_code == 301
    assert len(transport.requests) == 1


@pytest.mark.os_agnostic
def test_connection_failure_is_delivery_error_without_status(
    message_factory: Callable[..., ResolvedMessage],
    sendgrid_config: SendGridConfig,
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
) -> None:
    """Transport errors become DeliveryError with no status code."""

    def _refused(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    client, _transport = client_factory(_refused)

    with pytest.raises(DeliveryError, match="Connection refused") as exc:
        send_message(message_factory(), config=sendgrid_config, client=client)

    assert exc.value.status_code is None


@pytest.mark.os_agnostic
def test_failure_messages_mentioning_credentials_are_sanitized(
    message_factory: Callable[..., ResolvedMessage],
    sendgrid_config: SendGridConfig,
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
) -> None:
    """Errors that could echo the key are replaced with a generic message."""

    def _leaky(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("proxy refused Bearer SG.test-key", request=request)

    client, _transport = client_factory(_leaky)

    with pytest.raises(DeliveryError) as exc:
        send_message(message_factory(), config=sendgrid_config, client=client)

    assert "SG.test-key" not in str(exc.value)
    assert str(exc.value) == "Email delivery failed. Check SendGrid configuration."


@pytest.mark.os_agnostic
def test_missing_api_key_is_config_error_before_any_request(
    message_factory: Callable[..., ResolvedMessage],
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
    accepted: Handler,
) -> None:
    """No key means no request at all."""
    client, transport = client_factory(accepted)

    with pytest.raises(ConfigError, match="No SendGrid API key"):
        send_message(message_factory(), config=SendGridConfig(api_key=""), client=client)

    assert transport.requests == []


@pytest.mark.os_agnostic
def test_invalid_recipient_is_rejected_before_any_request(
    message_factory: Callable[..., ResolvedMessage],
    sendgrid_config: SendGridConfig,
    client_factory: Callable[[Handler], tuple[httpx.Client, RecordingTransport]],
    accepted: Handler,
) -> None:
    """Malformed addresses never reach the provider."""
    client, transport = client_factory(accepted)

    with pytest.raises(InvalidRecipientError, match="Invalid recipient: not-an-email"):
        send_message(message_factory(recipient=Identity("not-an-email")), config=sendgrid_config, client=client)

    assert transport.requests == []
