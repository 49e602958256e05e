try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from relying_party.clients.oauth import OAuthClient, OAuthTokenExchangeError


def test_build_authorization_url_carries_client_and_state(flow_config) -> None:
    client = OAuthClient(flow_config)

    url = client.build_authorization_url(state="state-value")

    parts = urlsplit(url)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == flow_config.authorization_endpoint
    query = parse_qs(parts.query)
    assert query == {
        "client_id": ["client-123"],
        "redirect_uri": ["https://rp.example.com/callback"],
        "response_type": ["code"],
        "state": ["state-value"],
        "scope": ["openid profile"],
    }


def test_build_authorization_url_keeps_existing_query(flow_config) -> None:
    config = flow_config.model_copy(
        update={"authorization_endpoint": "https://auth.example.com/authorize?tenant=demo"}
    )
    client = OAuthClient(config)

    query = parse_qs(urlsplit(client.build_authorization_url(state="s")).query)

    assert query["tenant"] == ["demo"]
    assert query["state"] == ["s"]


def test_build_authorization_url_omits_empty_scope(flow_config) -> None:
    client = OAuthClient(flow_config.model_copy(update={"scopes": ()}))

    query = parse_qs(urlsplit(client.build_authorization_url(state="s")).query)

    assert "scope" not in query


@pytest.mark.anyio
async def test_exchange_posts_authorization_code_grant(flow_config) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={
                "access_token": "access-1",
                "token_type": "Bearer",
                "expires_in": 3600,
                "refresh_token": "refresh-1",
                "custom": "value",
            },
        )

    client = OAuthClient(flow_config, transport=httpx.MockTransport(handler))

    result = await client.exchange_authorization_code("code-abc")

    assert result.access_token == "access-1"
    assert result.token_type == "Bearer"
    assert result.expires_in == 3600
    assert result.refresh_token == "refresh-1"
    assert result.extra == {"custom": "value"}

    assert len(requests) == 1
    sent = requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == flow_config.token_endpoint
    assert sent.headers["accept"] == "application/json"
    assert parse_qs(sent.content.decode()) == {
        "grant_type": ["authorization_code"],
        "code": ["code-abc"],
        "redirect_uri": ["https://rp.example.com/callback"],
        "client_id": ["client-123"],
        "client_secret": ["secret-456"],
    }


@pytest.mark.anyio
async def test_exchange_accepts_form_encoded_response(flow_config) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            text="access_token=form-token&token_type=bearer&scope=read",
            headers={"content-type": "application/x-www-form-urlencoded; charset=utf-8"},
        )

    client = OAuthClient(flow_config, transport=httpx.MockTransport(handler))

    result = await client.exchange_authorization_code("code")

    assert result.access_token == "form-token"
    assert result.scope == "read"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(400, json={"error": "invalid_grant"}),
        httpx.Response(502, text="bad gateway"),
        httpx.Response(200, json={"token_type": "Bearer"}),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, text="<html>oops</html>", headers={"content-type": "text/html"}),
        httpx.Response(200, json={"access_token": "a", "expires_in": "soon"}),
        httpx.Response(200, json={"access_token": "a", "scope": ["read", "write"]}),
    ],
)
async def test_exchange_rejects_unusable_responses(flow_config, response) -> None:
    client = OAuthClient(
        flow_config, transport=httpx.MockTransport(lambda request: response)
    )

    with pytest.raises(OAuthTokenExchangeError):
        await client.exchange_authorization_code("code")


@pytest.mark.anyio
@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
    ],
)
async def test_exchange_wraps_transport_errors(flow_config, error) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise error

    client = OAuthClient(flow_config, transport=httpx.MockTransport(handler))

    with pytest.raises(OAuthTokenExchangeError) as excinfo:
        await client.exchange_authorization_code("code")

    assert excinfo.value.__cause__ is error
