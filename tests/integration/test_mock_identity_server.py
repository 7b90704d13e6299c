"""Identity client against the local mock identity server"""

import asyncio
import httpx
import pytest
from bizbook_api.domain.exceptions import InvalidCredentialsError
from bizbook_api.infrastructure.clients.identity import IdentityClient
from mock_services.identity_server.main import app as identity_app


def mock_server_client() -> IdentityClient:
    return IdentityClient(base_url="http://identity.local", transport=httpx.ASGITransport(app=identity_app))


def test_known_token_resolves():
    identity = asyncio.run(mock_server_client().verify("owner-token"))

    assert identity.user_id == "owner-1"
    assert identity.first_name == "Dana"


def test_unknown_token_rejected():
    with pytest.raises(InvalidCredentialsError):
        asyncio.run(mock_server_client().verify("nope"))
