"""Identity provider HTTP client for verifying bearer credentials"""

import httpx
from dataclasses import dataclass
from typing import Optional
from bizbook_api.domain.exceptions import IdentityProviderError, InvalidCredentialsError
from bizbook_api.config import settings


@dataclass(frozen=True)
class Identity:
    """Verified caller"""

    user_id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class IdentityClient:
    """Client for the external identity provider's token verification API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.identity_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def verify(self, token: str) -> Identity:
        """
        Exchange a bearer token for the identity it was issued to.

        Raises:
            InvalidCredentialsError: Provider answered 401/403 (expired, revoked, forged)
            IdentityProviderError: On timeout, other HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/v1/tokens/verify",
                    headers={"Authorization": f"Bearer {token}"},
                )
                if response.status_code in (401, 403):
                    raise InvalidCredentialsError("Invalid or expired token")
                response.raise_for_status()
                data = response.json()

                return Identity(
                    user_id=str(data["user_id"]),
                    email=data["email"],
                    first_name=data.get("first_name"),
                    last_name=data.get("last_name"),
                )

            except httpx.TimeoutException as e:
                raise IdentityProviderError(f"Identity provider timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise IdentityProviderError(f"Identity provider error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise IdentityProviderError(f"Identity provider unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise IdentityProviderError(f"Invalid identity payload: {e}") from e
