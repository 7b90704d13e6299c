"""Dependency injection for FastAPI endpoints"""

import logging
from fastapi import Depends, HTTPException, Request
from bizbook_api.config import settings
from bizbook_api.domain.exceptions import IdentityProviderError, InvalidCredentialsError
from bizbook_api.infrastructure.clients.identity import Identity, IdentityClient
from bizbook_api.infrastructure.observability.metrics import record_identity_failure


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_identity_client() -> IdentityClient:
    """Provide identity provider client instance"""
    return IdentityClient()


def get_demo_identity() -> Identity:
    return Identity(user_id=settings.demo_user_id, email=settings.demo_user_email, first_name="Demo", last_name="User")


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    request: Request,
    identity_client: IdentityClient = Depends(get_identity_client),
) -> Identity:
    """
    Resolve the caller from the Authorization header.

    - No credential: demo identity outside production, 401 in production
    - Rejected credential: 403
    - Provider failures propagate as IdentityProviderError (503)
    """
    token = _bearer_token(request)

    if token is None:
        if not settings.is_production:
            return get_demo_identity()
        record_identity_failure("missing")
        raise HTTPException(status_code=401, detail="Access token required")

    try:
        return await identity_client.verify(token)
    except InvalidCredentialsError:
        record_identity_failure("rejected")
        raise
    except IdentityProviderError as e:
        record_identity_failure("provider_error")
        logging.error(f"Identity provider error: {e}", extra={"request_id": get_request_id(request)})
        raise
