"""
FastAPI dependencies for authentication and authorization.

Every router is built with route_class=PolicyEnforcedRoute. Its handler
resolves the bearer token and applies the route policy before FastAPI reads
or parses the request body, so a rejected request never reaches body
validation or handler code. The resolved identity is left on request.state
for the dependencies below.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.routing import APIRoute
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.authentication import AuthenticatedIdentity, authenticate_token
from app.core.database import get_db
from app.core.exceptions import AuthenticationError
from app.core.logging_config import bind_request_context, reset_request_context
from app.core.route_policy import authorize_request, route_path
from app.crud import user as user_crud
from app.models.user import User

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>).
# A missing or non-Bearer header yields None instead of an error.
security = HTTPBearer(auto_error=False)


def resolve_identity(request: Request, token: Optional[str]) -> Optional[AuthenticatedIdentity]:
    """
    Resolve a bearer token to an identity using a session from get_db.

    Honours app.dependency_overrides for get_db so tests can swap the database.
    Returns None for anonymous requests and for any token that fails
    verification; it never raises.
    """
    if token is None:
        return None

    session_provider = request.app.dependency_overrides.get(get_db, get_db)
    sessions = session_provider()
    db = next(sessions)
    try:
        return authenticate_token(token, lambda email: user_crud.get_by_email(db, email))
    finally:
        sessions.close()


class PolicyEnforcedRoute(APIRoute):
    """APIRoute whose handler runs the token filter and the route policy first."""

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def policy_enforced_handler(request: Request) -> Response:
            credentials = await security(request)
            token = credentials.credentials if credentials is not None else None
            identity = await run_in_threadpool(resolve_identity, request, token)

            path = route_path(request.scope)
            context = bind_request_context(request.method, path, identity.email if identity else None)
            try:
                # Raises AuthenticationError (401) / AuthorizationError (403)
                authorize_request(request.method, path, identity)
                request.state.identity = identity
                return await original_route_handler(request)
            finally:
                reset_request_context(context)

        return policy_enforced_handler


def get_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[AuthenticatedIdentity]:
    """
    The caller resolved by PolicyEnforcedRoute, or None.

    The bearer scheme dependency adds the Authorization header to the
    OpenAPI docs; the token itself was already checked before the body
    was read.
    """
    return getattr(request.state, "identity", None)


def require_identity(
    identity: Optional[AuthenticatedIdentity] = Depends(get_identity)
) -> AuthenticatedIdentity:
    """Return the authenticated caller for handlers that act on behalf of someone."""
    if identity is None:
        raise AuthenticationError()
    return identity


def get_current_user(
    identity: AuthenticatedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
) -> User:
    """
    Load the full account record for the authenticated caller.

    Raises:
        AuthenticationError 401: The account was removed after the token was checked
    """
    user = user_crud.get_by_id(db, identity.id)
    if user is None:
        logger.warning(f"Authenticated account {identity.email} no longer exists")
        raise AuthenticationError("Account no longer exists")
    return user
