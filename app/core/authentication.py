"""
Bearer token authentication.

Turns a bearer token into an AuthenticatedIdentity, or None. This step never
raises. A malformed or expired token and a token for an unknown account both
leave the request unauthenticated; the route policy decides what that means
for the route being called.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from jose import ExpiredSignatureError, JWTError

from app.core.security import decode_token
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

# Resolves an email to a stored account (or None)
IdentityLookup = Callable[[str], Optional[User]]


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """The caller resolved from a valid bearer token."""
    id: int
    email: str
    role: UserRole

    def has_role(self, role: UserRole) -> bool:
        # Exact match: ADMIN does not implicitly hold EMPLOYER or USER
        return self.role == role


def resolve_token_subject(token: str) -> Optional[str]:
    """Verify signature and expiry and return the email in "sub", failing closed."""
    try:
        payload = decode_token(token)
    except ExpiredSignatureError:
        logger.info("Rejected expired bearer token")
        return None
    except JWTError as e:
        logger.warning(f"Rejected invalid bearer token: {e}")
        return None

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        logger.warning("Rejected bearer token without a subject claim")
        return None
    return subject


def authenticate_token(token: Optional[str], lookup: IdentityLookup) -> Optional[AuthenticatedIdentity]:
    """
    Validate a bearer token and resolve it to an identity.

    Args:
        token: Raw token string, or None when the request carried no credentials
        lookup: Collaborator that loads an account by email

    Returns:
        AuthenticatedIdentity for a valid token naming an existing account,
        otherwise None
    """
    if token is None:
        return None

    email = resolve_token_subject(token)
    if email is None:
        return None

    user = lookup(email)
    if user is None:
        logger.warning(f"Bearer token references unknown account {email}")
        return None

    return AuthenticatedIdentity(id=user.id, email=user.email, role=user.role)
