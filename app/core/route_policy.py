"""
Route authorization policy.

ROUTE_RULES is an ordered table of (method, path pattern, requirement). The
first rule whose method and pattern match the request decides; a request that
matches no rule must be authenticated.

Path patterns:
- "{name}" matches exactly one path segment and captures it
- a trailing "/**" matches the prefix itself and anything below it
"""

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Pattern, Tuple

from app.core.authentication import AuthenticatedIdentity
from app.core.config import settings
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.models.user import UserRole

logger = logging.getLogger(__name__)

ANY_METHOD = "*"
API = settings.API_PREFIX.rstrip("/")


class Requirement(str, enum.Enum):
    PUBLIC = "PUBLIC"
    AUTHENTICATED = "AUTHENTICATED"
    ROLE = "ROLE"
    OWNER_OR_ROLE = "OWNER_OR_ROLE"


def compile_path_pattern(pattern: str) -> Pattern[str]:
    """Translate a route pattern into an anchored regular expression."""
    suffix = ""
    if pattern.endswith("/**"):
        pattern = pattern[:-3]
        suffix = "(?:/.*)?"

    parts = []
    for segment in pattern.strip("/").split("/"):
        if segment.startswith("{") and segment.endswith("}"):
            parts.append(f"(?P<{segment[1:-1]}>[^/]+)")
        else:
            parts.append(re.escape(segment))

    return re.compile("^/" + "/".join(parts) + suffix + "$")


@dataclass(frozen=True)
class RouteRule:
    """One row of the policy table."""
    method: str
    pattern: str
    requirement: Requirement
    role: Optional[UserRole] = None
    regex: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.requirement in (Requirement.ROLE, Requirement.OWNER_OR_ROLE) and self.role is None:
            raise ValueError(f"{self.requirement.value} rule for {self.pattern} needs a role")
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "regex", compile_path_pattern(self.pattern))

    def match(self, method: str, path: str) -> Optional[Dict[str, str]]:
        """Return the captured path parameters if this rule applies, else None."""
        if self.method != ANY_METHOD and self.method != method.upper():
            return None
        found = self.regex.match(path)
        if found is None:
            return None
        return found.groupdict()


def _rules(methods: Tuple[str, ...], patterns: Tuple[str, ...], requirement: Requirement,
           role: Optional[UserRole] = None) -> Tuple[RouteRule, ...]:
    return tuple(
        RouteRule(method, pattern, requirement, role)
        for method in methods
        for pattern in patterns
    )


# Order matters: first match wins.
ROUTE_RULES: Tuple[RouteRule, ...] = (
    # API documentation
    *_rules((ANY_METHOD,), ("/docs", "/docs/**", "/redoc", "/openapi.json"), Requirement.PUBLIC),
    *_rules(("GET",), ("/health",), Requirement.PUBLIC),

    # Registration and login
    *_rules(("POST",), (f"{API}/auth/register", f"{API}/auth/login"), Requirement.PUBLIC),

    # Public job listings
    *_rules(("GET",), (f"{API}/jobs", f"{API}/jobs/{{id}}"), Requirement.PUBLIC),
    *_rules(("GET",), (f"{API}/categories",), Requirement.PUBLIC),

    # Role-based access
    *_rules((ANY_METHOD,), (f"{API}/admin/**",), Requirement.ROLE, UserRole.ADMIN),
    *_rules(("POST",), (f"{API}/jobs",), Requirement.ROLE, UserRole.EMPLOYER),
    *_rules(("PUT", "DELETE"), (f"{API}/jobs/{{id}}",), Requirement.ROLE, UserRole.EMPLOYER),
    *_rules(("POST",), (f"{API}/jobs/{{id}}/apply",), Requirement.ROLE, UserRole.USER),
    *_rules(("GET",), (f"{API}/applications",), Requirement.ROLE, UserRole.USER),

    # Self service ("me" must come before "{id}")
    *_rules((ANY_METHOD,), (f"{API}/users/me",), Requirement.AUTHENTICATED),
    *_rules(("GET", "PUT"), (f"{API}/users/{{id}}",), Requirement.OWNER_OR_ROLE, UserRole.ADMIN),
)

DEFAULT_RULE = RouteRule(ANY_METHOD, "/**", Requirement.AUTHENTICATED)


def route_path(scope: Dict) -> str:
    """The request path as routed, without the ASGI root_path mount prefix."""
    path = scope["path"]
    root_path = scope.get("root_path", "").rstrip("/")
    if root_path and (path == root_path or path.startswith(root_path + "/")):
        return path[len(root_path):] or "/"
    return path


def normalize_path(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


def find_rule(method: str, path: str,
              rules: Tuple[RouteRule, ...] = ROUTE_RULES) -> Tuple[RouteRule, Dict[str, str]]:
    """Return the first matching rule and its path parameters, or the default rule."""
    path = normalize_path(path)
    for rule in rules:
        params = rule.match(method, path)
        if params is not None:
            return rule, params
    return DEFAULT_RULE, {}


def _is_owner(identity: AuthenticatedIdentity, params: Dict[str, str]) -> bool:
    resource_id = params.get("id")
    if resource_id is None or not resource_id.isdigit():
        return False
    return int(resource_id) == identity.id


def check_rule(rule: RouteRule, identity: Optional[AuthenticatedIdentity], params: Dict[str, str]) -> None:
    """
    Enforce a single rule.

    Raises:
        AuthenticationError: The rule needs an identity and there is none (401)
        AuthorizationError: The identity lacks the required role or ownership (403)
    """
    if rule.requirement == Requirement.PUBLIC:
        return

    if identity is None:
        raise AuthenticationError()

    if rule.requirement == Requirement.AUTHENTICATED:
        return

    if rule.requirement == Requirement.ROLE:
        if not identity.has_role(rule.role):
            raise AuthorizationError(f"Requires role {rule.role.value}")
        return

    if rule.requirement == Requirement.OWNER_OR_ROLE:
        if not (_is_owner(identity, params) or identity.has_role(rule.role)):
            raise AuthorizationError(f"Only the account owner or role {rule.role.value} may access this resource")
        return

    raise AuthorizationError(f"Unsupported requirement {rule.requirement}")


def authorize_request(method: str, path: str, identity: Optional[AuthenticatedIdentity],
                      rules: Tuple[RouteRule, ...] = ROUTE_RULES) -> RouteRule:
    """
    Evaluate the policy table for a request.

    Returns:
        The rule that granted access

    Raises:
        AuthenticationError / AuthorizationError when access is denied
    """
    rule, params = find_rule(method, path, rules)
    try:
        check_rule(rule, identity, params)
    except (AuthenticationError, AuthorizationError) as e:
        who = identity.email if identity else "anonymous"
        logger.info(f"Denied {method} {path} for {who}: {rule.requirement.value} ({e.status_code})")
        raise
    logger.debug(f"Allowed {method} {path} by rule {rule.method} {rule.pattern} {rule.requirement.value}")
    return rule
