"""Route authorization for the presentation layer.

Decides whether a view may render for a session, given the role freshly
resolved from the Role Store. Advisory only: every privileged operation is
still authorized server-side by app.services.rbac.
"""

from dataclasses import dataclass

from app.services.rbac import Role

LOGIN_PATH = "/login"
LANDING_PATH = "/dashboard"

# Sign-in and landing surfaces render for every session.
PUBLIC_PATHS = frozenset({"/", LOGIN_PATH, "/register"})

# Path -> roles allowed to view it. An empty set means any authenticated session.
ROUTE_ROLES: dict[str, frozenset[Role]] = {
    "/dashboard": frozenset(),
    "/profile": frozenset(),
    "/executive": frozenset({Role.ADMIN, Role.EXECUTIVE}),
    "/admin": frozenset({Role.ADMIN}),
}


@dataclass(frozen=True)
class RouteDecision:
    allowed: bool
    redirect_to: str | None = None


def normalize_path(path: str) -> str:
    """Strip query string and trailing slash; '' becomes '/'."""
    path = (path or "").split("?", 1)[0].split("#", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def required_roles(path: str) -> frozenset[Role]:
    """Roles required for path. Nested paths inherit from their first segment."""
    normalized = normalize_path(path)
    if normalized in ROUTE_ROLES:
        return ROUTE_ROLES[normalized]
    top = "/" + normalized.lstrip("/").split("/", 1)[0]
    return ROUTE_ROLES.get(top, frozenset())


def decide_route(path: str, authenticated: bool, role: Role | None) -> RouteDecision:
    """
    Public paths are always allowed. Otherwise unauthenticated sessions go to
    the sign-in surface, and authenticated sessions lacking a required role go
    to the default landing surface.
    """
    if normalize_path(path) in PUBLIC_PATHS:
        return RouteDecision(allowed=True)
    if not authenticated:
        return RouteDecision(allowed=False, redirect_to=LOGIN_PATH)
    roles = required_roles(path)
    if roles and (role is None or role not in roles):
        return RouteDecision(allowed=False, redirect_to=LANDING_PATH)
    return RouteDecision(allowed=True)
