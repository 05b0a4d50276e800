"""Field value providers — resolve a FieldLocator to a raw request value."""

from typing import Any, Mapping, Optional

from starlette.requests import Request
from starlette.routing import Match

from fieldguard.validators.models import FieldKind, FieldLocator


class RequestFieldProvider:
    """Reads field values from a Starlette/FastAPI request.

    Path parameters come from the routed scope. When the request has not
    been routed yet (app-level middleware runs before the router), the app's
    routes are matched against the scope to recover them.
    """

    def __init__(self, request: Request):
        self.request = request
        self._path_params: Optional[Mapping[str, Any]] = None

    def lookup(self, locator: FieldLocator) -> Optional[str]:
        if locator.kind is FieldKind.PARAM:
            value = self.path_params.get(locator.name)
            return None if value is None else str(value)
        if locator.kind is FieldKind.QUERY_PARAM:
            # Repeated keys: the first occurrence wins
            values = self.request.query_params.getlist(locator.name)
            return values[0] if values else None
        if locator.kind is FieldKind.COOKIE:
            return self.request.cookies.get(locator.name)
        return self.request.headers.get(locator.key)

    @property
    def path_params(self) -> Mapping[str, Any]:
        if self._path_params is None:
            self._path_params = self.request.path_params or self._match_route()
        return self._path_params

    def _match_route(self) -> Mapping[str, Any]:
        app = self.request.scope.get("app")
        routes = getattr(getattr(app, "router", None), "routes", ())

        partial: Optional[Mapping[str, Any]] = None
        for route in routes:
            match, child_scope = route.matches(self.request.scope)
            if match == Match.FULL:
                return child_scope.get("path_params", {})
            if match == Match.PARTIAL and partial is None:
                partial = child_scope.get("path_params", {})
        return partial or {}


class MappingFieldProvider:
    """Reads field values from plain mappings.

    Useful outside an HTTP server and in tests. Header keys are matched
    case-insensitively.
    """

    def __init__(
        self,
        params: Optional[Mapping[str, str]] = None,
        query: Optional[Mapping[str, str]] = None,
        cookies: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self._sources: dict[FieldKind, Mapping[str, str]] = {
            FieldKind.PARAM: dict(params or {}),
            FieldKind.QUERY_PARAM: dict(query or {}),
            FieldKind.COOKIE: dict(cookies or {}),
            FieldKind.HEADER: {key.lower(): value for key, value in (headers or {}).items()},
        }

    def lookup(self, locator: FieldLocator) -> Optional[str]:
        return self._sources[locator.kind].get(locator.key)
