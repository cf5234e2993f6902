"""Static route table for the ALB handler.

Adding a route is a data change: append a ``Route`` to the table handed to
``Router``. Paths match exactly; there are no wildcards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from .models import AlbRequest, AlbResponse


RouteHandler = Callable[["AlbRequest", "Span"], "AlbResponse"]


@dataclass(frozen=True)
class Route:
    """A path bound to a handler.

    Attributes:
        path: Exact request path.
        handler: Callable producing the response.
        methods: Upper-case methods accepted, or None for any method.
    """

    path: str
    handler: RouteHandler
    methods: frozenset[str] | None = None

    def accepts(self, method: str) -> bool:
        return self.methods is None or (method or "").upper() in self.methods


class Router:
    """Resolves (method, path) to a handler with a single fallback."""

    def __init__(self, routes: Iterable[Route], fallback: RouteHandler) -> None:
        self._routes: dict[str, Route] = {route.path: route for route in routes}
        self._fallback = fallback

    def route(self, method: str, path: str) -> RouteHandler:
        """Return the handler for the request, or the fallback when nothing matches."""
        route = self._routes.get(path)
        if route is None or not route.accepts(method):
            return self._fallback
        return route.handler
