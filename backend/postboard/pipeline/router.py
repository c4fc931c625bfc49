"""
PostBoard Backend: Router and Application Composer
==================================================

What:  Router maps (method, path template) to a Chain. Application mounts
       routers under prefixes and owns the Error Boundary.

Per-request states:
    Matching → Chaining → Handled
    Matching → Chaining → Errored → Handled

    Matching:  first registered route whose method and template fit wins;
               path parameters are merged into ctx.params. No match gives
               the built-in 404.
    Chaining:  Chain.run() (see chain.py)
    Errored:   a Fail outcome is rendered by the Error Boundary
    Handled:   exactly one Respond leaves dispatch()

Templates use FastAPI's {name} syntax so the same strings can be handed to
FastAPI.add_api_route() by the transport bridge.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Pattern, Tuple

from postboard.exceptions import PipelineError
from postboard.pipeline.boundary import ErrorBoundary
from postboard.pipeline.chain import Chain
from postboard.pipeline.context import Fail, RequestContext, Respond

logger = logging.getLogger(__name__)

_PARAM = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

NOT_FOUND = Respond(status_code=404, content={"message": "Not Found"})


def join_path(prefix: str, template: str) -> str:
    """join_path("/users", "/") == "/users"; join_path("", "/fail") == "/fail"."""
    joined = "/".join(part.strip("/") for part in (prefix, template) if part.strip("/"))
    return "/" + joined


def compile_template(template: str) -> Pattern[str]:
    """Turn "/users/{id}" into a regex with a named group per parameter."""
    pattern = ""
    position = 0
    for match in _PARAM.finditer(template):
        pattern += re.escape(template[position:match.start()])
        pattern += f"(?P<{match.group(1)}>[^/]+)"
        position = match.end()
    pattern += re.escape(template[position:])
    return re.compile(f"^{pattern}/?$")


@dataclass(frozen=True)
class Route:
    method: str
    template: str
    chain: Chain
    pattern: Pattern[str] = field(compare=False)

    @classmethod
    def build(cls, method: str, template: str, chain: Chain) -> "Route":
        return cls(method.upper(), template, chain, compile_template(template))

    def match(self, method: str, path: str) -> Optional[Dict[str, str]]:
        if method.upper() != self.method:
            return None
        found = self.pattern.match(path)
        return found.groupdict() if found else None


class Router:
    """
    Route table for one path prefix.

    Example:
        router = Router()
        router.get("/{id}", timestamp, handlers.get)
    """

    def __init__(self) -> None:
        self.routes: List[Route] = []

    def add(self, method: str, template: str, *stages: Any) -> Route:
        route = Route.build(method, template, Chain(stages))
        self.routes.append(route)
        return route

    def get(self, template: str, *stages: Any) -> Route:
        return self.add("GET", template, *stages)

    def post(self, template: str, *stages: Any) -> Route:
        return self.add("POST", template, *stages)

    def put(self, template: str, *stages: Any) -> Route:
        return self.add("PUT", template, *stages)

    def delete(self, template: str, *stages: Any) -> Route:
        return self.add("DELETE", template, *stages)

    def match(self, method: str, path: str) -> Optional[Tuple[Route, Dict[str, str]]]:
        for route in self.routes:
            params = route.match(method, path)
            if params is not None:
                return route, params
        return None


class Application:
    """
    Composition of mounted routers plus the Error Boundary.

    The boundary is registered last: once use_error_boundary() has been
    called, mount() refuses further routers, so no route can end up
    outside the boundary's reach.
    """

    def __init__(self) -> None:
        self._routes: List[Route] = []
        self._boundary: Optional[ErrorBoundary] = None

    @property
    def boundary(self) -> ErrorBoundary:
        if self._boundary is None:
            raise PipelineError(message="No error boundary registered")
        return self._boundary

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    def mount(self, prefix: str, router: Router) -> None:
        if self._boundary is not None:
            raise PipelineError(
                message=f"Cannot mount {prefix or '/'} after the error boundary was registered",
                context={"prefix": prefix},
            )
        for route in router.routes:
            full = Route.build(route.method, join_path(prefix, route.template), route.chain)
            self._routes.append(full)
            logger.debug("Mounted %s %s (%d stages)", full.method, full.template, len(full.chain))

    def use_error_boundary(self, boundary: ErrorBoundary) -> None:
        if self._boundary is not None:
            raise PipelineError(message="An error boundary is already registered")
        self._boundary = boundary

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def match(self, method: str, path: str) -> Optional[Tuple[Route, Dict[str, str]]]:
        for route in self._routes:
            params = route.match(method, path)
            if params is not None:
                return route, params
        return None

    async def handle(self, ctx: RequestContext) -> Respond:
        """Match ctx against every mounted route, then dispatch."""
        found = self.match(ctx.method, ctx.path)
        if found is None:
            return NOT_FOUND
        route, params = found
        ctx.params.update(params)
        return await self.dispatch(route, ctx)

    async def dispatch(self, route: Route, ctx: RequestContext) -> Respond:
        """Run an already-matched route; a Fail is rendered by the boundary."""
        boundary = self.boundary
        outcome = await route.chain.run(ctx)
        if isinstance(outcome, Fail):
            return boundary.render(outcome.error, ctx)
        return outcome
