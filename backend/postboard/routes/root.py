"""Routes mounted at the root: the greeting and a route that always fails."""

from postboard.pipeline import RequestContext, Respond, Router

GREETING = "Hello World from backend, Holaaaa Amigo!"


async def hello(ctx: RequestContext) -> Respond:
    return Respond(content=GREETING, media_type="text/plain")


async def fail(ctx: RequestContext) -> Respond:
    # Exercises the Error Boundary end to end
    raise RuntimeError("This route always fails")


def root_router() -> Router:
    router = Router()
    router.get("/", hello)
    router.get("/fail", fail)
    return router
