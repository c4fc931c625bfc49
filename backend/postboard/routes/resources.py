"""
PostBoard Backend: CRUD Route Table
===================================

Builds the pipeline Router mounted at /users and /posts:

    GET    /        timestamp → list
    POST   /        timestamp → create
    GET    /{id}    timestamp → param logger → get
    PUT    /{id}    timestamp → update
    DELETE /{id}    timestamp → delete
"""

from postboard.pipeline import ParamLogger, RequestTimestamp, Router
from postboard.services import ResourceHandlers


def resource_router(handlers: ResourceHandlers, timestamp: RequestTimestamp) -> Router:
    router = Router()
    router.get("/", timestamp, handlers.list)
    router.post("/", timestamp, handlers.create)
    router.get("/{id}", timestamp, ParamLogger(), handlers.get)
    router.put("/{id}", timestamp, handlers.update)
    router.delete("/{id}", timestamp, handlers.delete)
    return router
