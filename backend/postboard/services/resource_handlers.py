"""
PostBoard Backend: Resource Handlers
====================================

What:  The five CRUD handlers, generic over a ResourceKind and bound to one
       injected ResourceStore.
How:   Each handler is an async (RequestContext) -> Outcome callable and is
       used as the last stage of a chain.

Responses (shown for users; posts use "post"/"Post"):
    create  201 {message: "User created successfully", user: {...}}
            400 {message: "All fields are required"}
            500 {message: <storage error>}
    list    200 {data: [...]}
    get     200 {data: {...}}                   | 404 {message: "User not found"}
    update  200 {message: "User updated successfully", user: {...}} | 404
    delete  200 {message: "User deleted successfully", user: {...}} | 404

Error policy:
    400/404 are answered here. Storage failures outside create are left to
    raise, which the chain turns into Fail and the Error Boundary renders.
"""

import logging

from postboard.exceptions import UpstreamError, ValidationError
from postboard.pipeline.context import Outcome, RequestContext, Respond
from postboard.resources import ResourceKind
from postboard.stores.base import ResourceStore

logger = logging.getLogger(__name__)


class ResourceHandlers:
    """
    CRUD handlers for one resource.

    Args:
        kind:   Resource definition (schemas, response key, messages)
        store:  Store instance owned by the composition root
    """

    def __init__(self, kind: ResourceKind, store: ResourceStore):
        self.kind = kind
        self.store = store

    def _not_found(self, ctx: RequestContext) -> Respond:
        logger.info("%s %s not found", self.kind.name, ctx.params.get("id"))
        return Respond(status_code=404, content={"message": self.kind.not_found_message()})

    async def create(self, ctx: RequestContext) -> Outcome:
        try:
            record = await self.store.create(ctx.body)
        except ValidationError as e:
            logger.info("Rejected %s create: %s %s", self.kind.name, e.message, e.context)
            return Respond(status_code=400, content={"message": e.message})
        except UpstreamError as e:
            return Respond(status_code=500, content={"message": e.message})

        logger.info("Created %s %s", self.kind.name, record.id)
        return Respond(
            status_code=201,
            content={
                "message": self.kind.done_message("created"),
                self.kind.name: record.model_dump(),
            },
        )

    async def list(self, ctx: RequestContext) -> Outcome:
        records = await self.store.list()
        return Respond(content={"data": [record.model_dump() for record in records]})

    async def get(self, ctx: RequestContext) -> Outcome:
        record = await self.store.get(ctx.params.get("id"))
        if record is None:
            return self._not_found(ctx)
        return Respond(content={"data": record.model_dump()})

    async def update(self, ctx: RequestContext) -> Outcome:
        record_id = ctx.params.get("id")
        if await self.store.get(record_id) is None:
            return self._not_found(ctx)

        try:
            changes = self.kind.parse_update(ctx.body)
        except ValidationError as e:
            return Respond(status_code=400, content={"message": e.message})

        record = await self.store.update(record_id, changes)
        if record is None:
            # Deleted by another request between the lookup and the update
            return self._not_found(ctx)
        return Respond(
            content={
                "message": self.kind.done_message("updated"),
                self.kind.name: record.model_dump(),
            },
        )

    async def delete(self, ctx: RequestContext) -> Outcome:
        record = await self.store.delete(ctx.params.get("id"))
        if record is None:
            return self._not_found(ctx)
        logger.info("Deleted %s %s", self.kind.name, record.id)
        return Respond(
            content={
                "message": self.kind.done_message("deleted"),
                self.kind.name: record.model_dump(),
            },
        )
