"""
PostBoard Backend: Stages and the Chain Dispatch Loop
=====================================================

What:  Runs an ordered list of stages against one RequestContext.
How:   A flat loop instead of nested next() callbacks:

    for stage in stages:
        Continue → keep going
        Respond  → return it (short-circuit)
        Fail     → return it (error transfer, remaining stages skipped)
        raise    → treated exactly like Fail(exc)

    Falling off the end without a Respond is a contract violation and
    becomes Fail(PipelineError), so every run ends in exactly one outcome
    that is either a Respond or a Fail.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from postboard.exceptions import PipelineError
from postboard.pipeline.context import Continue, Fail, Outcome, RequestContext, Respond

logger = logging.getLogger(__name__)

StageFunction = Callable[[RequestContext], Union[Outcome, Awaitable[Outcome]]]


class Stage(ABC):
    """
    One step of a middleware chain.

    Subclasses implement process(); they may mutate the context, and must
    return Continue, Respond or Fail.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def process(self, ctx: RequestContext) -> Outcome:
        ...


class FunctionStage(Stage):
    """Adapts a plain function or bound method (sync or async) to the Stage contract."""

    def __init__(self, func: StageFunction, name: Optional[str] = None):
        self._func = func
        self._name = name or getattr(func, "__qualname__", repr(func))

    @property
    def name(self) -> str:
        return self._name

    async def process(self, ctx: RequestContext) -> Outcome:
        result = self._func(ctx)
        if inspect.isawaitable(result):
            result = await result
        return result


def as_stage(candidate: Any) -> Stage:
    if isinstance(candidate, Stage):
        return candidate
    if callable(candidate):
        return FunctionStage(candidate)
    raise TypeError(f"Cannot use {candidate!r} as a pipeline stage")


class Chain:
    """
    Ordered stages for one route; the last one is normally the resource handler.
    """

    def __init__(self, stages: Sequence[Any]):
        if not stages:
            raise ValueError("A chain needs at least one stage")
        self.stages = tuple(as_stage(stage) for stage in stages)

    def __len__(self) -> int:
        return len(self.stages)

    async def run(self, ctx: RequestContext) -> Union[Respond, Fail]:
        for stage in self.stages:
            try:
                outcome = await stage.process(ctx)
            except Exception as exc:
                logger.debug("Stage %s raised %s", stage.name, type(exc).__name__)
                return Fail(exc)

            if isinstance(outcome, (Respond, Fail)):
                return outcome
            if not isinstance(outcome, Continue):
                return Fail(PipelineError(
                    message=f"Stage {stage.name} returned {outcome!r}",
                    context={"stage": stage.name},
                ))

        return Fail(PipelineError(
            message=f"Chain for {ctx.method} {ctx.path} finished without a response",
            context={"stages": [stage.name for stage in self.stages]},
        ))
