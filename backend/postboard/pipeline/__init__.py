"""
PostBoard Backend: Request Pipeline
===================================

    context.py   RequestContext + Continue / Respond / Fail outcomes
    chain.py     Stage contract and the Chain dispatch loop
    router.py    Router (route tables) and Application (composer)
    boundary.py  ErrorBoundary (uniform failure envelope)
    stages.py    RequestTimestamp, ParamLogger, AuthGate

Nothing in this package imports FastAPI; main.py bridges it to HTTP.
"""

from postboard.pipeline.boundary import ErrorBoundary
from postboard.pipeline.chain import Chain, FunctionStage, Stage
from postboard.pipeline.context import CONTINUE, Continue, Fail, Outcome, RequestContext, Respond
from postboard.pipeline.router import Application, Route, Router
from postboard.pipeline.stages import AuthGate, ParamLogger, RequestTimestamp

__all__ = [
    "Application",
    "AuthGate",
    "CONTINUE",
    "Chain",
    "Continue",
    "ErrorBoundary",
    "Fail",
    "FunctionStage",
    "Outcome",
    "ParamLogger",
    "RequestContext",
    "RequestTimestamp",
    "Respond",
    "Route",
    "Router",
    "Stage",
]
