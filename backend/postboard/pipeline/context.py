"""
PostBoard Backend: Request Context and Stage Outcomes
=====================================================

What:  The per-request state every stage sees, and the three things a stage
       can say about it.

Outcomes:
    Continue   → run the next stage
    Respond    → this is the response; remaining stages are skipped
    Fail       → hand the error to the Error Boundary; remaining stages skipped

RequestContext is created by the transport bridge when the request arrives
and dropped once the response is sent. It is never shared across requests.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union


@dataclass
class RequestContext:
    """
    Transient per-request state.

    Attributes:
        method:   Upper-case HTTP method
        path:     Request path without query string
        params:   Path parameters extracted by matching (e.g. {"id": "42"})
        query:    Query string parameters
        body:     Parsed JSON body, or None when the request had none
        headers:  Request headers, keys lower-cased
        state:    Fields added by middleware stages (received_at, request_id)
    """

    method: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    headers: Dict[str, str] = field(default_factory=dict)
    state: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.headers = {key.lower(): value for key, value in self.headers.items()}

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())


class Continue:
    """Stage finished its work; the chain moves on."""

    _instance: Optional["Continue"] = None

    def __new__(cls) -> "Continue":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CONTINUE"


CONTINUE = Continue()


@dataclass(frozen=True)
class Respond:
    """A finished response. content is JSON-serializable unless media_type says otherwise."""

    status_code: int = 200
    content: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    media_type: str = "application/json"


@dataclass(frozen=True)
class Fail:
    """An error for the Error Boundary to render."""

    error: BaseException


Outcome = Union[Continue, Respond, Fail]
