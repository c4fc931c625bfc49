"""
PostBoard Backend: Auth Demo Route Table (/test-routes)
=======================================================

    GET  /valid-route    AuthGate → protected   (403 without the token)
    GET  /normal-route   public
    POST /login          login                  (401 on bad credentials)
"""

from postboard.pipeline import AuthGate, Router
from postboard.services import AuthDemoHandlers


def auth_demo_router(handlers: AuthDemoHandlers, gate: AuthGate) -> Router:
    router = Router()
    router.get("/valid-route", gate, handlers.protected)
    router.get("/normal-route", handlers.public)
    router.post("/login", handlers.login)
    return router
