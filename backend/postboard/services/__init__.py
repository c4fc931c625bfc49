"""
PostBoard Backend: Services Layer
=================================

Terminal stages (the last element of each chain):
    - ResourceHandlers: create / list / get / update / delete over a ResourceStore
    - AuthDemoHandlers: login, protected and public demo routes

Handlers never touch FastAPI; they read a RequestContext and return an Outcome.
"""

from postboard.services.auth_service import AuthDemoHandlers
from postboard.services.resource_handlers import ResourceHandlers

__all__ = ["AuthDemoHandlers", "ResourceHandlers"]
