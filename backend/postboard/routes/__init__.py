"""
PostBoard Backend: Route Tables
===============================

Route Inventory:
    - resources.py:  /users and /posts CRUD       (pipeline Router)
    - auth_demo.py:  /test-routes/...             (pipeline Router)
    - root.py:       GET / and GET /fail          (pipeline Router)
    - health.py:     GET /health                  (plain FastAPI APIRouter)

Routes are thin: they only say which stages run, in which order, for which
method and path. Behavior lives in pipeline stages and services.
"""
