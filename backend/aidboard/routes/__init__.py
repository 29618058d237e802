# Routes package init
"""
Aid Board Backend - API Routes Package
=======================================

Route Inventory:
    - health.py:    GET   /health                     (liveness, plain "ok")
    - todos.py:     GET   /todos                      (list todos)
                    POST  /todos                      (create todo)
    - requests.py:  GET   /api/requests               (list service requests)
                    POST  /api/requests               (create service request)
                    PATCH /api/requests/{id}/status   (overwrite status)

Routes stay thin: FastAPI validates the body and path, the route picks the
session from get_db_session() and delegates to a service.
"""
