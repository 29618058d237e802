# Middleware package init
"""
Aid Board Backend - Middleware Package
=======================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    1. Request ID: correlation ID for every log line of the request
    2. Access Log: method, path, status and duration, tagged with the ID
    3. CORS: FastAPI's CORSMiddleware (any origin, method and header)

    Responses pass back through the chain in reverse, so the access log sees
    the final status and the request ID lands in the response headers.
"""
