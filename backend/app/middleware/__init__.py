# Middleware package init
"""
StudySphere Backend: Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging wraps the rest of the chain to measure its duration
    3. GZip and CORS are FastAPI/Starlette built-ins
"""
