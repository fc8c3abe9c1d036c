"""
HTTP API package.

FastAPI application, dependency container and routers.
"""
