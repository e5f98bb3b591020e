"""
Top‑level API router.

Aggregates the health check and one CRUD router per record kind.  The
application mounts this router under ``settings.api_prefix``
(``/api`` by default).
"""

from fastapi import APIRouter

from fitness_buddy_api.app.core.resources import RESOURCE_KINDS
from .endpoints import health
from .endpoints.records import build_record_router

router = APIRouter()

router.include_router(health.router, tags=["health"])
for kind in RESOURCE_KINDS:
    router.include_router(build_record_router(kind))
