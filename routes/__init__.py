"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.containers import router as containers_router

__all__ = [
    "containers_router",
]
