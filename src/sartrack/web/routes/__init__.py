"""Route handlers for the Web API."""

from sartrack.web.routes.auth import router as auth_router
from sartrack.web.routes.behaviors import router as behaviors_router
from sartrack.web.routes.dogs import router as dogs_router
from sartrack.web.routes.exercises import links_router
from sartrack.web.routes.exercises import router as exercises_router
from sartrack.web.routes.health import router as health_router
from sartrack.web.routes.sessions import router as sessions_router
from sartrack.web.routes.skills import router as skills_router

__all__ = [
    "auth_router",
    "behaviors_router",
    "dogs_router",
    "exercises_router",
    "health_router",
    "links_router",
    "sessions_router",
    "skills_router",
]
