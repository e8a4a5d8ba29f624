"""API route handlers."""

from .matches import router as matches_router
from .events import router as events_router
