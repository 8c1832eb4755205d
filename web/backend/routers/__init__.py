"""API route handlers."""

from .boxers import router as boxers_router
from .availability import router as availability_router
from .clubs import router as clubs_router
from .match_requests import router as match_requests_router
from .membership import router as membership_router
from .admin import router as admin_router
