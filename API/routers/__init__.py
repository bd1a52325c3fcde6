"""
API routers.
"""

from .auth import router as auth_router
from .users import router as users_router
from .tenants import router as tenants_router
from .payments import router as payments_router
from .maintenance import router as maintenance_router
from .notifications import router as notifications_router
from .messages import router as messages_router
from .reports import router as reports_router
from .portal import router as portal_router

__all__ = [
    'auth_router',
    'users_router',
    'tenants_router',
    'payments_router',
    'maintenance_router',
    'notifications_router',
    'messages_router',
    'reports_router',
    'portal_router',
]
