"""
Business logic services.
"""

from .auth import AuthService
from .user import UserService
from .notification import NotificationService
from .tenant import TenantService
from .tenant_import import TenantImportService
from .payment import PaymentService
from .maintenance import MaintenanceService
from .messaging import MessagingService
from .reports import ReportService

__all__ = [
    'AuthService',
    'UserService',
    'NotificationService',
    'TenantService',
    'TenantImportService',
    'PaymentService',
    'MaintenanceService',
    'MessagingService',
    'ReportService',
]
