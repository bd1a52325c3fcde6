"""
Database models package.
Export all models for easy importing.
"""

# Users and authentication
from .user import (
    User,
    UserRole,
)

# Properties (MUST be imported before tenants - FK target)
from .property import Property

# Tenant ledger
from .tenant import (
    Tenant,
    PaymentStatus,
    TenantFilter,
    derive_payment_status,
    DASHBOARD_EXPIRY_DAYS,
    ALERT_EXPIRY_DAYS,
)

# Payments
from .payment import (
    Payment,
    PaymentMethod,
)

# Maintenance
from .maintenance import (
    Maintenance,
    MaintenanceCategory,
    MaintenancePriority,
    MaintenanceStatus,
    PRIORITY_ORDER,
)

# Sequences
from .counter import SequenceCounter, TENANT_SN

# Notifications and messaging
from .notification import (
    Notification,
    NotificationType,
    MessageLog,
    MessageChannel,
    MessageStatus,
)


__all__ = [
    # User
    'User',
    'UserRole',

    # Property
    'Property',

    # Tenant
    'Tenant',
    'PaymentStatus',
    'TenantFilter',
    'derive_payment_status',
    'DASHBOARD_EXPIRY_DAYS',
    'ALERT_EXPIRY_DAYS',

    # Payment
    'Payment',
    'PaymentMethod',

    # Maintenance
    'Maintenance',
    'MaintenanceCategory',
    'MaintenancePriority',
    'MaintenanceStatus',
    'PRIORITY_ORDER',

    # Sequences
    'SequenceCounter',
    'TENANT_SN',

    # Notifications
    'Notification',
    'NotificationType',
    'MessageLog',
    'MessageChannel',
    'MessageStatus',
]
