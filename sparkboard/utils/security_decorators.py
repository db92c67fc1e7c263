"""
Security decorators for access control

The CRM and board screens are gated by role. The core itself never checks
roles; these helpers sit at the boundary where screens are served.
"""
from functools import wraps
from flask import abort
from flask_login import current_user


FINANCIAL_ROLES = ('ADMIN', 'MANAGER')


def has_role(user, roles):
    """True when no roles are required or the user holds one of them"""
    if not roles:
        return True
    return getattr(user, 'role', None) in roles


def can_access_financial(user):
    """Financial screens are limited to admins and managers"""
    return has_role(user, FINANCIAL_ROLES)


def require_role(*allowed_roles, financial=False):
    """
    Decorator to ensure the current user holds one of the given roles
    Usage: @require_role('ADMIN', 'MANAGER')
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401, description="Authentication required")

            if not has_role(current_user, allowed_roles):
                abort(403, description=f"This action requires {' or '.join(allowed_roles)} role")

            if financial and not can_access_financial(current_user):
                abort(403, description="Financial access requires ADMIN or MANAGER role")

            return f(*args, **kwargs)

        return decorated_function

    return decorator
