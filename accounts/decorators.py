from functools import wraps

from rest_framework.exceptions import NotAuthenticated, PermissionDenied

from accounts.roles import get_profile
from algorithms.exceptions import MissingProfile


def role_required(required_role):
    """
    Role-based decorator for API views.

    The wrapped view receives the caller's role profile as ``profile``.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            user = request.user

            # Check authentication
            if not user or not user.is_authenticated:
                raise NotAuthenticated("Authentication required")

            # Check role/user_type
            if user.user_type != required_role:
                raise PermissionDenied(f"Access denied. This endpoint is for {required_role}s only.")

            try:
                profile = get_profile(user)
            except MissingProfile:
                raise PermissionDenied(f"Access denied. This account has no {required_role} profile.")

            return view_func(request, *args, profile=profile, **kwargs)
        return wrapper
    return decorator
