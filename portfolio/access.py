from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect

from .models import UserRole
from .notify import notify


def is_admin(user) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    return UserRole.objects.filter(user=user, role=UserRole.ROLE_ADMIN).exists()


def admin_required(view):
    """No session -> login page; signed in without the admin role -> public page."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        if not is_admin(request.user):
            notify(request, "Access Denied", "You don't have admin privileges", destructive=True)
            return redirect("portfolio:home")
        return view(request, *args, **kwargs)

    return wrapper
