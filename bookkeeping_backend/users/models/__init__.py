# users/models/__init__.py

from users.models.user import User, UserManager

__all__ = ["User", "UserManager"]
