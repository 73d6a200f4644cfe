from staffhub.core.errors import ForbiddenError, UnauthenticatedError
from staffhub.models.user import User


def require_auth(user: User | None) -> User:
    if user is None:
        raise UnauthenticatedError("Authentication required")
    return user


def require_admin(user: User | None) -> User:
    user = require_auth(user)
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user


def is_admin(user: User | None) -> bool:
    return user is not None and user.is_admin
