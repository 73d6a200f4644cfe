import logging

from sqlalchemy.orm import Session

from staffhub.core.errors import BadUserInputError, UnauthenticatedError
from staffhub.core.security import create_access_token, hash_password, verify_password
from staffhub.db.session import atomic
from staffhub.models.enums import Role
from staffhub.models.user import User
from staffhub.schemas.auth import LoginInput, RegisterInput

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


def login(db: Session, payload: LoginInput) -> tuple[str, User]:
    user = db.query(User).filter(User.email == payload.email).one_or_none()
    if user is None:
        logger.info("Failed login for unknown account")
        raise UnauthenticatedError(INVALID_CREDENTIALS)

    if not verify_password(payload.password, user.password):
        logger.info("Failed login for user %s", user.id)
        raise UnauthenticatedError(INVALID_CREDENTIALS)

    return create_access_token(user), user


def register(db: Session, payload: RegisterInput) -> tuple[str, User]:
    """
    Creates a user directly; meant for bootstrapping admins and seed data,
    regular staff go through the signup request flow.
    """
    if db.query(User.id).filter(User.email == payload.email).first() is not None:
        raise BadUserInputError("Email already registered")

    with atomic(db):
        user = User(
            email=payload.email,
            password=hash_password(payload.password),
            role=(payload.role or Role.EMPLOYEE).value,
        )
        db.add(user)
        db.flush()

    logger.info("Registered user %s with role %s", user.id, user.role)
    return create_access_token(user), user
