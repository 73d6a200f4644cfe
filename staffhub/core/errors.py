"""
Error taxonomy shared by the services and the GraphQL layer.

Each error carries a stable machine-readable ``code``. GraphQL copies the
``extensions`` dict of the original exception onto the formatted error, so
clients see ``{"extensions": {"code": "NOT_FOUND"}}``.
"""
from pydantic import ValidationError


class AppError(Exception):
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict[str, str]:
        return {"code": self.code}


class UnauthenticatedError(AppError):
    code = "UNAUTHENTICATED"


class ForbiddenError(AppError):
    code = "FORBIDDEN"


class NotFoundError(AppError):
    code = "NOT_FOUND"


class BadUserInputError(AppError):
    code = "BAD_USER_INPUT"


class InternalError(AppError):
    code = "INTERNAL_SERVER_ERROR"


def from_validation_error(exc: ValidationError) -> BadUserInputError:
    first = exc.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", "Invalid input")
    return BadUserInputError(f"{field}: {msg}" if field else msg)
