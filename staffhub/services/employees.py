"""
Write side for employees.

Every public function takes the acting user (or None for anonymous) and
enforces its own guard, so the GraphQL layer stays a thin adapter.
"""
import logging
from typing import Callable, Iterable, TypeVar

from sqlalchemy import Integer, cast, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from staffhub.core.errors import BadUserInputError, ForbiddenError, InternalError, NotFoundError
from staffhub.core.rbac import require_admin, require_auth
from staffhub.db.session import atomic
from staffhub.models.employee import Employee, utcnow
from staffhub.models.enums import EmployeeStatus, Gender
from staffhub.models.user import User
from staffhub.schemas.employee import EmployeeCreate, EmployeeUpdate
from staffhub.services.employee_query import get_employee, parse_uuid

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPLOYEE_CODE_PREFIX = "EMP"
MAX_CODE_ATTEMPTS = 3

# Fields only an admin may change
RESTRICTED_FIELDS = ("salary", "status", "is_flagged", "flag_reason", "attendance")

# Columns that may be changed but never cleared
NON_NULLABLE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "age",
    "gender",
    "department",
    "position",
    "status",
    "is_flagged",
    "attendance",
)


def format_employee_code(number: int) -> str:
    return f"{EMPLOYEE_CODE_PREFIX}{number:03d}"


def next_employee_code(db: Session) -> str:
    """
    Highest existing numeric suffix + 1, EMP001 on an empty table.

    Two concurrent callers can compute the same code; the unique index on
    employees.employee_id rejects the loser and run_with_code_retry starts
    its unit of work over.
    """
    suffix = func.substr(Employee.employee_id, len(EMPLOYEE_CODE_PREFIX) + 1)
    current = (
        db.query(func.max(cast(suffix, Integer)))
        .filter(Employee.employee_id.like(f"{EMPLOYEE_CODE_PREFIX}%"))
        .scalar()
    )
    return format_employee_code((current or 0) + 1)


def run_with_code_retry(db: Session, work: Callable[[], T]) -> T:
    for attempt in range(1, MAX_CODE_ATTEMPTS + 1):
        try:
            with atomic(db):
                return work()
        except IntegrityError as exc:
            logger.warning(
                "Integrity conflict while allocating employee code (attempt %d/%d): %s",
                attempt,
                MAX_CODE_ATTEMPTS,
                exc.orig,
            )
    raise InternalError("Could not allocate an employee code, please retry")


def default_avatar(first_name: str, last_name: str) -> str:
    return f"https://api.dicebear.com/7.x/avataaars/svg?seed={first_name}{last_name}"


def ensure_employee_email_available(db: Session, email: str, *, exclude: Employee | None = None):
    query = db.query(Employee.id).filter(Employee.email == email)
    if exclude is not None:
        query = query.filter(Employee.id != exclude.id)
    if query.first() is not None:
        raise BadUserInputError("Email already in use")


def _get_or_404(db: Session, employee_id) -> Employee:
    employee = get_employee(db, employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")
    return employee


def _parse_ids(ids: Iterable) -> list:
    return [pk for pk in (parse_uuid(i) for i in ids) if pk is not None]


def create_employee(db: Session, actor: User | None, payload: EmployeeCreate) -> Employee:
    admin = require_admin(actor)

    def work() -> Employee:
        ensure_employee_email_available(db, payload.email)
        employee = Employee(
            employee_id=next_employee_code(db),
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            phone=payload.phone,
            avatar=payload.avatar or default_avatar(payload.first_name, payload.last_name),
            age=payload.age,
            date_of_birth=payload.date_of_birth,
            gender=(payload.gender or Gender.OTHER).value,
            department=payload.department,
            position=payload.position,
            class_name=payload.class_name,
            salary=payload.salary,
            join_date=payload.join_date or utcnow(),
            status=(payload.status or EmployeeStatus.ACTIVE).value,
            address=payload.address,
            city=payload.city,
            state=payload.state,
            country=payload.country,
            zip_code=payload.zip_code,
        )
        employee.subjects = payload.subjects
        db.add(employee)
        db.flush()
        return employee

    employee = run_with_code_retry(db, work)
    logger.info("Employee %s (%s) created by %s", employee.employee_id, employee.id, admin.email)
    return employee


def update_employee(
    db: Session, actor: User | None, employee_id, payload: EmployeeUpdate
) -> Employee:
    user = require_auth(actor)
    employee = _get_or_404(db, employee_id)
    changes = payload.model_dump(exclude_unset=True)

    if not user.is_admin:
        if user.employee_id != employee.id:
            raise ForbiddenError("You can only update your own profile")
        for field in RESTRICTED_FIELDS:
            if field in changes:
                raise ForbiddenError(f"You don't have permission to update {field}")

    for field in NON_NULLABLE_FIELDS:
        if field in changes and changes[field] is None:
            raise BadUserInputError(f"{field} cannot be null")

    try:
        with atomic(db):
            if "email" in changes and changes["email"] != employee.email:
                ensure_employee_email_available(db, changes["email"], exclude=employee)

            for field, value in changes.items():
                if field in ("gender", "status"):
                    value = value.value
                setattr(employee, field, value)

            # flag_reason is set exactly when the employee is flagged
            if not employee.is_flagged:
                employee.flag_reason = None
            elif not (employee.flag_reason or "").strip():
                raise BadUserInputError("A flag reason is required")

            employee.updated_at = utcnow()
            db.flush()
    except IntegrityError:
        # lost a race with another writer claiming the same email
        raise BadUserInputError("Email already in use")

    logger.info("Employee %s updated by %s: %s", employee.employee_id, user.email, sorted(changes))
    return employee


def delete_employee(db: Session, actor: User | None, employee_id) -> bool:
    admin = require_admin(actor)
    employee = _get_or_404(db, employee_id)

    with atomic(db):
        # Linked users go first so no account is left pointing at nothing
        db.query(User).filter(User.employee_id == employee.id).delete(synchronize_session="fetch")
        db.delete(employee)

    logger.info("Employee %s deleted by %s", employee.employee_id, admin.email)
    return True


def bulk_delete_employees(db: Session, actor: User | None, ids: Iterable) -> int:
    admin = require_admin(actor)
    pks = _parse_ids(ids)
    if not pks:
        return 0

    with atomic(db):
        db.query(User).filter(User.employee_id.in_(pks)).delete(synchronize_session="fetch")
        deleted = (
            db.query(Employee)
            .filter(Employee.id.in_(pks))
            .delete(synchronize_session="fetch")
        )

    logger.info("Bulk delete by %s removed %d of %d employees", admin.email, deleted, len(pks))
    return deleted


def bulk_update_status(
    db: Session, actor: User | None, ids: Iterable, status: EmployeeStatus
) -> int:
    admin = require_admin(actor)
    pks = _parse_ids(ids)
    if not pks:
        return 0

    with atomic(db):
        updated = (
            db.query(Employee)
            .filter(Employee.id.in_(pks))
            .update(
                {Employee.status: status.value, Employee.updated_at: utcnow()},
                synchronize_session="fetch",
            )
        )

    logger.info("Bulk status %s by %s applied to %d employees", status.value, admin.email, updated)
    return updated


def flag_employee(db: Session, actor: User | None, employee_id, reason: str) -> Employee:
    admin = require_admin(actor)
    if not reason or not reason.strip():
        raise BadUserInputError("A flag reason is required")
    employee = _get_or_404(db, employee_id)

    with atomic(db):
        employee.is_flagged = True
        employee.flag_reason = reason
        employee.updated_at = utcnow()

    logger.info("Employee %s flagged by %s", employee.employee_id, admin.email)
    return employee


def unflag_employee(db: Session, actor: User | None, employee_id) -> Employee:
    admin = require_admin(actor)
    employee = _get_or_404(db, employee_id)

    with atomic(db):
        employee.is_flagged = False
        employee.flag_reason = None
        employee.updated_at = utcnow()

    logger.info("Employee %s unflagged by %s", employee.employee_id, admin.email)
    return employee
