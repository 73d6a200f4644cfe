"""
Self-service signup: anyone may submit a request, an admin approves it
(provisioning an Employee and a linked User) or rejects it with a reason.
"""
import logging

from sqlalchemy.orm import Session

from staffhub.core.errors import BadUserInputError, NotFoundError
from staffhub.core.rbac import is_admin, require_admin
from staffhub.core.security import hash_password
from staffhub.db.session import atomic
from staffhub.models.employee import Employee
from staffhub.models.enums import EmployeeStatus, Gender, Role, SignupRequestStatus
from staffhub.models.signup_request import SignupRequest
from staffhub.models.user import User
from staffhub.schemas.signup import ApproveSignupInput, SignupRequestCreate
from staffhub.services.employee_query import parse_uuid
from staffhub.services.employees import default_avatar, next_employee_code, run_with_code_retry

logger = logging.getLogger(__name__)


def _get_request_or_404(db: Session, request_id) -> SignupRequest:
    pk = parse_uuid(request_id)
    request = db.get(SignupRequest, pk) if pk is not None else None
    if request is None:
        raise NotFoundError("Signup request not found")
    return request


def _assert_pending(request: SignupRequest) -> None:
    if request.status != SignupRequestStatus.PENDING.value:
        raise BadUserInputError("This request has already been processed")


def submit_signup_request(db: Session, payload: SignupRequestCreate) -> SignupRequest:
    if db.query(User.id).filter(User.email == payload.email).first() is not None:
        raise BadUserInputError("Email already registered")

    if db.query(Employee.id).filter(Employee.email == payload.email).first() is not None:
        raise BadUserInputError("Email already in use")

    with atomic(db):
        existing = (
            db.query(SignupRequest).filter(SignupRequest.email == payload.email).one_or_none()
        )
        if existing is not None:
            if existing.status == SignupRequestStatus.PENDING.value:
                raise BadUserInputError("A signup request with this email is already pending")
            if existing.status == SignupRequestStatus.APPROVED.value:
                raise BadUserInputError("A signup request with this email was already approved")
            # A rejected request is superseded by the new one
            db.delete(existing)
            db.flush()

        request = SignupRequest(
            email=payload.email,
            password=hash_password(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone=payload.phone,
            age=payload.age,
            gender=(payload.gender or Gender.OTHER).value,
            address=payload.address,
            city=payload.city,
            state=payload.state,
            country=payload.country,
            zip_code=payload.zip_code,
            status=SignupRequestStatus.PENDING.value,
        )
        db.add(request)
        db.flush()

    logger.info("Signup request %s submitted for %s", request.id, request.email)
    return request


def approve_signup_request(
    db: Session, actor: User | None, request_id, payload: ApproveSignupInput
) -> Employee:
    """
    Creates the Employee, the linked User (reusing the stored hash) and marks
    the request APPROVED as one unit of work. Nothing persists if any step fails.
    """
    admin = require_admin(actor)
    request = _get_request_or_404(db, request_id)
    _assert_pending(request)
    request_pk = request.id

    def work() -> Employee:
        # Re-read inside the unit of work; a retry starts from a rolled back session
        req = db.get(SignupRequest, request_pk)
        if req is None:
            raise NotFoundError("Signup request not found")
        _assert_pending(req)

        if db.query(Employee.id).filter(Employee.email == req.email).first() is not None:
            raise BadUserInputError("Email already in use")
        if db.query(User.id).filter(User.email == req.email).first() is not None:
            raise BadUserInputError("Email already registered")

        employee = Employee(
            employee_id=next_employee_code(db),
            first_name=req.first_name,
            last_name=req.last_name,
            email=req.email,
            phone=req.phone,
            avatar=default_avatar(req.first_name, req.last_name),
            age=req.age,
            gender=req.gender,
            department=payload.department,
            position=payload.position,
            class_name=payload.class_name,
            salary=payload.salary,
            status=EmployeeStatus.ACTIVE.value,
            address=req.address,
            city=req.city,
            state=req.state,
            country=req.country,
            zip_code=req.zip_code,
        )
        db.add(employee)
        db.flush()

        db.add(
            User(
                email=req.email,
                password=req.password,
                role=Role.EMPLOYEE.value,
                employee_id=employee.id,
            )
        )
        req.status = SignupRequestStatus.APPROVED.value
        db.flush()
        return employee

    employee = run_with_code_retry(db, work)
    logger.info(
        "Signup request %s approved by %s as employee %s",
        request_pk,
        admin.email,
        employee.employee_id,
    )
    return employee


def reject_signup_request(db: Session, actor: User | None, request_id, reason: str) -> SignupRequest:
    admin = require_admin(actor)
    request = _get_request_or_404(db, request_id)
    _assert_pending(request)

    if not reason or not reason.strip():
        raise BadUserInputError("A rejection reason is required")

    with atomic(db):
        request.status = SignupRequestStatus.REJECTED.value
        request.rejection_reason = reason

    logger.info("Signup request %s rejected by %s", request.id, admin.email)
    return request


def list_signup_requests(
    db: Session, actor: User | None, status: SignupRequestStatus | None = None
) -> list[SignupRequest]:
    """Admins see requests; everyone else gets an empty list rather than an error."""
    if not is_admin(actor):
        return []
    query = db.query(SignupRequest)
    if status:
        query = query.filter(SignupRequest.status == status.value)
    return query.order_by(SignupRequest.created_at.desc()).all()


def count_pending_signup_requests(db: Session, actor: User | None) -> int:
    if not is_admin(actor):
        return 0
    return (
        db.query(SignupRequest)
        .filter(SignupRequest.status == SignupRequestStatus.PENDING.value)
        .count()
    )
