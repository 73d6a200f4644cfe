from datetime import datetime, timedelta, timezone

from staffhub.core.security import create_access_token, hash_password
from staffhub.models.employee import Employee
from staffhub.models.enums import Role
from staffhub.models.signup_request import SignupRequest
from staffhub.models.user import User
from staffhub.schemas.signup import SignupRequestCreate

DEFAULT_PASSWORD = "password123"

_BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def create_user(
    db,
    email: str,
    role: Role = Role.EMPLOYEE,
    employee: Employee | None = None,
    password: str = DEFAULT_PASSWORD,
) -> User:
    u = User(
        email=email,
        password=hash_password(password),
        role=role.value,
        employee_id=employee.id if employee else None,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def create_admin(db, email: str = "admin@test.com") -> User:
    return create_user(db, email, role=Role.ADMIN)


def create_employee(db, code: str, first_name: str, last_name: str = "Tester", **overrides) -> Employee:
    """
    Inserts a row directly. created_at is spaced out by the numeric part of the
    code so default ordering (created_at desc) is deterministic in tests.
    """
    number = int(code.replace("EMP", ""))
    values = dict(
        employee_id=code,
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name.lower()}.{last_name.lower()}@test.com",
        age=30,
        gender="OTHER",
        department="Engineering",
        position="Software Engineer",
        status="ACTIVE",
        attendance=95.0,
        created_at=_BASE_TIME + timedelta(minutes=number),
    )
    values.update(overrides)
    e = Employee(**values)
    db.add(e)
    db.commit()
    db.refresh(e)
    return e


def create_signup_request(db, email: str = "applicant@test.com", **overrides) -> SignupRequest:
    from staffhub.services.signup import submit_signup_request

    data = dict(
        email=email,
        password=DEFAULT_PASSWORD,
        first_name="Ada",
        last_name="Applicant",
        age=27,
    )
    data.update(overrides)
    return submit_signup_request(db, SignupRequestCreate(**data))


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user)}"}
