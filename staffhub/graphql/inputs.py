import dataclasses
from datetime import datetime
from typing import Optional, TypeVar

import strawberry
from pydantic import BaseModel, ValidationError

from staffhub.core.errors import from_validation_error
from staffhub.graphql.types import (
    EmployeeSortFieldEnum,
    EmployeeStatusEnum,
    GenderEnum,
    RoleEnum,
    SortDirectionEnum,
)

M = TypeVar("M", bound=BaseModel)


def to_model(model_cls: type[M], value) -> M | None:
    """
    Convert a strawberry input into its pydantic model. Arguments the client
    left out stay unset on the model, so partial updates can tell "omitted"
    apart from an explicit null.
    """
    if value is None or value is strawberry.UNSET:
        return None
    data = {
        f.name: getattr(value, f.name)
        for f in dataclasses.fields(value)
        if getattr(value, f.name) is not strawberry.UNSET
    }
    try:
        return model_cls(**data)
    except ValidationError as exc:
        raise from_validation_error(exc) from exc


@strawberry.input(name="EmployeeFilter", description="Filter input for employees")
class EmployeeFilterInput:
    search: Optional[str] = strawberry.UNSET
    department: Optional[str] = strawberry.UNSET
    status: Optional[EmployeeStatusEnum] = strawberry.UNSET
    gender: Optional[GenderEnum] = strawberry.UNSET
    is_flagged: Optional[bool] = strawberry.UNSET
    min_age: Optional[int] = strawberry.UNSET
    max_age: Optional[int] = strawberry.UNSET
    min_attendance: Optional[float] = strawberry.UNSET
    max_attendance: Optional[float] = strawberry.UNSET


@strawberry.input
class PaginationInput:
    page: Optional[int] = 1
    page_size: Optional[int] = 10


@strawberry.input
class SortInput:
    field: Optional[EmployeeSortFieldEnum] = strawberry.UNSET
    direction: Optional[SortDirectionEnum] = strawberry.UNSET


@strawberry.input
class CreateEmployeeInput:
    first_name: str
    last_name: str
    email: str
    age: int
    department: str
    position: str
    phone: Optional[str] = strawberry.UNSET
    avatar: Optional[str] = strawberry.UNSET
    date_of_birth: Optional[datetime] = strawberry.UNSET
    gender: Optional[GenderEnum] = strawberry.UNSET
    class_name: Optional[str] = strawberry.field(name="class", default=strawberry.UNSET)
    subjects: Optional[list[str]] = strawberry.UNSET
    salary: Optional[float] = strawberry.UNSET
    join_date: Optional[datetime] = strawberry.UNSET
    status: Optional[EmployeeStatusEnum] = strawberry.UNSET
    address: Optional[str] = strawberry.UNSET
    city: Optional[str] = strawberry.UNSET
    state: Optional[str] = strawberry.UNSET
    country: Optional[str] = strawberry.UNSET
    zip_code: Optional[str] = strawberry.UNSET


@strawberry.input
class UpdateEmployeeInput:
    first_name: Optional[str] = strawberry.UNSET
    last_name: Optional[str] = strawberry.UNSET
    email: Optional[str] = strawberry.UNSET
    phone: Optional[str] = strawberry.UNSET
    avatar: Optional[str] = strawberry.UNSET
    age: Optional[int] = strawberry.UNSET
    date_of_birth: Optional[datetime] = strawberry.UNSET
    gender: Optional[GenderEnum] = strawberry.UNSET
    department: Optional[str] = strawberry.UNSET
    position: Optional[str] = strawberry.UNSET
    class_name: Optional[str] = strawberry.field(name="class", default=strawberry.UNSET)
    subjects: Optional[list[str]] = strawberry.UNSET
    salary: Optional[float] = strawberry.UNSET
    status: Optional[EmployeeStatusEnum] = strawberry.UNSET
    is_flagged: Optional[bool] = strawberry.UNSET
    flag_reason: Optional[str] = strawberry.UNSET
    attendance: Optional[float] = strawberry.UNSET
    address: Optional[str] = strawberry.UNSET
    city: Optional[str] = strawberry.UNSET
    state: Optional[str] = strawberry.UNSET
    country: Optional[str] = strawberry.UNSET
    zip_code: Optional[str] = strawberry.UNSET


@strawberry.input
class LoginInput:
    email: str
    password: str


@strawberry.input
class RegisterInput:
    email: str
    password: str
    role: Optional[RoleEnum] = strawberry.UNSET


@strawberry.input(name="SignupRequestInput")
class SignupRequestInput:
    email: str
    password: str
    first_name: str
    last_name: str
    age: int
    phone: Optional[str] = strawberry.UNSET
    gender: Optional[GenderEnum] = strawberry.UNSET
    address: Optional[str] = strawberry.UNSET
    city: Optional[str] = strawberry.UNSET
    state: Optional[str] = strawberry.UNSET
    country: Optional[str] = strawberry.UNSET
    zip_code: Optional[str] = strawberry.UNSET


@strawberry.input(name="ApproveSignupInput")
class ApproveSignupInput:
    department: str
    position: str
    class_name: Optional[str] = strawberry.field(name="class", default=strawberry.UNSET)
    salary: Optional[float] = strawberry.UNSET
