import enum
from datetime import datetime
from pydantic import BaseModel, Field

from staffhub.models.enums import EmployeeStatus, Gender


class EmployeeSortField(str, enum.Enum):
    NAME = "NAME"
    EMAIL = "EMAIL"
    AGE = "AGE"
    DEPARTMENT = "DEPARTMENT"
    POSITION = "POSITION"
    JOIN_DATE = "JOIN_DATE"
    SALARY = "SALARY"
    ATTENDANCE = "ATTENDANCE"
    CREATED_AT = "CREATED_AT"


class SortDirection(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"


class EmployeeFilter(BaseModel):
    """All fields narrow with AND, except search which ORs across text columns."""
    search: str | None = None
    department: str | None = None
    status: EmployeeStatus | None = None
    gender: Gender | None = None
    is_flagged: bool | None = None
    min_age: int | None = None
    max_age: int | None = None
    min_attendance: float | None = None
    max_attendance: float | None = None


class EmployeeSort(BaseModel):
    field: EmployeeSortField | None = None
    direction: SortDirection | None = None


class EmployeeCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=320)
    phone: str | None = None
    avatar: str | None = None
    age: int = Field(ge=0, le=150)
    date_of_birth: datetime | None = None
    gender: Gender | None = None
    department: str = Field(min_length=1, max_length=100)
    position: str = Field(min_length=1, max_length=100)
    class_name: str | None = None
    subjects: list[str] | None = None
    salary: float | None = Field(default=None, ge=0)
    join_date: datetime | None = None
    status: EmployeeStatus | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None


class EmployeeUpdate(BaseModel):
    """
    Partial update. Only fields the caller actually sent are applied, so
    services read this with model_dump(exclude_unset=True).
    """
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=3, max_length=320)
    phone: str | None = None
    avatar: str | None = None
    age: int | None = Field(default=None, ge=0, le=150)
    date_of_birth: datetime | None = None
    gender: Gender | None = None
    department: str | None = Field(default=None, min_length=1, max_length=100)
    position: str | None = Field(default=None, min_length=1, max_length=100)
    class_name: str | None = None
    subjects: list[str] | None = None
    salary: float | None = Field(default=None, ge=0)
    status: EmployeeStatus | None = None
    is_flagged: bool | None = None
    flag_reason: str | None = None
    attendance: float | None = Field(default=None, ge=0, le=100)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None
