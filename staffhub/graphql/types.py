from datetime import datetime
from typing import Optional

import strawberry
from strawberry.types import Info

from staffhub.models.employee import Employee
from staffhub.models.enums import EmployeeStatus, Gender, Role, SignupRequestStatus
from staffhub.models.signup_request import SignupRequest
from staffhub.models.user import User
from staffhub.schemas.employee import EmployeeSortField, SortDirection
from staffhub.schemas.pagination import Page, PageInfo
from staffhub.schemas.stats import DashboardStats

RoleEnum = strawberry.enum(Role, name="Role", description="User roles for authorization")
GenderEnum = strawberry.enum(Gender, name="Gender")
EmployeeStatusEnum = strawberry.enum(EmployeeStatus, name="EmployeeStatus")
SignupRequestStatusEnum = strawberry.enum(SignupRequestStatus, name="SignupRequestStatus")
EmployeeSortFieldEnum = strawberry.enum(EmployeeSortField, name="EmployeeSortField")
SortDirectionEnum = strawberry.enum(SortDirection, name="SortDirection")


@strawberry.type(name="Employee", description="Employee type - main data entity")
class EmployeeType:
    id: strawberry.ID
    employee_id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: Optional[str]
    avatar: Optional[str]
    age: int
    date_of_birth: Optional[datetime]
    gender: GenderEnum
    department: str
    position: str
    class_name: Optional[str] = strawberry.field(name="class")
    subjects: Optional[list[str]]
    salary: Optional[float]
    join_date: datetime
    status: EmployeeStatusEnum
    is_flagged: bool
    flag_reason: Optional[str]
    attendance: float
    address: Optional[str]
    city: Optional[str]
    state: Optional[str]
    country: Optional[str]
    zip_code: Optional[str]
    full_address: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, e: Employee) -> "EmployeeType":
        return cls(
            id=strawberry.ID(str(e.id)),
            employee_id=e.employee_id,
            first_name=e.first_name,
            last_name=e.last_name,
            full_name=e.full_name,
            email=e.email,
            phone=e.phone,
            avatar=e.avatar,
            age=e.age,
            date_of_birth=e.date_of_birth,
            gender=Gender(e.gender),
            department=e.department,
            position=e.position,
            class_name=e.class_name,
            subjects=e.subjects,
            salary=e.salary,
            join_date=e.join_date,
            status=EmployeeStatus(e.status),
            is_flagged=e.is_flagged,
            flag_reason=e.flag_reason,
            attendance=e.attendance,
            address=e.address,
            city=e.city,
            state=e.state,
            country=e.country,
            zip_code=e.zip_code,
            full_address=e.full_address,
            created_at=e.created_at,
            updated_at=e.updated_at,
        )


@strawberry.type(name="User", description="User type (for authentication)")
class UserType:
    id: strawberry.ID
    email: str
    role: RoleEnum
    created_at: datetime
    linked_employee_id: strawberry.Private[Optional[str]]

    @strawberry.field
    async def employee(self, info: Info) -> Optional[EmployeeType]:
        if not self.linked_employee_id:
            return None
        employee = await info.context.employee_loader.load(self.linked_employee_id)
        return EmployeeType.from_model(employee) if employee else None

    @classmethod
    def from_model(cls, u: User) -> "UserType":
        return cls(
            id=strawberry.ID(str(u.id)),
            email=u.email,
            role=Role(u.role),
            created_at=u.created_at,
            linked_employee_id=str(u.employee_id) if u.employee_id else None,
        )


@strawberry.type(description="Authentication response")
class AuthPayload:
    token: str
    user: UserType


@strawberry.type(name="PageInfo")
class PageInfoType:
    current_page: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    page_size: int

    @classmethod
    def from_schema(cls, p: PageInfo) -> "PageInfoType":
        return cls(**p.model_dump())


@strawberry.type(description="Paginated employee response")
class EmployeeConnection:
    data: list[EmployeeType]
    total_count: int
    page_info: PageInfoType

    @classmethod
    def from_page(cls, page: Page[Employee]) -> "EmployeeConnection":
        return cls(
            data=[EmployeeType.from_model(e) for e in page.data],
            total_count=page.total_count,
            page_info=PageInfoType.from_schema(page.page_info),
        )


@strawberry.type(name="DepartmentCount")
class DepartmentCountType:
    department: str
    count: int


@strawberry.type(name="DashboardStats")
class DashboardStatsType:
    total_employees: int
    active_employees: int
    on_leave_employees: int
    flagged_employees: int
    average_attendance: float
    department_counts: list[DepartmentCountType]

    @classmethod
    def from_schema(cls, s: DashboardStats) -> "DashboardStatsType":
        return cls(
            total_employees=s.total_employees,
            active_employees=s.active_employees,
            on_leave_employees=s.on_leave_employees,
            flagged_employees=s.flagged_employees,
            average_attendance=s.average_attendance,
            department_counts=[
                DepartmentCountType(department=d.department, count=d.count)
                for d in s.department_counts
            ],
        )


@strawberry.type(name="SignupRequest")
class SignupRequestType:
    id: strawberry.ID
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone: Optional[str]
    age: int
    gender: GenderEnum
    address: Optional[str]
    city: Optional[str]
    state: Optional[str]
    country: Optional[str]
    zip_code: Optional[str]
    status: SignupRequestStatusEnum
    rejection_reason: Optional[str]
    created_at: datetime

    @classmethod
    def from_model(cls, r: SignupRequest) -> "SignupRequestType":
        return cls(
            id=strawberry.ID(str(r.id)),
            email=r.email,
            first_name=r.first_name,
            last_name=r.last_name,
            full_name=r.full_name,
            phone=r.phone,
            age=r.age,
            gender=Gender(r.gender),
            address=r.address,
            city=r.city,
            state=r.state,
            country=r.country,
            zip_code=r.zip_code,
            status=SignupRequestStatus(r.status),
            rejection_reason=r.rejection_reason,
            created_at=r.created_at,
        )
