"""
Read side for employees: paginated listing, single lookups, dashboard
numbers and the distinct department/position pickers.
"""
import uuid
from typing import Iterable

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from staffhub.models.employee import Employee
from staffhub.models.enums import EmployeeStatus
from staffhub.schemas.employee import EmployeeFilter, EmployeeSort, EmployeeSortField, SortDirection
from staffhub.schemas.pagination import Page, PageInfo, PaginationInput
from staffhub.schemas.stats import DashboardStats, DepartmentCount

SORT_COLUMNS = {
    EmployeeSortField.NAME: Employee.first_name,
    EmployeeSortField.EMAIL: Employee.email,
    EmployeeSortField.AGE: Employee.age,
    EmployeeSortField.DEPARTMENT: Employee.department,
    EmployeeSortField.POSITION: Employee.position,
    EmployeeSortField.JOIN_DATE: Employee.join_date,
    EmployeeSortField.SALARY: Employee.salary,
    EmployeeSortField.ATTENDANCE: Employee.attendance,
    EmployeeSortField.CREATED_AT: Employee.created_at,
}

SEARCH_COLUMNS = (
    Employee.first_name,
    Employee.last_name,
    Employee.email,
    Employee.employee_id,
    Employee.department,
    Employee.position,
)


def parse_uuid(value) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError):
        return None


def apply_employee_filter(query, f: EmployeeFilter | None):
    if f is None:
        return query

    if f.search:
        # plain substring match; % and _ typed by the user are literals
        query = query.filter(
            or_(*(col.icontains(f.search, autoescape=True) for col in SEARCH_COLUMNS))
        )

    if f.department:
        query = query.filter(Employee.department == f.department)

    if f.status:
        query = query.filter(Employee.status == f.status.value)

    if f.gender:
        query = query.filter(Employee.gender == f.gender.value)

    if f.is_flagged is not None:
        query = query.filter(Employee.is_flagged.is_(f.is_flagged))

    if f.min_age is not None:
        query = query.filter(Employee.age >= f.min_age)
    if f.max_age is not None:
        query = query.filter(Employee.age <= f.max_age)

    if f.min_attendance is not None:
        query = query.filter(Employee.attendance >= f.min_attendance)
    if f.max_attendance is not None:
        query = query.filter(Employee.attendance <= f.max_attendance)

    return query


def employee_order_by(sort: EmployeeSort | None):
    field = sort.field if sort and sort.field else EmployeeSortField.CREATED_AT
    direction = sort.direction if sort and sort.direction else SortDirection.DESC
    column = SORT_COLUMNS.get(field, Employee.created_at)
    return column.asc() if direction == SortDirection.ASC else column.desc()


def list_employees(
    db: Session,
    filter: EmployeeFilter | None = None,
    pagination: PaginationInput | None = None,
    sort: EmployeeSort | None = None,
) -> Page[Employee]:
    page, page_size = (pagination or PaginationInput()).resolved()

    query = apply_employee_filter(db.query(Employee), filter)

    # Get total count before pagination
    total = query.count()

    # Apply pagination
    rows = (
        query.order_by(employee_order_by(sort))
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )

    return Page(
        data=rows,
        total_count=total,
        page_info=PageInfo.build(page=page, page_size=page_size, total_count=total),
    )


def get_employee(db: Session, employee_id) -> Employee | None:
    pk = parse_uuid(employee_id)
    if pk is None:
        return None
    return db.get(Employee, pk)


def get_employee_by_code(db: Session, code: str) -> Employee | None:
    return db.query(Employee).filter(Employee.employee_id == code).one_or_none()


def batch_load_employees(db: Session, ids: Iterable) -> list[Employee | None]:
    """Rows in the order requested; None for ids that match nothing."""
    keys = list(ids)
    wanted = [pk for pk in (parse_uuid(k) for k in keys) if pk is not None]
    found = {}
    if wanted:
        found = {e.id: e for e in db.query(Employee).filter(Employee.id.in_(wanted)).all()}
    return [found.get(parse_uuid(k)) for k in keys]


def dashboard_stats(db: Session) -> DashboardStats:
    total = db.query(func.count(Employee.id)).scalar() or 0
    active = (
        db.query(func.count(Employee.id))
        .filter(Employee.status == EmployeeStatus.ACTIVE.value)
        .scalar()
    )
    on_leave = (
        db.query(func.count(Employee.id))
        .filter(Employee.status == EmployeeStatus.ON_LEAVE.value)
        .scalar()
    )
    flagged = db.query(func.count(Employee.id)).filter(Employee.is_flagged.is_(True)).scalar()
    avg_attendance = db.query(func.avg(Employee.attendance)).scalar()

    count_col = func.count(Employee.id)
    dept_rows = (
        db.query(Employee.department, count_col)
        .group_by(Employee.department)
        .order_by(count_col.desc(), Employee.department.asc())
        .all()
    )

    return DashboardStats(
        total_employees=total,
        active_employees=active or 0,
        on_leave_employees=on_leave or 0,
        flagged_employees=flagged or 0,
        average_attendance=float(avg_attendance or 0),
        department_counts=[DepartmentCount(department=d, count=c) for d, c in dept_rows],
    )


def list_departments(db: Session) -> list[str]:
    rows = db.query(Employee.department).distinct().order_by(Employee.department.asc()).all()
    return [r[0] for r in rows]


def list_positions(db: Session) -> list[str]:
    rows = db.query(Employee.position).distinct().order_by(Employee.position.asc()).all()
    return [r[0] for r in rows]
