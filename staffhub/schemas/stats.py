from pydantic import BaseModel


class DepartmentCount(BaseModel):
    department: str
    count: int


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard"""
    total_employees: int = 0
    active_employees: int = 0
    on_leave_employees: int = 0
    flagged_employees: int = 0
    average_attendance: float = 0.0
    department_counts: list[DepartmentCount] = []
