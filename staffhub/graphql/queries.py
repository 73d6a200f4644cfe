from typing import Optional

import strawberry
from strawberry.types import Info

from staffhub.graphql.inputs import EmployeeFilterInput, PaginationInput, SortInput, to_model
from staffhub.graphql.types import (
    DashboardStatsType,
    EmployeeConnection,
    EmployeeType,
    SignupRequestStatusEnum,
    SignupRequestType,
    UserType,
)
from staffhub.schemas import employee as employee_schemas
from staffhub.schemas import pagination as pagination_schemas
from staffhub.services import employee_query, signup


# Resolvers are sync; their session calls run on the event loop thread.
@strawberry.type
class Query:
    @strawberry.field
    def employees(
        self,
        info: Info,
        filter: Optional[EmployeeFilterInput] = None,
        pagination: Optional[PaginationInput] = None,
        sort: Optional[SortInput] = None,
    ) -> EmployeeConnection:
        page = employee_query.list_employees(
            info.context.db,
            filter=to_model(employee_schemas.EmployeeFilter, filter),
            pagination=to_model(pagination_schemas.PaginationInput, pagination),
            sort=to_model(employee_schemas.EmployeeSort, sort),
        )
        return EmployeeConnection.from_page(page)

    @strawberry.field
    async def employee(self, info: Info, id: strawberry.ID) -> Optional[EmployeeType]:
        employee = await info.context.employee_loader.load(str(id))
        return EmployeeType.from_model(employee) if employee else None

    @strawberry.field
    def employee_by_employee_id(self, info: Info, employee_id: str) -> Optional[EmployeeType]:
        employee = employee_query.get_employee_by_code(info.context.db, employee_id)
        return EmployeeType.from_model(employee) if employee else None

    @strawberry.field
    def dashboard_stats(self, info: Info) -> DashboardStatsType:
        return DashboardStatsType.from_schema(employee_query.dashboard_stats(info.context.db))

    @strawberry.field
    def me(self, info: Info) -> Optional[UserType]:
        user = info.context.user
        return UserType.from_model(user) if user else None

    @strawberry.field
    def departments(self, info: Info) -> list[str]:
        return employee_query.list_departments(info.context.db)

    @strawberry.field
    def positions(self, info: Info) -> list[str]:
        return employee_query.list_positions(info.context.db)

    @strawberry.field
    def signup_requests(
        self, info: Info, status: Optional[SignupRequestStatusEnum] = None
    ) -> list[SignupRequestType]:
        rows = signup.list_signup_requests(info.context.db, info.context.user, status)
        return [SignupRequestType.from_model(r) for r in rows]

    @strawberry.field
    def signup_request_count(self, info: Info) -> int:
        return signup.count_pending_signup_requests(info.context.db, info.context.user)
