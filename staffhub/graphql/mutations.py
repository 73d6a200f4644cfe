import strawberry
from strawberry.types import Info

from staffhub.graphql.inputs import (
    ApproveSignupInput,
    CreateEmployeeInput,
    LoginInput,
    RegisterInput,
    SignupRequestInput,
    UpdateEmployeeInput,
    to_model,
)
from staffhub.graphql.types import (
    AuthPayload,
    EmployeeStatusEnum,
    EmployeeType,
    SignupRequestType,
    UserType,
)
from staffhub.schemas import auth as auth_schemas
from staffhub.schemas import employee as employee_schemas
from staffhub.schemas import signup as signup_schemas
from staffhub.services import auth, employees, signup


@strawberry.type
class Mutation:
    # Auth
    @strawberry.mutation
    def login(self, info: Info, input: LoginInput) -> AuthPayload:
        token, user = auth.login(info.context.db, to_model(auth_schemas.LoginInput, input))
        return AuthPayload(token=token, user=UserType.from_model(user))

    @strawberry.mutation
    def register(self, info: Info, input: RegisterInput) -> AuthPayload:
        token, user = auth.register(info.context.db, to_model(auth_schemas.RegisterInput, input))
        return AuthPayload(token=token, user=UserType.from_model(user))

    # Employees
    @strawberry.mutation
    def create_employee(self, info: Info, input: CreateEmployeeInput) -> EmployeeType:
        employee = employees.create_employee(
            info.context.db,
            info.context.user,
            to_model(employee_schemas.EmployeeCreate, input),
        )
        return EmployeeType.from_model(employee)

    @strawberry.mutation
    def update_employee(
        self, info: Info, id: strawberry.ID, input: UpdateEmployeeInput
    ) -> EmployeeType:
        employee = employees.update_employee(
            info.context.db,
            info.context.user,
            id,
            to_model(employee_schemas.EmployeeUpdate, input),
        )
        return EmployeeType.from_model(employee)

    @strawberry.mutation
    def delete_employee(self, info: Info, id: strawberry.ID) -> bool:
        return employees.delete_employee(info.context.db, info.context.user, id)

    @strawberry.mutation
    def flag_employee(self, info: Info, id: strawberry.ID, reason: str) -> EmployeeType:
        employee = employees.flag_employee(info.context.db, info.context.user, id, reason)
        return EmployeeType.from_model(employee)

    @strawberry.mutation
    def unflag_employee(self, info: Info, id: strawberry.ID) -> EmployeeType:
        employee = employees.unflag_employee(info.context.db, info.context.user, id)
        return EmployeeType.from_model(employee)

    # Bulk operations
    @strawberry.mutation
    def bulk_delete_employees(self, info: Info, ids: list[strawberry.ID]) -> int:
        return employees.bulk_delete_employees(info.context.db, info.context.user, ids)

    @strawberry.mutation
    def bulk_update_status(
        self, info: Info, ids: list[strawberry.ID], status: EmployeeStatusEnum
    ) -> int:
        return employees.bulk_update_status(info.context.db, info.context.user, ids, status)

    # Signup requests
    @strawberry.mutation
    def submit_signup_request(self, info: Info, input: SignupRequestInput) -> SignupRequestType:
        request = signup.submit_signup_request(
            info.context.db, to_model(signup_schemas.SignupRequestCreate, input)
        )
        return SignupRequestType.from_model(request)

    @strawberry.mutation
    def approve_signup_request(
        self, info: Info, id: strawberry.ID, input: ApproveSignupInput
    ) -> EmployeeType:
        employee = signup.approve_signup_request(
            info.context.db,
            info.context.user,
            id,
            to_model(signup_schemas.ApproveSignupInput, input),
        )
        return EmployeeType.from_model(employee)

    @strawberry.mutation
    def reject_signup_request(
        self, info: Info, id: strawberry.ID, reason: str
    ) -> SignupRequestType:
        request = signup.reject_signup_request(info.context.db, info.context.user, id, reason)
        return SignupRequestType.from_model(request)
