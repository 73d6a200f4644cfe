"""
End-to-end tests through the /graphql endpoint.
"""
import uuid

from staffhub.core.config import settings
from staffhub.graphql.context import GraphQLContext
from staffhub.graphql.schema import create_schema
from staffhub.models.employee import Employee
from staffhub.models.user import User
from tests.helpers import (
    DEFAULT_PASSWORD,
    auth_headers,
    create_admin,
    create_employee,
    create_user,
)

EMPLOYEE_FIELDS = """
    id employeeId firstName lastName fullName email age gender department position
    class subjects salary status isFlagged flagReason attendance fullAddress
"""

CREATE_EMPLOYEE = f"""
mutation Create($input: CreateEmployeeInput!) {{
  createEmployee(input: $input) {{ {EMPLOYEE_FIELDS} }}
}}
"""

UPDATE_EMPLOYEE = f"""
mutation Update($id: ID!, $input: UpdateEmployeeInput!) {{
  updateEmployee(id: $id, input: $input) {{ {EMPLOYEE_FIELDS} }}
}}
"""

LIST_EMPLOYEES = """
query List($filter: EmployeeFilter, $pagination: PaginationInput, $sort: SortInput) {
  employees(filter: $filter, pagination: $pagination, sort: $sort) {
    data { id employeeId firstName department }
    totalCount
    pageInfo { currentPage totalPages hasNextPage hasPreviousPage pageSize }
  }
}
"""


def gql(client, query: str, variables: dict | None = None, user: User | None = None, headers=None):
    headers = dict(headers or {})
    if user is not None:
        headers.update(auth_headers(user))
    r = client.post("/graphql", json={"query": query, "variables": variables or {}}, headers=headers)
    assert r.status_code == 200, r.text
    return r.json()


def error_code(body) -> str:
    assert body.get("errors"), body
    return body["errors"][0]["extensions"]["code"]


def employee_input(**overrides):
    data = {
        "firstName": "Grace",
        "lastName": "Hopper",
        "email": "grace@test.com",
        "age": 40,
        "department": "Engineering",
        "position": "Developer",
    }
    data.update(overrides)
    return data


def test_me_is_null_for_anonymous_and_bad_tokens(client, db_session):
    body = gql(client, "{ me { id } }")
    assert body["data"]["me"] is None
    assert "errors" not in body

    body = gql(client, "{ me { id } }", headers={"Authorization": "Bearer garbage"})
    assert body["data"]["me"] is None
    assert "errors" not in body


def test_login_then_me_includes_linked_employee(client, db_session):
    e = create_employee(db_session, "EMP001", "Ann")
    create_user(db_session, "ann@test.com", employee=e)

    body = gql(
        client,
        'mutation { login(input: {email: "ann@test.com", password: "%s"}) { token user { email role } } }'
        % DEFAULT_PASSWORD,
    )
    payload = body["data"]["login"]
    assert payload["user"] == {"email": "ann@test.com", "role": "EMPLOYEE"}

    body = gql(
        client,
        "{ me { email employee { employeeId fullName } } }",
        headers={"Authorization": f"Bearer {payload['token']}"},
    )
    assert body["data"]["me"]["employee"] == {"employeeId": "EMP001", "fullName": "Ann Tester"}


def test_login_wrong_password(client, db_session):
    create_user(db_session, "ann@test.com")
    body = gql(
        client,
        'mutation { login(input: {email: "ann@test.com", password: "wrong-one"}) { token } }',
    )
    assert error_code(body) == "UNAUTHENTICATED"
    assert body["errors"][0]["message"] == "Invalid email or password"


def test_register_mutation(client, db_session):
    body = gql(
        client,
        'mutation { register(input: {email: "boss@test.com", password: "secret1", role: ADMIN}) '
        "{ token user { email role employee { id } } } }",
    )
    user = body["data"]["register"]["user"]
    assert user == {"email": "boss@test.com", "role": "ADMIN", "employee": None}


def test_create_employee_guards(client, db_session):
    staff = create_user(db_session, "staff@test.com")

    body = gql(client, CREATE_EMPLOYEE, {"input": employee_input()})
    assert error_code(body) == "UNAUTHENTICATED"

    body = gql(client, CREATE_EMPLOYEE, {"input": employee_input()}, user=staff)
    assert error_code(body) == "FORBIDDEN"

    assert db_session.query(Employee).count() == 0


def test_admin_creates_employee(client, db_session):
    admin = create_admin(db_session)
    body = gql(
        client,
        CREATE_EMPLOYEE,
        {"input": employee_input(subjects=["Math", "Physics"], city="Boston", country="USA", **{"class": "Class B"})},
        user=admin,
    )
    created = body["data"]["createEmployee"]
    assert created["employeeId"] == "EMP001"
    assert created["fullName"] == "Grace Hopper"
    assert created["gender"] == "OTHER"
    assert created["status"] == "ACTIVE"
    assert created["class"] == "Class B"
    assert created["subjects"] == ["Math", "Physics"]
    assert created["attendance"] == 100.0
    assert created["fullAddress"] == "Boston, USA"

    body = gql(client, CREATE_EMPLOYEE, {"input": employee_input(firstName="Twin")}, user=admin)
    assert error_code(body) == "BAD_USER_INPUT"


def test_create_employee_validation_error(client, db_session):
    admin = create_admin(db_session)
    body = gql(client, CREATE_EMPLOYEE, {"input": employee_input(age=-1)}, user=admin)
    assert error_code(body) == "BAD_USER_INPUT"


def test_employees_query_search_sort_and_paginate(client, db_session):
    departments = ["Engineering", "Sales", "Engineering", "Design", "Engineering", "Engineering"]
    for i, dept in enumerate(departments, start=1):
        create_employee(db_session, f"EMP{i:03d}", f"Name{i}", department=dept, position="Analyst")

    body = gql(
        client,
        LIST_EMPLOYEES,
        {
            "filter": {"search": "eng"},
            "pagination": {"page": 1, "pageSize": 3},
            "sort": {"field": "DEPARTMENT", "direction": "ASC"},
        },
    )
    result = body["data"]["employees"]
    assert result["totalCount"] == 4
    assert len(result["data"]) == 3
    assert {row["department"] for row in result["data"]} == {"Engineering"}
    assert result["pageInfo"] == {
        "currentPage": 1,
        "totalPages": 2,
        "hasNextPage": True,
        "hasPreviousPage": False,
        "pageSize": 3,
    }


def test_employees_query_clamps_page_size(client, db_session):
    body = gql(client, LIST_EMPLOYEES, {"pagination": {"pageSize": 500}})
    assert body["data"]["employees"]["pageInfo"]["pageSize"] == 100


def test_single_employee_lookups(client, db_session):
    e = create_employee(db_session, "EMP001", "Ann")

    body = gql(client, "query($id: ID!) { employee(id: $id) { employeeId } }", {"id": str(e.id)})
    assert body["data"]["employee"] == {"employeeId": "EMP001"}

    body = gql(client, "query($id: ID!) { employee(id: $id) { id } }", {"id": str(uuid.uuid4())})
    assert body["data"]["employee"] is None
    assert "errors" not in body

    body = gql(client, '{ employeeByEmployeeId(employeeId: "EMP001") { firstName } }')
    assert body["data"]["employeeByEmployeeId"] == {"firstName": "Ann"}

    body = gql(client, '{ employeeByEmployeeId(employeeId: "EMP404") { firstName } }')
    assert body["data"]["employeeByEmployeeId"] is None


def test_employee_updates_own_profile_but_not_salary(client, db_session):
    e = create_employee(db_session, "EMP001", "Ann", salary=50000.0)
    other = create_employee(db_session, "EMP002", "Ben")
    user = create_user(db_session, "ann@test.com", employee=e)

    body = gql(client, UPDATE_EMPLOYEE, {"id": str(e.id), "input": {"city": "Paris"}}, user=user)
    assert body["data"]["updateEmployee"]["fullAddress"] == "Paris"

    body = gql(
        client,
        UPDATE_EMPLOYEE,
        {"id": str(e.id), "input": {"city": "Rome", "salary": 1e6}},
        user=user,
    )
    assert error_code(body) == "FORBIDDEN"

    body = gql(client, UPDATE_EMPLOYEE, {"id": str(other.id), "input": {"city": "Rome"}}, user=user)
    assert error_code(body) == "FORBIDDEN"

    db_session.expire_all()
    stored = db_session.get(Employee, e.id)
    assert stored.city == "Paris"
    assert stored.salary == 50000.0


def test_flag_and_unflag(client, db_session):
    admin = create_admin(db_session)
    e = create_employee(db_session, "EMP001", "Ann")

    body = gql(
        client,
        'mutation($id: ID!) { flagEmployee(id: $id, reason: "Documents incomplete") { isFlagged flagReason } }',
        {"id": str(e.id)},
        user=admin,
    )
    assert body["data"]["flagEmployee"] == {"isFlagged": True, "flagReason": "Documents incomplete"}

    body = gql(
        client,
        "mutation($id: ID!) { unflagEmployee(id: $id) { isFlagged flagReason } }",
        {"id": str(e.id)},
        user=admin,
    )
    assert body["data"]["unflagEmployee"] == {"isFlagged": False, "flagReason": None}


def test_delete_and_bulk_mutations(client, db_session):
    admin = create_admin(db_session)
    a = create_employee(db_session, "EMP001", "Ann")
    b = create_employee(db_session, "EMP002", "Ben")
    c = create_employee(db_session, "EMP003", "Cat")
    create_user(db_session, "ann@test.com", employee=a)

    body = gql(
        client,
        "mutation($ids: [ID!]!) { bulkUpdateStatus(ids: $ids, status: ON_LEAVE) }",
        {"ids": [str(b.id), str(c.id), str(uuid.uuid4())]},
        user=admin,
    )
    assert body["data"]["bulkUpdateStatus"] == 2

    body = gql(client, "mutation($id: ID!) { deleteEmployee(id: $id) }", {"id": str(a.id)}, user=admin)
    assert body["data"]["deleteEmployee"] is True
    assert db_session.query(User).filter(User.email == "ann@test.com").count() == 0

    body = gql(client, "mutation($id: ID!) { deleteEmployee(id: $id) }", {"id": str(a.id)}, user=admin)
    assert error_code(body) == "NOT_FOUND"

    body = gql(
        client,
        "mutation($ids: [ID!]!) { bulkDeleteEmployees(ids: $ids) }",
        {"ids": [str(a.id), str(b.id), str(c.id)]},
        user=admin,
    )
    assert body["data"]["bulkDeleteEmployees"] == 2
    assert db_session.query(Employee).count() == 0


def test_dashboard_and_metadata_queries(client, db_session):
    create_employee(db_session, "EMP001", "Ann", department="Sales", position="Rep", status="ON_LEAVE")
    create_employee(db_session, "EMP002", "Ben", attendance=85.0)

    body = gql(
        client,
        "{ dashboardStats { totalEmployees activeEmployees onLeaveEmployees flaggedEmployees "
        "averageAttendance departmentCounts { department count } } departments positions }",
    )
    data = body["data"]
    assert data["dashboardStats"]["totalEmployees"] == 2
    assert data["dashboardStats"]["activeEmployees"] == 1
    assert data["dashboardStats"]["onLeaveEmployees"] == 1
    assert data["dashboardStats"]["averageAttendance"] == 90.0
    assert data["departments"] == ["Engineering", "Sales"]
    assert data["positions"] == ["Rep", "Software Engineer"]


def test_signup_flow(client, db_session):
    admin = create_admin(db_session)
    submit = """
    mutation($input: SignupRequestInput!) {
      submitSignupRequest(input: $input) { id email fullName status gender }
    }
    """
    signup_input = {
        "email": "a@x.com",
        "password": "hunter22",
        "firstName": "Alan",
        "lastName": "Turing",
        "age": 41,
    }

    body = gql(client, submit, {"input": signup_input})
    first = body["data"]["submitSignupRequest"]
    assert first["status"] == "PENDING"
    assert first["fullName"] == "Alan Turing"

    # anonymous callers see nothing, admins see the queue
    body = gql(client, "{ signupRequests { id } signupRequestCount }")
    assert body["data"] == {"signupRequests": [], "signupRequestCount": 0}
    body = gql(client, "{ signupRequests(status: PENDING) { id } signupRequestCount }", user=admin)
    assert body["data"] == {"signupRequests": [{"id": first["id"]}], "signupRequestCount": 1}

    body = gql(client, submit, {"input": signup_input})
    assert error_code(body) == "BAD_USER_INPUT"

    body = gql(
        client,
        'mutation($id: ID!) { rejectSignupRequest(id: $id, reason: "incomplete") { status rejectionReason } }',
        {"id": first["id"]},
        user=admin,
    )
    assert body["data"]["rejectSignupRequest"] == {"status": "REJECTED", "rejectionReason": "incomplete"}

    body = gql(client, submit, {"input": signup_input})
    second = body["data"]["submitSignupRequest"]
    assert second["status"] == "PENDING"
    assert second["id"] != first["id"]

    approve = """
    mutation($id: ID!) {
      approveSignupRequest(id: $id, input: {department: "Research", position: "Scientist", class: "Class C"}) {
        employeeId email department class
      }
    }
    """
    body = gql(client, approve, {"id": second["id"]}, user=admin)
    assert body["data"]["approveSignupRequest"] == {
        "employeeId": "EMP001",
        "email": "a@x.com",
        "department": "Research",
        "class": "Class C",
    }

    body = gql(client, approve, {"id": second["id"]}, user=admin)
    assert error_code(body) == "BAD_USER_INPUT"

    # the new account can sign in with the password it applied with
    body = gql(
        client,
        'mutation { login(input: {email: "a@x.com", password: "hunter22"}) { user { role employee { email } } } }',
    )
    assert body["data"]["login"]["user"] == {"role": "EMPLOYEE", "employee": {"email": "a@x.com"}}


def test_query_depth_is_limited(db_session, monkeypatch):
    monkeypatch.setattr(settings, "GRAPHQL_MAX_DEPTH", 1)
    schema = create_schema()
    result = schema.execute_sync(
        "{ employees { pageInfo { currentPage } } }",
        context_value=GraphQLContext(db=db_session, user=None),
    )
    assert result.errors
    assert "exceeds maximum operation depth" in result.errors[0].message


def test_unexpected_errors_are_masked_in_production(db_session, monkeypatch):
    monkeypatch.setattr(settings, "APP_ENV", "production")
    schema = create_schema()

    def explode(*args, **kwargs):
        raise RuntimeError("database exploded: secret details")

    monkeypatch.setattr("staffhub.services.employee_query.list_departments", explode)
    result = schema.execute_sync(
        "{ departments }",
        context_value=GraphQLContext(db=db_session, user=None),
    )
    assert result.errors[0].message == "Internal server error"

    # taxonomy errors keep their message and code
    result = schema.execute_sync(
        'mutation { flagEmployee(id: "x", reason: "r") { id } }',
        context_value=GraphQLContext(db=db_session, user=None),
    )
    assert result.errors[0].message == "Authentication required"
    assert result.errors[0].extensions["code"] == "UNAUTHENTICATED"


def test_multibyte_password_over_bcrypt_limit_is_bad_input(client, db_session):
    long_password = "é" * 40  # 40 characters, 80 bytes

    body = gql(
        client,
        "mutation($input: SignupRequestInput!) { submitSignupRequest(input: $input) { id } }",
        {
            "input": {
                "email": "wide@test.com",
                "password": long_password,
                "firstName": "Wide",
                "lastName": "Chars",
                "age": 30,
            }
        },
    )
    assert error_code(body) == "BAD_USER_INPUT"

    body = gql(
        client,
        "mutation($input: RegisterInput!) { register(input: $input) { token } }",
        {"input": {"email": "wide@test.com", "password": long_password}},
    )
    assert error_code(body) == "BAD_USER_INPUT"
    assert db_session.query(User).count() == 0
