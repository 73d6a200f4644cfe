from staffhub.models.employee import Employee
from staffhub.models.signup_request import SignupRequest
from staffhub.models.user import User

__all__ = [ "Employee", "SignupRequest", "User" ]
