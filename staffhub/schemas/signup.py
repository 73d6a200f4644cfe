from pydantic import BaseModel, Field, field_validator

from staffhub.models.enums import Gender
from staffhub.schemas.auth import check_password_bytes


class SignupRequestCreate(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=6, max_length=72)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: str | None = None
    age: int = Field(ge=0, le=150)
    gender: Gender | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_bytes(v)


class ApproveSignupInput(BaseModel):
    department: str = Field(min_length=1, max_length=100)
    position: str = Field(min_length=1, max_length=100)
    class_name: str | None = None
    salary: float | None = Field(default=None, ge=0)
