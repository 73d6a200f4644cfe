import json
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from staffhub.db.base import Base
from staffhub.models.enums import EmployeeStatus, Gender


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Human-facing code, EMP001, EMP002, ...
    employee_id: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)

    age: Mapped[int] = mapped_column(Integer, nullable=False)
    date_of_birth: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    gender: Mapped[str] = mapped_column(String(20), nullable=False, default=Gender.OTHER.value)

    department: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    class_name: Mapped[str | None] = mapped_column("class", String(100), nullable=True)
    subjects_json: Mapped[str | None] = mapped_column("subjects", Text, nullable=True)
    salary: Mapped[float | None] = mapped_column(Float, nullable=True)
    join_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    status: Mapped[str] = mapped_column(String(20), index=True, nullable=False, default=EmployeeStatus.ACTIVE.value)

    is_flagged: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    flag_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    attendance: Mapped[float] = mapped_column(Float, default=100.0, nullable=False)

    address: Mapped[str | None] = mapped_column(String(300), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(20), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    @property
    def subjects(self) -> list[str] | None:
        if self.subjects_json is None:
            return None
        try:
            value = json.loads(self.subjects_json)
        except ValueError:
            return None
        return [str(s) for s in value] if isinstance(value, list) else None

    @subjects.setter
    def subjects(self, value: list[str] | None) -> None:
        self.subjects_json = json.dumps(list(value)) if value is not None else None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def full_address(self) -> str | None:
        parts = [p for p in (self.address, self.city, self.state, self.zip_code, self.country) if p]
        return ", ".join(parts) if parts else None
