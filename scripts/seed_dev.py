# seed_dev.py
import random
from datetime import datetime, timezone

from dotenv import load_dotenv
from sqlalchemy.orm import Session

# Load environment variables before settings are built
load_dotenv()

from staffhub.core.security import hash_password
from staffhub.db.session import SessionLocal
from staffhub.models.employee import Employee
from staffhub.models.enums import EmployeeStatus, Role
from staffhub.models.user import User
from staffhub.services.employees import default_avatar, format_employee_code


DEPARTMENTS = ["Engineering", "Design", "Marketing", "Sales", "HR", "Finance", "Operations", "Product"]

POSITIONS = [
    "Software Engineer",
    "Senior Developer",
    "UI/UX Designer",
    "Marketing Manager",
    "Sales Representative",
    "HR Specialist",
    "Financial Analyst",
    "Product Manager",
    "Team Lead",
    "Director",
]

SUBJECTS = [
    ["Mathematics", "Physics", "Computer Science"],
    ["English", "Literature", "History"],
    ["Biology", "Chemistry", "Environmental Science"],
    ["Economics", "Business Studies", "Accounting"],
    ["Art", "Music", "Drama"],
    ["Physical Education", "Health", "Nutrition"],
]

CITIES = [
    ("New York", "NY", "USA"),
    ("Los Angeles", "CA", "USA"),
    ("Chicago", "IL", "USA"),
    ("Houston", "TX", "USA"),
    ("Phoenix", "AZ", "USA"),
    ("San Francisco", "CA", "USA"),
    ("Seattle", "WA", "USA"),
    ("Boston", "MA", "USA"),
]

STREETS = ["Main", "Oak", "Maple", "Cedar", "Pine"]

# (first, last, gender, age)
PEOPLE = [
    ("John", "Doe", "MALE", 32),
    ("Jane", "Smith", "FEMALE", 28),
    ("Michael", "Johnson", "MALE", 45),
    ("Emily", "Williams", "FEMALE", 35),
    ("David", "Brown", "MALE", 29),
    ("Sarah", "Davis", "FEMALE", 41),
    ("James", "Miller", "MALE", 38),
    ("Jennifer", "Wilson", "FEMALE", 33),
    ("Robert", "Moore", "MALE", 52),
    ("Lisa", "Taylor", "FEMALE", 26),
    ("William", "Anderson", "MALE", 44),
    ("Jessica", "Thomas", "FEMALE", 31),
    ("Daniel", "Jackson", "MALE", 36),
    ("Amanda", "White", "FEMALE", 27),
    ("Christopher", "Harris", "MALE", 48),
    ("Ashley", "Martin", "FEMALE", 34),
    ("Matthew", "Garcia", "MALE", 30),
    ("Stephanie", "Martinez", "FEMALE", 39),
    ("Andrew", "Robinson", "MALE", 42),
    ("Nicole", "Clark", "FEMALE", 25),
    ("Joshua", "Rodriguez", "MALE", 37),
    ("Megan", "Lewis", "FEMALE", 29),
    ("Kevin", "Lee", "MALE", 46),
    ("Rachel", "Walker", "FEMALE", 32),
    ("Brian", "Hall", "MALE", 40),
    ("Lauren", "Allen", "FEMALE", 28),
    ("Justin", "Young", "MALE", 35),
    ("Samantha", "King", "FEMALE", 43),
    ("Ryan", "Wright", "MALE", 31),
    ("Brittany", "Scott", "FEMALE", 24),
]

FLAGS = {5: "Performance review pending", 15: "Documents incomplete"}


def random_datetime(rng: random.Random, start: datetime, end: datetime) -> datetime:
    return start + (end - start) * rng.random()


def status_for(index: int) -> str:
    if index < 25:
        return EmployeeStatus.ACTIVE.value
    if index < 28:
        return EmployeeStatus.ON_LEAVE.value
    return EmployeeStatus.INACTIVE.value


# ---------- helpers ----------

def get_or_create_employee(db: Session, rng: random.Random, index: int) -> Employee:
    code = format_employee_code(index + 1)
    e = db.query(Employee).filter(Employee.employee_id == code).one_or_none()
    if e:
        return e

    first, last, gender, age = PEOPLE[index]
    city, state, country = CITIES[index % len(CITIES)]
    e = Employee(
        employee_id=code,
        first_name=first,
        last_name=last,
        email=f"{first.lower()}.{last.lower()}@staffhub.com",
        phone=f"+1-{rng.randint(100, 999)}-{rng.randint(100, 999)}-{rng.randint(1000, 9999)}",
        avatar=default_avatar(first, last),
        age=age,
        date_of_birth=random_datetime(
            rng,
            datetime(1970, 1, 1, tzinfo=timezone.utc),
            datetime(2000, 12, 31, tzinfo=timezone.utc),
        ),
        gender=gender,
        department=DEPARTMENTS[index % len(DEPARTMENTS)],
        position=POSITIONS[index % len(POSITIONS)],
        class_name=f"Class {chr(65 + index % 5)}",
        salary=round(50000 + rng.random() * 100000, 2),
        join_date=random_datetime(
            rng,
            datetime(2018, 1, 1, tzinfo=timezone.utc),
            datetime(2023, 12, 31, tzinfo=timezone.utc),
        ),
        status=status_for(index),
        is_flagged=index in FLAGS,
        flag_reason=FLAGS.get(index),
        attendance=round(85 + rng.random() * 15, 1),
        address=f"{rng.randint(100, 9999)} {STREETS[index % len(STREETS)]} Street",
        city=city,
        state=state,
        country=country,
        zip_code=str(rng.randint(10000, 99998)),
    )
    e.subjects = SUBJECTS[index % len(SUBJECTS)]
    db.add(e)
    db.commit()
    db.refresh(e)
    return e


def get_or_create_user(
    db: Session, email: str, password: str, role: Role, employee: Employee | None = None
) -> User:
    u = db.query(User).filter(User.email == email).one_or_none()
    if u:
        # keep the role and link up to date in dev
        changed = False
        if u.role != role.value:
            u.role = role.value
            changed = True
        employee_id = employee.id if employee else None
        if u.employee_id != employee_id:
            u.employee_id = employee_id
            changed = True
        if changed:
            db.commit()
            db.refresh(u)
        return u

    u = User(
        email=email,
        password=hash_password(password),
        role=role.value,
        employee_id=employee.id if employee else None,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


# ---------- main ----------

def main():
    rng = random.Random(42)
    db = SessionLocal()
    try:
        employees = [get_or_create_employee(db, rng, i) for i in range(len(PEOPLE))]

        get_or_create_user(db, "admin@staffhub.com", "admin123", Role.ADMIN)
        get_or_create_user(db, "john@staffhub.com", "employee123", Role.EMPLOYEE, employees[0])

        print(f"Seeded {len(employees)} employees")
        print("Admin:    admin@staffhub.com / admin123")
        print(f"Employee: john@staffhub.com / employee123 (linked to {employees[0].employee_id})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
