"""
Smart Student Hub - test configuration and fixtures
"""
from datetime import date, datetime

import pytest
from flask_jwt_extended import create_access_token

from student_hub import create_app
from student_hub.config import TestConfig
from student_hub.enums.app_enum import ActivityStatusEnum, ActivityTypeEnum, RoleEnum
from student_hub.extensions import db as _db
from student_hub.models import Activity, User


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=RoleEnum.student, **fields):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=fields.pop("name", f"{role.value.title()} {n}"),
            email=fields.pop("email", f"{role.value}{n}@example.edu"),
            role=role,
            department=fields.pop("department", "Computer Science"),
            is_active=fields.pop("is_active", True),
            **fields
        )
        if role == RoleEnum.student:
            user.year = user.year or 2
            user.student_id = user.student_id or f"STU{n:04d}"
        user.set_password("Password@123")
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def make_activity(db):
    def _make_activity(student, **fields):
        activity = Activity(
            student_id=student.id,
            title=fields.pop("title", "AI Workshop"),
            type=fields.pop("type", ActivityTypeEnum.workshop),
            date=fields.pop("date", date(2024, 3, 1)),
            credits=fields.pop("credits", 2),
            status=fields.pop("status", ActivityStatusEnum.pending),
            **fields
        )
        db.session.add(activity)
        db.session.commit()
        return activity

    return _make_activity


@pytest.fixture
def student(make_user):
    return make_user(RoleEnum.student, name="Asha Verma")


@pytest.fixture
def faculty(make_user):
    return make_user(RoleEnum.faculty, name="Dr. Rao")


@pytest.fixture
def admin(make_user):
    return make_user(RoleEnum.admin, name="Admin User", department="Administration")


def auth_headers(user):
    token = create_access_token(identity=str(user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(student):
    return auth_headers(student)


@pytest.fixture
def faculty_headers(faculty):
    return auth_headers(faculty)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def report_fixture(make_user, make_activity):
    """10 activities in H1 2024: 6 approved, 3 pending, 1 rejected."""
    cs = make_user(RoleEnum.student, department="Computer Science")
    me = make_user(RoleEnum.student, department="Mechanical")
    statuses = (
        [ActivityStatusEnum.approved] * 6
        + [ActivityStatusEnum.pending] * 3
        + [ActivityStatusEnum.rejected]
    )
    for index, status in enumerate(statuses):
        make_activity(
            cs if index % 2 == 0 else me,
            title=f"Activity {index}",
            type=ActivityTypeEnum.workshop if index < 5 else ActivityTypeEnum.conference,
            status=status,
            credits=2,
            created_at=datetime(2024, 1 + index // 2, 10, 12, 0)
        )
    # outside the window
    make_activity(cs, title="Late entry", created_at=datetime(2024, 7, 1, 0, 0))
    return cs, me
