from datetime import datetime

import bcrypt
from sqlalchemy import Enum as SAEnum

from student_hub.extensions import db
from student_hub.enums.app_enum import RoleEnum

# Fields shown on the student CV form, used for the completion percentage
PROFILE_FIELDS = (
    "phone",
    "date_of_birth",
    "gender",
    "address",
    "languages",
    "skills",
    "achievements",
    "projects",
    "certifications",
    "linkedin_url",
    "github_url",
    "portfolio_url",
)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(SAEnum(RoleEnum), nullable=False, default=RoleEnum.student)
    department = db.Column(db.String(100))

    # student only
    year = db.Column(db.Integer)
    student_id = db.Column(db.String(50), unique=True)

    is_active = db.Column(db.Boolean, nullable=False, default=True)

    phone = db.Column(db.String(20))
    date_of_birth = db.Column(db.Date)
    gender = db.Column(db.String(10))
    address = db.Column(db.Text)
    languages = db.Column(db.String(255))
    skills = db.Column(db.String(500))
    achievements = db.Column(db.Text)
    projects = db.Column(db.Text)
    certifications = db.Column(db.Text)
    linkedin_url = db.Column(db.String(255))
    github_url = db.Column(db.String(255))
    portfolio_url = db.Column(db.String(255))
    profile_picture = db.Column(db.String(500))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    activities = db.relationship(
        "Activity",
        back_populates="student",
        foreign_keys="Activity.student_id",
        cascade="all, delete-orphan",
        lazy="select"
    )

    def set_password(self, password: str):
        self.password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored bcrypt hash (the auth service shares this table)."""
        if not self.password_hash:
            return False
        return bcrypt.checkpw(password.encode("utf-8"), self.password_hash.encode("utf-8"))

    @property
    def is_admin(self):
        return self.role == RoleEnum.admin
