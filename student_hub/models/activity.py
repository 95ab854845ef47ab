from datetime import datetime

from sqlalchemy import Enum as SAEnum

from student_hub.extensions import db
from student_hub.enums.app_enum import ActivityStatusEnum, ActivityTypeEnum

MAX_CREDITS = 10


class Activity(db.Model):
    __tablename__ = "activities"

    id = db.Column(db.Integer, primary_key=True)

    student_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    title = db.Column(db.String(200), nullable=False)
    type = db.Column(SAEnum(ActivityTypeEnum), nullable=False)
    description = db.Column(db.Text)
    date = db.Column(db.Date, nullable=False)
    duration = db.Column(db.String(50))
    organizer = db.Column(db.String(200))
    file_path = db.Column(db.String(500))

    status = db.Column(
        SAEnum(ActivityStatusEnum),
        nullable=False,
        default=ActivityStatusEnum.pending,
        index=True
    )
    credits = db.Column(db.Numeric(3, 1, asdecimal=False), nullable=False, default=0)
    remarks = db.Column(db.Text)

    approved_by = db.Column(db.Integer, db.ForeignKey("users.id"))
    reviewed_at = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    student = db.relationship("User", foreign_keys=[student_id], back_populates="activities")
    approver = db.relationship("User", foreign_keys=[approved_by])
