import csv
import io
import logging
from datetime import datetime, time, timedelta

from flask import Response, jsonify
from sqlalchemy import func

from student_hub.extensions import db
from student_hub.enums.app_enum import ActivityStatusEnum, RoleEnum
from student_hub.models import Activity, User
from student_hub.utils.scoring import compliance_metrics, system_health
from student_hub.utils.stats import (
    UNKNOWN,
    approved_credits,
    count_by,
    status_counts,
    status_percentages,
    top_performers
)

logger = logging.getLogger(__name__)

REPORT_NAME = "activity-report"

CSV_HEADER = [
    "Student Name", "Student ID", "Department", "Year", "Activity Title", "Type",
    "Date", "Credits", "Organizer", "Status", "Created Date", "Description"
]


def _csv_text(value):
    return "" if value is None else str(value)


def load_report_rows(start_date, end_date, status="all"):
    """
    Activities created within [start_date, end_date], both days inclusive,
    flattened together with their student's details.
    """
    start = datetime.combine(start_date, time.min)
    end_exclusive = datetime.combine(end_date + timedelta(days=1), time.min)

    query = (
        db.session.query(Activity, User)
        .outerjoin(User, Activity.student_id == User.id)
        .filter(Activity.created_at >= start)
        .filter(Activity.created_at < end_exclusive)
    )
    if status != "all":
        query = query.filter(Activity.status == ActivityStatusEnum(status))

    rows = []
    for activity, student in query.order_by(Activity.created_at.desc(), Activity.id.desc()).all():
        rows.append({
            "id": activity.id,
            "title": activity.title,
            "type": activity.type.value,
            "date": activity.date.isoformat() if activity.date else None,
            "credits": float(activity.credits or 0),
            "organizer": activity.organizer,
            "description": activity.description,
            "status": activity.status.value,
            "created_at": activity.created_at.isoformat() if activity.created_at else None,
            "student_name": student.name if student else None,
            "student_id": student.student_id if student else None,
            "department": student.department if student else None,
            "year": student.year if student else None
        })
    return rows


def summarize(rows, start_date, end_date):
    breakdown = status_counts(rows)
    summary = {
        "total_activities": len(rows),
        "total_approved_activities": breakdown[ActivityStatusEnum.approved.value],
        "total_credits": approved_credits(rows),
        "status_breakdown": breakdown,
        "status_percentages": status_percentages(breakdown),
        "department_breakdown": count_by(rows, "department"),
        "activity_type_breakdown": count_by(rows, "type"),
        "date_range": {
            "start": start_date.isoformat(),
            "end": end_date.isoformat()
        }
    }
    return summary


def rows_to_csv(rows) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow([
            _csv_text(row["student_name"]),
            _csv_text(row["student_id"]),
            _csv_text(row["department"]),
            _csv_text(row["year"]),
            _csv_text(row["title"]),
            _csv_text(row["type"]),
            _csv_text(row["date"]),
            row["credits"],
            _csv_text(row["organizer"]),
            _csv_text(row["status"]),
            _csv_text(row["created_at"]),
            _csv_text(row["description"])
        ])
    return "\ufeff" + buffer.getvalue()


def report_filename(start_date, end_date, name=REPORT_NAME):
    return f"{name}-{start_date.isoformat()}-to-{end_date.isoformat()}.csv"


class ReportService:

    @staticmethod
    def generate_report(query):
        """``query`` is a validated ReportQuery."""
        rows = load_report_rows(query.start_date, query.end_date, query.status)
        logger.info(
            "Report %s..%s status=%s format=%s: %d activities",
            query.start_date, query.end_date, query.status, query.format, len(rows)
        )

        if query.format == "csv":
            filename = report_filename(query.start_date, query.end_date)
            return Response(
                rows_to_csv(rows),
                mimetype="text/csv",
                headers={
                    "Content-Type": "text/csv; charset=utf-8",
                    "Content-Disposition": f'attachment; filename="{filename}"'
                }
            )

        summary = summarize(rows, query.start_date, query.end_date)
        activities = []
        for row in rows:
            activities.append({
                "id": row["id"],
                "title": row["title"],
                "type": row["type"],
                "date": row["date"],
                "credits": row["credits"],
                "organizer": row["organizer"],
                "description": row["description"],
                "status": row["status"],
                "created_at": row["created_at"],
                "student": {
                    "name": row["student_name"],
                    "student_id": row["student_id"],
                    "department": row["department"],
                    "year": row["year"]
                }
            })

        return jsonify({
            "summary": summary,
            "compliance": compliance_metrics(summary),
            "activities": activities
        }), 200

    @staticmethod
    def get_admin_stats():
        role_rows = db.session.query(User.role, func.count(User.id)).group_by(User.role).all()
        by_role = {role.value: count for role, count in role_rows}
        total_users = sum(by_role.values())

        activities = db.session.query(
            Activity.student_id, Activity.status, Activity.type, Activity.credits
        ).all()
        activity_dicts = [
            {"student_id": a.student_id, "status": a.status, "type": a.type, "credits": a.credits}
            for a in activities
        ]
        counts = status_counts(activity_dicts)

        department_users = (
            User.query
            .filter(User.role.in_([RoleEnum.student, RoleEnum.faculty]))
            .filter(User.department.isnot(None))
            .all()
        )
        department_stats = count_by(department_users, "department")
        type_stats = count_by(activity_dicts, "type")

        students = User.query.filter(User.role == RoleEnum.student).order_by(User.id.asc()).all()

        activity_stats = {
            "total_activities": len(activity_dicts),
            "pending_activities": counts[ActivityStatusEnum.pending.value],
            "approved_activities": counts[ActivityStatusEnum.approved.value],
            "rejected_activities": counts[ActivityStatusEnum.rejected.value]
        }

        return jsonify({
            "user_stats": {
                "total_users": total_users,
                "student_count": by_role.get(RoleEnum.student.value, 0),
                "faculty_count": by_role.get(RoleEnum.faculty.value, 0),
                "admin_count": by_role.get(RoleEnum.admin.value, 0)
            },
            "activity_stats": activity_stats,
            "department_stats": [
                {"department": department or UNKNOWN, "count": count}
                for department, count in department_stats.items()
            ],
            "activity_type_stats": [
                {"type": activity_type, "count": count}
                for activity_type, count in type_stats.items()
            ],
            "top_students": top_performers(students, activity_dicts),
            "health": system_health(
                activity_stats["total_activities"],
                activity_stats["pending_activities"],
                activity_stats["rejected_activities"],
                total_users
            )
        }), 200
