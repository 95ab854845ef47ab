import logging

from flask import jsonify
from pydantic import ValidationError
from sqlalchemy import or_

from student_hub.extensions import db
from student_hub.enums.app_enum import ActivityStatusEnum, RoleEnum
from student_hub.mappers.serializers import activity_to_dict, pagination_to_dict
from student_hub.models import Activity, User
from student_hub.schemas import validation_message
from student_hub.schemas.activity import ReviewRequest
from student_hub.utils.stats import approved_credits, status_counts
from student_hub.workflow import InvalidTransition, ReviewDecision, review_changes

logger = logging.getLogger(__name__)


class ReviewService:

    @staticmethod
    def get_pending_activities(page=1, limit=10):
        query = (
            Activity.query
            .filter(Activity.status == ActivityStatusEnum.pending)
            .order_by(Activity.created_at.desc(), Activity.id.desc())
        )
        result = query.paginate(page=page, per_page=limit, error_out=False)

        return jsonify({
            "activities": [activity_to_dict(a, include_student=True) for a in result.items],
            "pagination": pagination_to_dict(result)
        }), 200

    @staticmethod
    def get_all_activities(status=None, page=1, limit=10):
        query = Activity.query
        if status and status != "all":
            if status not in ActivityStatusEnum.__members__:
                return jsonify({"error": f"Invalid status '{status}'"}), 400
            query = query.filter(Activity.status == ActivityStatusEnum(status))

        result = query.order_by(Activity.updated_at.desc(), Activity.id.desc()).paginate(
            page=page,
            per_page=limit,
            error_out=False
        )

        return jsonify({
            "activities": [
                activity_to_dict(a, include_student=True, include_approver=True)
                for a in result.items
            ],
            "pagination": pagination_to_dict(result)
        }), 200

    @staticmethod
    def review_activity(reviewer, activity_id: int, payload: dict):
        try:
            data = ReviewRequest(**(payload or {}))
        except ValidationError as error:
            return jsonify({"error": "Validation error", "details": validation_message(error)}), 400

        activity = db.session.get(Activity, activity_id)
        if not activity:
            return jsonify({"error": "Activity not found"}), 404

        decision = ReviewDecision(status=data.status, credits=data.credits, remarks=data.remarks)
        try:
            changes = review_changes(activity, decision, reviewer.id)
        except InvalidTransition as error:
            return jsonify({"error": str(error)}), 409

        # guarded update: a concurrent reviewer who got there first leaves no pending row to match
        updated = (
            Activity.query
            .filter(Activity.id == activity_id, Activity.status == ActivityStatusEnum.pending)
            .update(changes, synchronize_session=False)
        )
        if updated != 1:
            db.session.rollback()
            logger.warning("Activity %s was reviewed concurrently; rejecting review by %s", activity_id, reviewer.id)
            return jsonify({"error": "Activity has already been reviewed"}), 409

        db.session.commit()
        db.session.refresh(activity)

        logger.info(
            "Activity %s %s by %s (credits=%s)",
            activity.id, activity.status.value, reviewer.id, activity.credits
        )

        return jsonify({
            "message": f"Activity {activity.status.value} successfully",
            "activity": activity_to_dict(activity, include_student=True, include_approver=True)
        }), 200

    @staticmethod
    def get_faculty_stats(reviewer):
        counts = status_counts(
            {"status": status} for (status,) in db.session.query(Activity.status).all()
        )

        reviewed_by_me = Activity.query.filter_by(approved_by=reviewer.id).count()
        recent_reviews = (
            Activity.query
            .filter_by(approved_by=reviewer.id)
            .order_by(Activity.reviewed_at.desc(), Activity.id.desc())
            .limit(5)
            .all()
        )

        return jsonify({
            "total_activities": sum(counts.values()),
            "pending_count": counts[ActivityStatusEnum.pending.value],
            "approved_count": counts[ActivityStatusEnum.approved.value],
            "rejected_count": counts[ActivityStatusEnum.rejected.value],
            "reviewed_by_me": reviewed_by_me,
            "recent_reviews": [activity_to_dict(a, include_student=True) for a in recent_reviews]
        }), 200

    @staticmethod
    def get_students(search=None, department=None, page=1, limit=20):
        query = User.query.filter(User.role == RoleEnum.student)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                User.name.ilike(pattern),
                User.email.ilike(pattern),
                User.student_id.ilike(pattern)
            ))
        if department and department != "all":
            query = query.filter(User.department == department)

        result = query.order_by(User.name.asc()).paginate(page=page, per_page=limit, error_out=False)

        student_ids = [student.id for student in result.items]
        activities = []
        if student_ids:
            activities = (
                db.session.query(Activity.student_id, Activity.status, Activity.credits)
                .filter(Activity.student_id.in_(student_ids))
                .all()
            )

        grouped = {}
        for row in activities:
            grouped.setdefault(row.student_id, []).append(
                {"status": row.status, "credits": row.credits}
            )

        students = []
        for student in result.items:
            owned = grouped.get(student.id, [])
            students.append({
                "id": student.id,
                "name": student.name,
                "email": student.email,
                "student_id": student.student_id,
                "department": student.department,
                "year": student.year,
                "activity_count": len(owned),
                "total_credits": approved_credits(owned),
                "status_counts": status_counts(owned)
            })

        return jsonify({
            "students": students,
            "pagination": pagination_to_dict(result)
        }), 200
