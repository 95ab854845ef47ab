import logging

from flask import current_app, jsonify
from pydantic import ValidationError
from sqlalchemy import func

from student_hub.extensions import db
from student_hub.enums.app_enum import ActivityStatusEnum, ActivityTypeEnum
from student_hub.mappers.serializers import activity_to_dict, pagination_to_dict, user_summary
from student_hub.models import Activity
from student_hub.schemas import clean_form, validation_message
from student_hub.schemas.activity import ActivitySubmission
from student_hub.utils.cloudinary_helper import (
    CERTIFICATE_EXTENSIONS,
    FileValidationError,
    StorageNotConfigured,
    upload_file_to_cloudinary,
    validate_upload
)

logger = logging.getLogger(__name__)


class ActivityService:

    @staticmethod
    def submit_activity(student, payload: dict, certificate=None):
        try:
            data = ActivitySubmission(**clean_form(payload))
        except ValidationError as error:
            return jsonify({"error": "Validation error", "details": validation_message(error)}), 400

        file_path = None
        if certificate is not None and certificate.filename:
            try:
                validate_upload(
                    certificate,
                    CERTIFICATE_EXTENSIONS,
                    current_app.config["MAX_CERTIFICATE_SIZE"]
                )
                file_path = upload_file_to_cloudinary(
                    certificate,
                    folder=current_app.config["CERTIFICATE_FOLDER"]
                )
            except FileValidationError as error:
                return jsonify({"error": "Validation error", "details": str(error)}), 400
            except StorageNotConfigured as error:
                return jsonify({"error": str(error)}), 503
            except Exception as error:
                logger.exception("Certificate upload failed for student %s", student.id)
                return jsonify({"error": "Failed to upload certificate", "details": str(error)}), 502

        activity = Activity(
            student_id=student.id,
            title=data.title,
            type=data.type,
            description=data.description,
            date=data.date,
            duration=data.duration,
            organizer=data.organizer,
            credits=data.credits,
            file_path=file_path,
            status=ActivityStatusEnum.pending
        )
        db.session.add(activity)
        db.session.commit()

        logger.info("Student %s submitted activity %s (%s)", student.id, activity.id, activity.type.value)

        return jsonify({
            "message": "Activity submitted successfully",
            "activity": activity_to_dict(activity)
        }), 201

    @staticmethod
    def get_my_activities(student, status=None, activity_type=None, page=1, limit=10):
        query = Activity.query.filter_by(student_id=student.id)

        if status:
            if status not in ActivityStatusEnum.__members__:
                return jsonify({"error": f"Invalid status '{status}'"}), 400
            query = query.filter(Activity.status == ActivityStatusEnum(status))
        if activity_type:
            if activity_type not in ActivityTypeEnum.__members__:
                return jsonify({"error": f"Invalid activity type '{activity_type}'"}), 400
            query = query.filter(Activity.type == ActivityTypeEnum(activity_type))

        result = query.order_by(Activity.created_at.desc(), Activity.id.desc()).paginate(
            page=page,
            per_page=limit,
            error_out=False
        )

        activities = []
        for activity in result.items:
            item = activity_to_dict(activity)
            item["approver"] = user_summary(activity.approver)
            activities.append(item)

        return jsonify({
            "activities": activities,
            "pagination": pagination_to_dict(result)
        }), 200

    @staticmethod
    def get_activity_stats(student):
        rows = (
            db.session.query(Activity.status, func.count(Activity.id))
            .filter(Activity.student_id == student.id)
            .group_by(Activity.status)
            .all()
        )
        by_status = {status.value: count for status, count in rows}

        total_credits = (
            db.session.query(func.sum(Activity.credits))
            .filter(Activity.student_id == student.id)
            .filter(Activity.status == ActivityStatusEnum.approved)
            .scalar()
        )

        return jsonify({
            "total_activities": sum(by_status.values()),
            "total_credits": round(float(total_credits or 0), 1),
            "by_status": by_status
        }), 200
