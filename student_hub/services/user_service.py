import logging

from flask import jsonify
from pydantic import ValidationError
from sqlalchemy import or_

from student_hub.extensions import db
from student_hub.enums.app_enum import RoleEnum
from student_hub.mappers.serializers import pagination_to_dict, user_to_dict
from student_hub.models import Activity, User
from student_hub.schemas import validation_message
from student_hub.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def list_users(search=None, role="all", department="all", page=1, limit=20):
        query = User.query

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                User.name.ilike(pattern),
                User.email.ilike(pattern),
                User.student_id.ilike(pattern)
            ))
        if role and role != "all":
            if role not in RoleEnum.__members__:
                return jsonify({"error": f"Invalid role '{role}'"}), 400
            query = query.filter(User.role == RoleEnum(role))
        if department and department != "all":
            query = query.filter(User.department == department)

        result = query.order_by(User.created_at.desc(), User.id.desc()).paginate(
            page=page,
            per_page=limit,
            error_out=False
        )

        return jsonify({
            "users": [user_to_dict(u) for u in result.items],
            "pagination": pagination_to_dict(result)
        }), 200

    @staticmethod
    def create_user(payload: dict):
        try:
            data = UserCreate(**(payload or {}))
        except ValidationError as error:
            return jsonify({"error": "Validation error", "details": validation_message(error)}), 400

        if User.query.filter_by(email=data.email).first():
            return jsonify({"error": "User with this email already exists"}), 400

        is_student = data.role == RoleEnum.student
        if is_student and data.student_id and User.query.filter_by(student_id=data.student_id).first():
            return jsonify({"error": "Student ID already exists"}), 400

        user = User(
            name=data.name,
            email=data.email,
            role=data.role,
            department=data.department,
            year=data.year if is_student else None,
            student_id=data.student_id if is_student else None,
            is_active=True
        )
        user.set_password(data.password)
        db.session.add(user)
        db.session.commit()

        logger.info("Created %s account %s (%s)", user.role.value, user.id, user.email)

        return jsonify({
            "status": "success",
            "message": "User created successfully",
            "user": user_to_dict(user)
        }), 201

    @staticmethod
    def update_user(current_user, user_id: int, payload: dict):
        try:
            data = UserUpdate(**(payload or {}))
        except ValidationError as error:
            return jsonify({"error": "Validation error", "details": validation_message(error)}), 400

        user = db.session.get(User, user_id)
        if not user:
            return jsonify({"error": "User not found"}), 404

        if data.is_active is False:
            if user.id == current_user.id:
                return jsonify({"error": "Cannot deactivate your own account"}), 400
            if user.is_admin:
                return jsonify({"error": "Cannot deactivate admin accounts"}), 400

        if data.role is not None and data.role != user.role:
            if user.id == current_user.id:
                return jsonify({"error": "Cannot change your own role"}), 400
            if user.is_admin:
                return jsonify({"error": "Cannot change the role of admin accounts"}), 400

        if data.email and data.email != user.email:
            if User.query.filter(User.email == data.email, User.id != user.id).first():
                return jsonify({"error": "User with this email already exists"}), 400

        target_role = data.role or user.role
        if target_role == RoleEnum.student and data.student_id and data.student_id != user.student_id:
            if User.query.filter(User.student_id == data.student_id, User.id != user.id).first():
                return jsonify({"error": "Student ID already exists"}), 400

        changes = data.model_dump(exclude_unset=True)
        for field in ("name", "email", "role", "department", "is_active"):
            if changes.get(field) is not None:
                setattr(user, field, changes[field])

        if user.role == RoleEnum.student:
            if "year" in changes:
                user.year = changes["year"]
            if "student_id" in changes:
                user.student_id = changes["student_id"]
        else:
            user.year = None
            user.student_id = None

        db.session.commit()

        return jsonify({
            "status": "success",
            "message": "User updated successfully",
            "user": user_to_dict(user)
        }), 200

    @staticmethod
    def toggle_user_status(current_user, user_id: int):
        user = db.session.get(User, user_id)
        if not user:
            return jsonify({"error": "User not found"}), 404

        if user.is_active:
            if user.id == current_user.id:
                return jsonify({"error": "Cannot deactivate your own account"}), 400
            if user.is_admin:
                return jsonify({"error": "Cannot deactivate admin accounts"}), 400

        user.is_active = not user.is_active
        db.session.commit()

        state = "activated" if user.is_active else "deactivated"
        logger.info("User %s %s by %s", user.id, state, current_user.id)

        return jsonify({
            "status": "success",
            "message": f"User {state} successfully",
            "is_active": user.is_active
        }), 200

    @staticmethod
    def delete_user(current_user, user_id: int):
        """
        Delete a non-admin account.

        A student's activities go with the account (relationship cascade);
        activities the user reviewed lose their approver and get a note in
        the remarks.
        """
        user = db.session.get(User, user_id)
        if not user:
            return jsonify({"error": "User not found"}), 404

        if user.id == current_user.id:
            return jsonify({"error": "Cannot delete your own account"}), 400
        if user.is_admin:
            return jsonify({"error": "Cannot delete admin accounts"}), 400

        try:
            deleted_activities = len(user.activities)
            reassigned_activities = (
                Activity.query
                .filter(Activity.approved_by == user.id)
                .update(
                    {
                        "approved_by": None,
                        "remarks": f"Previously approved by {user.name} (deleted account)"
                    },
                    synchronize_session=False
                )
            )
            db.session.delete(user)
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception("Failed to delete user %s", user_id)
            raise

        logger.info(
            "Deleted user %s: %d activities removed, %d reviews detached",
            user_id, deleted_activities, reassigned_activities
        )

        return jsonify({
            "status": "success",
            "message": "User deleted successfully",
            "deleted_activities": deleted_activities,
            "reassigned_activities": reassigned_activities
        }), 200
