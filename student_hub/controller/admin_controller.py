from flask import Blueprint, g, jsonify, request
from pydantic import ValidationError

from student_hub.enums.app_enum import RoleEnum
from student_hub.schemas import validation_message
from student_hub.schemas.report import ReportQuery
from student_hub.services.report_service import ReportService
from student_hub.services.user_service import UserService
from student_hub.utils import json_body, page_args
from student_hub.utils.jwt_utils import role_required

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


@admin_bp.route("/stats", methods=["GET"])
@role_required(RoleEnum.admin)
def get_admin_stats():
    return ReportService.get_admin_stats()


@admin_bp.route("/reports", methods=["GET"])
@role_required(RoleEnum.admin)
def get_reports():
    if not request.args.get("start_date") or not request.args.get("end_date"):
        return jsonify({"error": "start_date and end_date are required"}), 400

    try:
        query = ReportQuery(**request.args.to_dict())
    except ValidationError as error:
        return jsonify({"error": "Validation error", "details": validation_message(error)}), 400

    return ReportService.generate_report(query)


@admin_bp.route("/users", methods=["GET"])
@role_required(RoleEnum.admin)
def list_users():
    page, limit = page_args(default_limit=20)
    return UserService.list_users(
        search=request.args.get("search"),
        role=request.args.get("role", "all"),
        department=request.args.get("department", "all"),
        page=page,
        limit=limit
    )


@admin_bp.route("/users", methods=["POST"])
@role_required(RoleEnum.admin)
def create_user():
    return UserService.create_user(json_body())


@admin_bp.route("/users/<int:user_id>", methods=["PUT"])
@role_required(RoleEnum.admin)
def update_user(user_id):
    return UserService.update_user(g.current_user, user_id, json_body())


@admin_bp.route("/users/<int:user_id>", methods=["DELETE"])
@role_required(RoleEnum.admin)
def delete_user(user_id):
    return UserService.delete_user(g.current_user, user_id)


@admin_bp.route("/users/<int:user_id>/toggle-status", methods=["POST"])
@role_required(RoleEnum.admin)
def toggle_user_status(user_id):
    return UserService.toggle_user_status(g.current_user, user_id)
