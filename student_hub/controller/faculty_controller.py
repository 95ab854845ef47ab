from flask import Blueprint, g, request

from student_hub.enums.app_enum import RoleEnum
from student_hub.services.review_service import ReviewService
from student_hub.utils import json_body, page_args
from student_hub.utils.jwt_utils import role_required

faculty_bp = Blueprint("faculty", __name__, url_prefix="/api/faculty")

REVIEWER_ROLES = (RoleEnum.faculty, RoleEnum.admin)


@faculty_bp.route("/stats", methods=["GET"])
@role_required(*REVIEWER_ROLES)
def get_faculty_stats():
    return ReviewService.get_faculty_stats(g.current_user)


@faculty_bp.route("/activities/pending", methods=["GET"])
@role_required(*REVIEWER_ROLES)
def get_pending_activities():
    page, limit = page_args()
    return ReviewService.get_pending_activities(page=page, limit=limit)


@faculty_bp.route("/activities", methods=["GET"])
@role_required(*REVIEWER_ROLES)
def get_all_activities():
    page, limit = page_args()
    return ReviewService.get_all_activities(
        status=request.args.get("status"),
        page=page,
        limit=limit
    )


@faculty_bp.route("/activities/<int:activity_id>", methods=["PUT"])
@role_required(*REVIEWER_ROLES)
def review_activity(activity_id):
    data = json_body()
    return ReviewService.review_activity(g.current_user, activity_id, data)


@faculty_bp.route("/students", methods=["GET"])
@role_required(*REVIEWER_ROLES)
def get_students():
    page, limit = page_args(default_limit=20)
    return ReviewService.get_students(
        search=request.args.get("search"),
        department=request.args.get("department"),
        page=page,
        limit=limit
    )
