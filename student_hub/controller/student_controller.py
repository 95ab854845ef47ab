from flask import Blueprint, g, request

from student_hub.enums.app_enum import RoleEnum
from student_hub.services.activity_service import ActivityService
from student_hub.services.profile_service import ProfileService
from student_hub.utils import page_args, request_payload
from student_hub.utils.jwt_utils import role_required

student_bp = Blueprint("student", __name__, url_prefix="/api/students")

STUDENT_ROLES = (RoleEnum.student, RoleEnum.admin)


@student_bp.route("/activities", methods=["POST"])
@role_required(*STUDENT_ROLES)
def submit_activity():
    return ActivityService.submit_activity(
        g.current_user,
        request_payload(),
        certificate=request.files.get("certificate")
    )


@student_bp.route("/activities", methods=["GET"])
@role_required(*STUDENT_ROLES)
def get_my_activities():
    page, limit = page_args()
    return ActivityService.get_my_activities(
        g.current_user,
        status=request.args.get("status"),
        activity_type=request.args.get("type"),
        page=page,
        limit=limit
    )


@student_bp.route("/activities/stats", methods=["GET"])
@role_required(*STUDENT_ROLES)
def get_activity_stats():
    return ActivityService.get_activity_stats(g.current_user)


@student_bp.route("/profile", methods=["GET"])
@role_required(*STUDENT_ROLES)
def get_profile():
    return ProfileService.get_profile(g.current_user)


@student_bp.route("/profile", methods=["PUT"])
@role_required(*STUDENT_ROLES)
def update_profile():
    return ProfileService.update_profile(
        g.current_user,
        request_payload(),
        picture=request.files.get("profile_picture")
    )
