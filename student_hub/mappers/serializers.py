from student_hub.models import PROFILE_FIELDS


def _iso(value):
    return value.isoformat() if value else None


def user_summary(user, *fields):
    if user is None:
        return None
    fields = fields or ("name", "email")
    return {field: getattr(user, field) for field in fields}


def user_to_dict(user):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "department": user.department,
        "year": user.year,
        "student_id": user.student_id,
        "is_active": user.is_active,
        "created_at": _iso(user.created_at),
        "updated_at": _iso(user.updated_at)
    }


def activity_to_dict(activity, include_student=False, include_approver=False):
    data = {
        "id": activity.id,
        "student_id": activity.student_id,
        "title": activity.title,
        "type": activity.type.value,
        "description": activity.description,
        "date": _iso(activity.date),
        "duration": activity.duration,
        "organizer": activity.organizer,
        "credits": float(activity.credits or 0),
        "status": activity.status.value,
        "remarks": activity.remarks,
        "file_path": activity.file_path,
        "approved_by": activity.approved_by,
        "reviewed_at": _iso(activity.reviewed_at),
        "created_at": _iso(activity.created_at),
        "updated_at": _iso(activity.updated_at)
    }

    if include_student:
        data["student"] = user_summary(
            activity.student, "name", "email", "student_id", "department", "year"
        )
    if include_approver:
        data["approver"] = user_summary(activity.approver)

    return data


def profile_to_dict(user):
    data = {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "department": user.department,
        "year": user.year,
        "student_id": user.student_id,
        "profile_picture": user.profile_picture,
        "updated_at": _iso(user.updated_at)
    }
    for field in PROFILE_FIELDS:
        value = getattr(user, field)
        data[field] = _iso(value) if field == "date_of_birth" else value
    return data


def pagination_to_dict(page):
    return {
        "total": page.total,
        "page": page.page,
        "pages": page.pages,
        "has_more": page.has_next
    }
