import logging

from flask import current_app, jsonify
from pydantic import ValidationError

from student_hub.extensions import db
from student_hub.mappers.serializers import profile_to_dict
from student_hub.models import PROFILE_FIELDS
from student_hub.schemas import validation_message
from student_hub.schemas.user import ProfileUpdate
from student_hub.utils.cloudinary_helper import (
    IMAGE_EXTENSIONS,
    FileValidationError,
    StorageNotConfigured,
    upload_file_to_cloudinary,
    validate_upload
)
from student_hub.utils.stats import percentage

logger = logging.getLogger(__name__)


def completion_percentage(user) -> int:
    filled = [field for field in PROFILE_FIELDS if getattr(user, field) not in (None, "")]
    return round(percentage(len(filled), len(PROFILE_FIELDS)))


class ProfileService:

    @staticmethod
    def get_profile(user):
        profile = profile_to_dict(user)
        profile["completion_percentage"] = completion_percentage(user)
        return jsonify({"status": "success", "profile": profile}), 200

    @staticmethod
    def update_profile(user, payload: dict, picture=None):
        payload = {k: v for k, v in (payload or {}).items() if k in PROFILE_FIELDS}

        # empty strings clear a field
        cleared = [k for k, v in payload.items() if isinstance(v, str) and v.strip() == ""]
        try:
            data = ProfileUpdate(**{k: v for k, v in payload.items() if k not in cleared})
        except ValidationError as error:
            return jsonify({"error": "Validation error", "details": validation_message(error)}), 400

        changes = data.model_dump(exclude_unset=True)
        changes.update({field: None for field in cleared})

        if picture is not None and picture.filename:
            try:
                validate_upload(picture, IMAGE_EXTENSIONS, current_app.config["MAX_PROFILE_PICTURE_SIZE"])
                changes["profile_picture"] = upload_file_to_cloudinary(
                    picture,
                    folder=current_app.config["PROFILE_FOLDER"]
                )
            except FileValidationError as error:
                return jsonify({"error": "Validation error", "details": str(error)}), 400
            except StorageNotConfigured as error:
                return jsonify({"error": str(error)}), 503
            except Exception as error:
                logger.exception("Profile picture upload failed for user %s", user.id)
                return jsonify({"error": "Failed to upload profile picture", "details": str(error)}), 502

        if not changes:
            return jsonify({"error": "No changes were made to the profile"}), 400

        for field, value in changes.items():
            setattr(user, field, value)
        db.session.commit()

        logger.info("Profile of user %s updated: %s", user.id, ", ".join(sorted(changes)))

        profile = profile_to_dict(user)
        profile["completion_percentage"] = completion_percentage(user)
        return jsonify({
            "status": "success",
            "message": "Profile updated successfully",
            "profile": profile
        }), 200
