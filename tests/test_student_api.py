"""
API tests for activity submission and the student profile
"""
import io
from unittest.mock import patch

from student_hub.enums.app_enum import ActivityStatusEnum, RoleEnum
from student_hub.models import Activity

from .conftest import auth_headers

UPLOAD = "student_hub.utils.cloudinary_helper.cloudinary.uploader.upload"
CERT_URL = "https://res.cloudinary.com/demo-hub/raw/upload/v1700000000/student-hub/certificates/cert.pdf"


def submission(**overrides):
    payload = {
        "title": "AI Workshop",
        "type": "workshop",
        "date": "2024-03-01",
        "organizer": "IEEE Student Branch",
        "credits": 4
    }
    payload.update(overrides)
    return payload


def form(**overrides):
    return {key: str(value) for key, value in submission(**overrides).items()}


class TestSubmitActivity:

    def test_new_activity_is_pending(self, client, db, student, student_headers):
        response = client.post("/api/students/activities", json=submission(), headers=student_headers)

        assert response.status_code == 201
        body = response.get_json()["activity"]
        assert body["status"] == "pending"
        assert body["approved_by"] is None
        assert body["credits"] == 4.0

        activity = db.session.get(Activity, body["id"])
        assert activity.student_id == student.id
        assert activity.status == ActivityStatusEnum.pending
        assert activity.approved_by is None

    def test_credits_above_ten_are_clamped(self, client, db, student_headers):
        response = client.post("/api/students/activities", json=submission(credits=12), headers=student_headers)

        assert response.status_code == 201
        activity = db.session.get(Activity, response.get_json()["activity"]["id"])
        assert activity.credits == 10

    def test_missing_required_field(self, client, student_headers):
        payload = submission()
        payload.pop("date")
        response = client.post("/api/students/activities", json=payload, headers=student_headers)

        assert response.status_code == 400
        assert response.get_json() == {"error": "Validation error", "details": "date: Field required"}
        assert Activity.query.count() == 0

    def test_negative_credits_rejected(self, client, student_headers):
        response = client.post("/api/students/activities", json=submission(credits=-2), headers=student_headers)
        assert response.status_code == 400

    def test_multipart_with_certificate(self, client, db, student_headers):
        data = form(description="")
        data["certificate"] = (io.BytesIO(b"%PDF-1.4 certificate"), "cert.pdf")

        with patch(UPLOAD, return_value={"secure_url": CERT_URL}) as upload:
            response = client.post(
                "/api/students/activities",
                data=data,
                headers=student_headers,
                content_type="multipart/form-data"
            )

        assert response.status_code == 201
        upload.assert_called_once()
        assert upload.call_args.kwargs["folder"] == "student-hub/certificates"
        body = response.get_json()["activity"]
        assert body["file_path"] == CERT_URL
        assert body["description"] is None

    def test_oversized_certificate_rejected_before_upload(self, client, student_headers):
        data = form()
        data["certificate"] = (io.BytesIO(b"0" * (5 * 1024 * 1024 + 1)), "cert.pdf")

        with patch(UPLOAD) as upload:
            response = client.post(
                "/api/students/activities",
                data=data,
                headers=student_headers,
                content_type="multipart/form-data"
            )

        assert response.status_code == 400
        assert response.get_json()["details"] == "File size must be less than 5MB"
        upload.assert_not_called()
        assert Activity.query.count() == 0

    def test_wrong_file_type_rejected(self, client, student_headers):
        data = form()
        data["certificate"] = (io.BytesIO(b"MZ"), "setup.exe")

        with patch(UPLOAD) as upload:
            response = client.post(
                "/api/students/activities",
                data=data,
                headers=student_headers,
                content_type="multipart/form-data"
            )

        assert response.status_code == 400
        upload.assert_not_called()

    def test_upload_failure_is_reported(self, client, student_headers):
        data = form()
        data["certificate"] = (io.BytesIO(b"%PDF"), "cert.pdf")

        with patch(UPLOAD, side_effect=Exception("Cloudinary is down")):
            response = client.post(
                "/api/students/activities",
                data=data,
                headers=student_headers,
                content_type="multipart/form-data"
            )

        assert response.status_code == 502
        assert response.get_json()["details"] == "Cloudinary is down"
        assert Activity.query.count() == 0

    def test_non_object_json_body(self, client, student_headers):
        response = client.post("/api/students/activities", json=[1, 2], headers=student_headers)

        assert response.status_code == 400
        assert response.get_json()["error"] == "Request body must be a JSON object"
        assert Activity.query.count() == 0

    def test_requires_token(self, client):
        response = client.post("/api/students/activities", json=submission())
        assert response.status_code == 401

    def test_faculty_cannot_submit(self, client, faculty_headers):
        response = client.post("/api/students/activities", json=submission(), headers=faculty_headers)
        assert response.status_code == 403

    def test_deactivated_account_rejected(self, client, make_user):
        inactive = make_user(RoleEnum.student, is_active=False)
        response = client.post("/api/students/activities", json=submission(), headers=auth_headers(inactive))

        assert response.status_code == 401
        assert response.get_json()["error"] == "Account is deactivated"


class TestMyActivities:

    def test_lists_only_own_activities(self, client, student, student_headers, make_user, make_activity):
        other = make_user(RoleEnum.student)
        make_activity(student, title="Mine")
        make_activity(other, title="Theirs")

        response = client.get("/api/students/activities", headers=student_headers)

        assert response.status_code == 200
        body = response.get_json()
        assert [a["title"] for a in body["activities"]] == ["Mine"]
        assert body["pagination"]["total"] == 1

    def test_filters_by_status(self, client, student, student_headers, make_activity):
        make_activity(student, title="Done", status=ActivityStatusEnum.approved)
        make_activity(student, title="Waiting")

        response = client.get("/api/students/activities?status=approved", headers=student_headers)
        assert [a["title"] for a in response.get_json()["activities"]] == ["Done"]

    def test_invalid_status_filter(self, client, student_headers):
        response = client.get("/api/students/activities?status=archived", headers=student_headers)
        assert response.status_code == 400

    def test_pagination(self, client, student, student_headers, make_activity):
        for index in range(3):
            make_activity(student, title=f"Activity {index}")

        response = client.get("/api/students/activities?page=2&limit=2", headers=student_headers)
        body = response.get_json()
        assert len(body["activities"]) == 1
        assert body["pagination"] == {"total": 3, "page": 2, "pages": 2, "has_more": False}

    def test_page_past_the_end_is_empty(self, client, student, student_headers, make_activity):
        make_activity(student)

        response = client.get("/api/students/activities?page=5&limit=10", headers=student_headers)

        assert response.status_code == 200
        body = response.get_json()
        assert body["activities"] == []
        assert body["pagination"]["total"] == 1

    def test_stats(self, client, student, student_headers, make_activity):
        make_activity(student, status=ActivityStatusEnum.approved, credits=3)
        make_activity(student, status=ActivityStatusEnum.approved, credits=1.5)
        make_activity(student, status=ActivityStatusEnum.rejected, credits=5)
        make_activity(student, credits=9)

        response = client.get("/api/students/activities/stats", headers=student_headers)

        assert response.status_code == 200
        assert response.get_json() == {
            "total_activities": 4,
            "total_credits": 4.5,
            "by_status": {"approved": 2, "rejected": 1, "pending": 1}
        }


class TestProfile:

    def test_empty_profile_completion(self, client, student_headers):
        response = client.get("/api/students/profile", headers=student_headers)

        assert response.status_code == 200
        profile = response.get_json()["profile"]
        assert profile["completion_percentage"] == 0
        assert profile["name"] == "Asha Verma"

    def test_update_profile(self, client, student_headers):
        response = client.put(
            "/api/students/profile",
            json={
                "phone": "9876543210",
                "date_of_birth": "2003-05-14",
                "gender": "Female",
                "skills": "Python, SQL",
                "github_url": "https://github.com/asha",
                "role": "admin"
            },
            headers=student_headers
        )

        assert response.status_code == 200
        profile = response.get_json()["profile"]
        assert profile["date_of_birth"] == "2003-05-14"
        assert profile["completion_percentage"] == 42
        assert "role" not in profile

    def test_blank_value_clears_field(self, client, student, db, student_headers):
        student.skills = "Python"
        db.session.commit()

        response = client.put("/api/students/profile", json={"skills": ""}, headers=student_headers)

        assert response.status_code == 200
        assert response.get_json()["profile"]["skills"] is None

    def test_invalid_gender(self, client, student_headers):
        response = client.put("/api/students/profile", json={"gender": "Unknown"}, headers=student_headers)
        assert response.status_code == 400

    def test_no_changes(self, client, student_headers):
        response = client.put("/api/students/profile", json={}, headers=student_headers)
        assert response.status_code == 400
