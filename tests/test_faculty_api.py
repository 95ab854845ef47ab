"""
API tests for the faculty review queue
"""
from student_hub.enums.app_enum import ActivityStatusEnum, RoleEnum
from student_hub.models import Activity

from .conftest import auth_headers


def review(client, activity_id, headers, **body):
    return client.put(f"/api/faculty/activities/{activity_id}", json=body, headers=headers)


class TestReview:

    def test_approve_with_credits(self, client, db, student, faculty, faculty_headers, make_activity):
        activity = make_activity(student, credits=4)

        response = review(client, activity.id, faculty_headers, status="approved", credits=6, remarks="Good work")

        assert response.status_code == 200
        assert response.get_json()["message"] == "Activity approved successfully"

        db.session.expire_all()
        stored = db.session.get(Activity, activity.id)
        assert stored.status == ActivityStatusEnum.approved
        assert stored.credits == 6
        assert stored.remarks == "Good work"
        assert stored.approved_by == faculty.id
        assert stored.reviewed_at is not None

    def test_approve_without_credits_keeps_request(self, client, db, student, faculty_headers, make_activity):
        activity = make_activity(student, credits=3.5)

        response = review(client, activity.id, faculty_headers, status="approved")

        assert response.status_code == 200
        assert response.get_json()["activity"]["credits"] == 3.5

    def test_reject_without_remarks_uses_default(self, client, db, student, faculty_headers, make_activity):
        activity = make_activity(student)

        response = review(client, activity.id, faculty_headers, status="rejected")

        assert response.status_code == 200
        body = response.get_json()["activity"]
        assert body["status"] == "rejected"
        assert body["remarks"] == "Activity rejected by faculty"

    def test_credits_out_of_range(self, client, db, student, faculty_headers, make_activity):
        activity = make_activity(student)
        response = review(client, activity.id, faculty_headers, status="approved", credits=10.5)

        assert response.status_code == 400
        assert db.session.get(Activity, activity.id).status == ActivityStatusEnum.pending

    def test_reject_with_credits_is_invalid(self, client, student, faculty_headers, make_activity):
        activity = make_activity(student)
        response = review(client, activity.id, faculty_headers, status="rejected", credits=2)
        assert response.status_code == 400

    def test_unknown_activity(self, client, faculty_headers):
        response = review(client, 999, faculty_headers, status="approved")
        assert response.status_code == 404

    def test_second_review_fails(self, client, db, student, faculty, make_user, make_activity):
        other_faculty = make_user(RoleEnum.faculty)
        activity = make_activity(student)

        first = review(client, activity.id, auth_headers(faculty), status="approved", credits=5)
        second = review(client, activity.id, auth_headers(other_faculty), status="rejected", remarks="Duplicate")

        assert first.status_code == 200
        assert second.status_code == 409
        assert second.get_json()["error"] == "Activity has already been reviewed"

        db.session.expire_all()
        stored = db.session.get(Activity, activity.id)
        assert stored.status == ActivityStatusEnum.approved
        assert stored.approved_by == faculty.id
        assert stored.remarks is None

    def test_guarded_update_loses_race(self, client, db, student, faculty_headers, make_activity, monkeypatch):
        """A review that passed the in-memory check still fails if the row changed underneath."""
        activity = make_activity(student)

        import student_hub.services.review_service as review_service
        original = review_service.review_changes

        def resolve_first(current, decision, reviewer_id):
            changes = original(current, decision, reviewer_id)
            Activity.query.filter_by(id=current.id).update(
                {"status": ActivityStatusEnum.rejected}, synchronize_session=False
            )
            return changes

        monkeypatch.setattr(review_service, "review_changes", resolve_first)

        response = review(client, activity.id, faculty_headers, status="approved")
        assert response.status_code == 409

    def test_non_object_body(self, client, student, faculty_headers, make_activity):
        activity = make_activity(student)
        response = client.put(
            f"/api/faculty/activities/{activity.id}", json=["approved"], headers=faculty_headers
        )

        assert response.status_code == 400
        assert Activity.query.filter_by(status=ActivityStatusEnum.pending).count() == 1

    def test_students_cannot_review(self, client, student, student_headers, make_activity):
        activity = make_activity(student)
        response = review(client, activity.id, student_headers, status="approved")
        assert response.status_code == 403

    def test_admin_can_review(self, client, student, admin, admin_headers, make_activity):
        activity = make_activity(student)
        response = review(client, activity.id, admin_headers, status="approved")

        assert response.status_code == 200
        assert response.get_json()["activity"]["approver"]["name"] == "Admin User"


class TestQueues:

    def test_reviewed_activity_leaves_pending_queue(self, client, student, faculty_headers, make_activity):
        first = make_activity(student, title="First")
        make_activity(student, title="Second")

        before = client.get("/api/faculty/activities/pending", headers=faculty_headers).get_json()
        assert before["pagination"]["total"] == 2
        assert before["activities"][0]["student"]["name"] == "Asha Verma"

        review(client, first.id, faculty_headers, status="approved")

        after = client.get("/api/faculty/activities/pending", headers=faculty_headers).get_json()
        assert [a["title"] for a in after["activities"]] == ["Second"]

    def test_all_activities_filter(self, client, student, faculty_headers, make_activity):
        make_activity(student, title="Done", status=ActivityStatusEnum.approved)
        make_activity(student, title="Waiting")

        everything = client.get("/api/faculty/activities", headers=faculty_headers).get_json()
        approved = client.get("/api/faculty/activities?status=approved", headers=faculty_headers).get_json()

        assert everything["pagination"]["total"] == 2
        assert [a["title"] for a in approved["activities"]] == ["Done"]

    def test_faculty_stats(self, client, student, faculty_headers, make_activity):
        pending = make_activity(student)
        make_activity(student)
        make_activity(student, status=ActivityStatusEnum.rejected)
        review(client, pending.id, faculty_headers, status="approved")

        stats = client.get("/api/faculty/stats", headers=faculty_headers).get_json()

        assert stats["total_activities"] == 3
        assert stats["pending_count"] == 1
        assert stats["approved_count"] == 1
        assert stats["rejected_count"] == 1
        assert stats["reviewed_by_me"] == 1
        assert len(stats["recent_reviews"]) == 1
        assert stats["total_activities"] == (
            stats["pending_count"] + stats["approved_count"] + stats["rejected_count"]
        )

    def test_students_listing(self, client, student, faculty_headers, make_user, make_activity):
        other = make_user(RoleEnum.student, name="Bala Iyer", department="Mechanical")
        make_activity(student, status=ActivityStatusEnum.approved, credits=4)
        make_activity(student)

        body = client.get("/api/faculty/students", headers=faculty_headers).get_json()
        by_name = {s["name"]: s for s in body["students"]}

        assert by_name["Asha Verma"]["activity_count"] == 2
        assert by_name["Asha Verma"]["total_credits"] == 4
        assert by_name["Bala Iyer"]["activity_count"] == 0

        filtered = client.get("/api/faculty/students?department=Mechanical", headers=faculty_headers).get_json()
        assert [s["name"] for s in filtered["students"]] == [other.name]
