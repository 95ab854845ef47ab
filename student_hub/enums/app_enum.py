from enum import Enum

class RoleEnum(str, Enum):
    student = "student"
    faculty = "faculty"
    admin = "admin"

class ActivityStatusEnum(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"

class ActivityTypeEnum(str, Enum):
    conference = "conference"
    workshop = "workshop"
    certification = "certification"
    competition = "competition"
    internship = "internship"
    leadership = "leadership"
    community_service = "community_service"
    club_activity = "club_activity"
    online_course = "online_course"
