from .user import User, PROFILE_FIELDS
from .activity import Activity, MAX_CREDITS
