"""Every table of the schema, importable from one place."""
from .career_service.models import CareerPath
from .chat_service.models import ChatConversation, ChatMessage
from .college_service.models import College
from .profile_service.models import Profile
from .quest_service.models import UserProgress
from .saved_item_service.models import UserSavedItem
from .scholarship_service.models import Scholarship

__all__ = [
    "CareerPath",
    "ChatConversation",
    "ChatMessage",
    "College",
    "Profile",
    "Scholarship",
    "UserProgress",
    "UserSavedItem",
]
