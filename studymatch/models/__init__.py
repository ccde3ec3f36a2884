from studymatch.models.base import Base
from studymatch.models.match import Match, MatchStatus
from studymatch.models.message import Message
from studymatch.models.notification import Notification, NotificationType
from studymatch.models.rating import Rating
from studymatch.models.study_request import RequestStatus, StudyRequest
from studymatch.models.user import User

__all__ = [
    "Base",
    "User",
    "StudyRequest",
    "RequestStatus",
    "Match",
    "MatchStatus",
    "Message",
    "Rating",
    "Notification",
    "NotificationType",
]
