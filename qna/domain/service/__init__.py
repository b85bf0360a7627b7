"""Domain services."""

from .acceptance_service import AcceptanceOutcome, AcceptanceService
from .answer_service import AnswerService
from .base import Service
from .counter_service import CounterService
from .jwt_service import JWTService
from .notification_service import NotificationService
from .question_service import QuestionService
from .user_service import UserService
from .vote_service import VoteAction, VoteOutcome, VoteService

__all__ = [
    "AcceptanceOutcome",
    "AcceptanceService",
    "AnswerService",
    "CounterService",
    "JWTService",
    "NotificationService",
    "QuestionService",
    "Service",
    "UserService",
    "VoteAction",
    "VoteOutcome",
    "VoteService",
]
