"""Answer use cases."""

from .accept_answer import AcceptAnswerRequest, AcceptAnswerUseCase, AcceptanceResponse
from .post_answer import AnswerResponse, PostAnswerRequest, PostAnswerUseCase
from .record_ai_answer import RecordAIAnswerRequest, RecordAIAnswerUseCase
from .unaccept_answer import UnacceptAnswerRequest, UnacceptAnswerUseCase

__all__ = [
    "AcceptAnswerRequest",
    "AcceptAnswerUseCase",
    "AcceptanceResponse",
    "AnswerResponse",
    "PostAnswerRequest",
    "PostAnswerUseCase",
    "RecordAIAnswerRequest",
    "RecordAIAnswerUseCase",
    "UnacceptAnswerRequest",
    "UnacceptAnswerUseCase",
]
