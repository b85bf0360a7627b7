"""Question and answer routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from qna.application.usecase.answer import (
    AcceptAnswerRequest,
    AcceptAnswerUseCase,
    AcceptanceResponse,
    AnswerResponse,
    PostAnswerRequest,
    PostAnswerUseCase,
    RecordAIAnswerRequest,
    RecordAIAnswerUseCase,
    UnacceptAnswerRequest,
    UnacceptAnswerUseCase,
)
from qna.application.usecase.question import (
    AskQuestionRequest,
    AskQuestionUseCase,
    GetQuestionRequest,
    GetQuestionResponse,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
    QuestionResponse,
)
from qna.domain.repository import QuestionFilter, QuestionSortOrder
from qna.domain.service import JWTService
from qna.interface.api.errors import require_user

router = APIRouter(prefix="/questions", tags=["questions"], route_class=DishkaRoute)


class AskQuestionAPIRequest(BaseModel):
    """API request for asking a question.

    Length and tag rules are enforced by the domain so that the error
    messages are the same for every client.
    """

    title: str = Field(max_length=300)
    description: str = Field(max_length=30000)
    tags: list[str] = Field(default_factory=list)


class PostAnswerAPIRequest(BaseModel):
    """API request for posting an answer."""

    content: str = Field(max_length=30000)


class AcceptAnswerAPIRequest(BaseModel):
    """API request for accepting an answer."""

    answer_id: UUID


@router.post(
    "", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED
)
async def ask_question(
    request: AskQuestionAPIRequest,
    ask_question_use_case: FromDishka[AskQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> QuestionResponse:
    """Ask a new question.

    Requires authentication.

    Raises:
        HTTPException: 401 if not authenticated
    """
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "ask a question"
    )

    return await ask_question_use_case.execute(
        AskQuestionRequest(
            author_id=str(user_id),
            title=request.title,
            description=request.description,
            tags=request.tags,
        )
    )


@router.get("", response_model=ListQuestionsResponse)
async def list_questions(
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
    filter_by: QuestionFilter = Query(default=QuestionFilter.ALL, alias="filter"),
    tags: list[str] = Query(default=[], alias="tag"),
    limit: int = Query(default=30, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListQuestionsResponse:
    """List questions.

    Open to anonymous readers. Signed-in callers also get their own vote on
    each question.

    Example:
        GET /questions?sort=votes&filter=unanswered&tag=python&tag=asyncio
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    return await list_questions_use_case.execute(
        ListQuestionsRequest(
            sort=sort,
            filter_by=filter_by,
            tags=tags,
            limit=limit,
            offset=offset,
            user_id=str(user_id) if user_id else None,
        )
    )


@router.get("/{question_id}", response_model=GetQuestionResponse)
async def get_question(
    question_id: UUID,
    get_question_use_case: FromDishka[GetQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetQuestionResponse:
    """Get a question with its answers. Counts one view."""
    user_id = jwt_service.get_user_id_from_token(auth_token)

    return await get_question_use_case.execute(
        GetQuestionRequest(
            question_id=str(question_id),
            user_id=str(user_id) if user_id else None,
        )
    )


@router.post(
    "/{question_id}/answers",
    response_model=AnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_answer(
    question_id: UUID,
    request: PostAnswerAPIRequest,
    post_answer_use_case: FromDishka[PostAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AnswerResponse:
    """Answer a question.

    Requires authentication. The asker is notified.
    """
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "answer a question"
    )

    return await post_answer_use_case.execute(
        PostAnswerRequest(
            question_id=str(question_id),
            author_id=str(user_id),
            content=request.content,
        )
    )


@router.post(
    "/{question_id}/answers/ai",
    response_model=AnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_ai_answer(
    question_id: UUID,
    request: PostAnswerAPIRequest,
    record_ai_answer_use_case: FromDishka[RecordAIAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AnswerResponse:
    """Store an AI-generated answer.

    The client generates the text with the completion provider and posts it
    here. The answer is attributed to the AI assistant user.
    """
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "request an AI answer"
    )

    return await record_ai_answer_use_case.execute(
        RecordAIAnswerRequest(
            question_id=str(question_id),
            requested_by=str(user_id),
            content=request.content,
        )
    )


@router.post("/{question_id}/accept", response_model=AcceptanceResponse)
async def accept_answer(
    question_id: UUID,
    request: AcceptAnswerAPIRequest,
    accept_answer_use_case: FromDishka[AcceptAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptanceResponse:
    """Mark an answer as the accepted one.

    Only the asker may accept. Accepting a different answer replaces the
    previous one; accepting the same answer again changes nothing.
    """
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "accept an answer"
    )

    return await accept_answer_use_case.execute(
        AcceptAnswerRequest(
            question_id=str(question_id),
            answer_id=str(request.answer_id),
            user_id=str(user_id),
        )
    )


@router.delete("/{question_id}/accept", response_model=AcceptanceResponse)
async def unaccept_answer(
    question_id: UUID,
    unaccept_answer_use_case: FromDishka[UnacceptAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptanceResponse:
    """Clear the accepted answer. Only the asker may do this."""
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "unaccept an answer"
    )

    return await unaccept_answer_use_case.execute(
        UnacceptAnswerRequest(question_id=str(question_id), user_id=str(user_id))
    )
