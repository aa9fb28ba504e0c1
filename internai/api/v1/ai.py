import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request

from internai.ai.types import AIClient, AIServiceError
from internai.catalog import count_questions, get_default_question_bank
from internai.core.dependencies import get_llm, get_store
from internai.core.rate_limit import rate_limit
from internai.core.security import CurrentUser, get_current_user
from internai.db.store import JobStore
from internai.schemas.ai import (
    AnalyzeRequest,
    AnalyzeResponse,
    CareerRoadmap,
    ChatRequest,
    ChatResponse,
    EligibilityReport,
    EligibilityRequest,
    InterviewQuestionsRequest,
    InterviewQuestionsResponse,
    RoadmapRequest,
)
from internai.services.chat_service import career_chat
from internai.services.eligibility_service import analyze_job_description, evaluate
from internai.services.roadmap_service import generate_roadmap

router = APIRouter()
logger = logging.getLogger(__name__)


def _raise_ai_error(exc: AIServiceError, action: str) -> NoReturn:
    logger.warning("ai_request_failed action=%s code=%s: %s", action, exc.code, exc)
    raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/ai/eligibility", response_model=EligibilityReport)
@rate_limit()
def check_eligibility(
    request: Request,
    payload: EligibilityRequest,
    user: CurrentUser = Depends(get_current_user),
    llm: AIClient = Depends(get_llm),
    store: JobStore = Depends(get_store),
):
    _ = request
    skills = payload.userSkills
    if skills is None:
        profile = store.get_user(user.id)
        skills = profile.skills if profile else []
    try:
        return evaluate(llm, skills, payload.job.model_dump())
    except AIServiceError as exc:
        _raise_ai_error(exc, "eligibility")


@router.post("/ai/analyze", response_model=AnalyzeResponse)
@rate_limit()
def analyze_job(
    request: Request,
    payload: AnalyzeRequest,
    user: CurrentUser = Depends(get_current_user),
    llm: AIClient = Depends(get_llm),
    store: JobStore = Depends(get_store),
):
    _ = request
    try:
        return analyze_job_description(llm, store.get_user(user.id), payload.jdText)
    except AIServiceError as exc:
        _raise_ai_error(exc, "analyze")


@router.post("/ai/roadmap", response_model=CareerRoadmap)
@rate_limit()
def career_roadmap(
    request: Request,
    payload: RoadmapRequest,
    user: CurrentUser = Depends(get_current_user),
    llm: AIClient = Depends(get_llm),
    store: JobStore = Depends(get_store),
):
    _ = request
    profile = store.get_user(user.id)
    try:
        return generate_roadmap(llm, payload.dreamJob, profile.skills if profile else None)
    except AIServiceError as exc:
        _raise_ai_error(exc, "roadmap")


@router.post("/ai/interview-questions", response_model=InterviewQuestionsResponse)
def interview_questions(payload: InterviewQuestionsRequest, user: CurrentUser = Depends(get_current_user)):
    _ = user
    by_round = get_default_question_bank().get_questions_by_round(payload.role)
    return InterviewQuestionsResponse(
        role=payload.role,
        questionsByRound=by_round,
        totalQuestions=count_questions(by_round),
    )


@router.post("/ai/chat", response_model=ChatResponse)
@rate_limit("30/minute")
def chat(
    request: Request,
    payload: ChatRequest,
    user: CurrentUser = Depends(get_current_user),
    llm: AIClient = Depends(get_llm),
):
    _ = request, user
    try:
        return ChatResponse(text=career_chat(llm, payload.message, payload.chatHistory))
    except AIServiceError as exc:
        _raise_ai_error(exc, "chat")
