from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from backend.api.dependencies import get_assessment_engine
from backend.auth.dependencies import get_current_identity
from backend.auth.identity import Identity
from backend.services.assessment_engine import AssessmentEngine

router = APIRouter(tags=['assessments'])


class QuestionOptionResponse(BaseModel):
    text: str
    score: int


class QuestionResponse(BaseModel):
    id: int
    question: str
    options: list[QuestionOptionResponse]


class SubmitAssessmentRequest(BaseModel):
    # Left loose so a malformed list reaches the engine's own format check.
    answers: Any = None


class AssessmentResultResponse(BaseModel):
    totalScore: int
    rating: str
    advice: str
    recommendation: str
    maxScore: int


@router.get('/questions', response_model=list[QuestionResponse])
def list_questions(engine: AssessmentEngine = Depends(get_assessment_engine)):
    return engine.questions()


@router.post('/submit', response_model=AssessmentResultResponse)
def submit_assessment(
    data: SubmitAssessmentRequest,
    _identity: Identity = Depends(get_current_identity),
    engine: AssessmentEngine = Depends(get_assessment_engine),
):
    return engine.submit(data.answers).to_dict()
