from pydantic import BaseModel, Field
from typing import List, Optional


class AssessmentCreate(BaseModel):
    user_id: str
    vocabulary_set_id: str
    type: str = "progress"


class AnswerSubmit(BaseModel):
    question_id: str
    answer: str
    time_spent: float = Field(0, ge=0)


class AssessmentComplete(BaseModel):
    answers: List[AnswerSubmit] = []


class QuestionResponse(BaseModel):
    id: str
    type: str
    symbol_id: str
    question: str
    options: List[str]
    correct_answer: str
    user_answer: Optional[str] = None
    is_correct: Optional[bool] = None
    time_spent: float
    hints: List[str]
    used_hints: int


class AssessmentResultsResponse(BaseModel):
    total_questions: int
    correct_answers: int
    accuracy: float
    average_time_per_question: float
    total_time: float
    strengths: List[str]
    weaknesses: List[str]
    recommendations: List[str]
    next_steps: List[str]
    mastery_level: str


class AssessmentResponse(BaseModel):
    id: str
    user_id: str
    vocabulary_set_id: str
    type: str
    questions: List[QuestionResponse]
    results: AssessmentResultsResponse
    started_at: str
    completed_at: Optional[str] = None
    duration: Optional[float] = None
