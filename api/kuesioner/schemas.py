from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class SubmitQuestionnaireData(BaseModel):
    """Response data for POST /submit-questionnaire"""
    id: str = Field(..., description="Identifier of the stored response")
    timestamp: str = Field(..., description="Server time of the submission (ISO 8601)")


class QuestionItem(BaseModel):
    id: int
    text: str
    type: Optional[str] = None
    category: Optional[str] = None
    options: Optional[List[str]] = None


class QuestionBankData(BaseModel):
    """Response data for GET /questions"""
    qaUmum: List[QuestionItem]
    roleSpecific: Dict[str, List[QuestionItem]] = Field(..., description="Question sets keyed by role label")
    qaEnd: List[QuestionItem]
    roles: List[str]
    genderOptions: List[str]
    ageOptions: List[str]
    ratingScale: List[int]
    ratingLabels: Dict[int, str] = Field(..., description="Labels for the ends of the rating scale")
