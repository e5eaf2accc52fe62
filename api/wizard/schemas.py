from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class HeaderContent(BaseModel):
    title: str
    description: str


class WizardStateData(BaseModel):
    """Wizard view returned by every /wizard endpoint"""
    session_id: str = Field(..., description="Wizard session identifier")
    current_step: str = Field(..., description="intro, qa-umum, qa-<role>, qa-end or results")
    user_role: str = Field(..., description="Role chosen at the general questions, empty until then")
    step_number: int = Field(..., description="Position on the path (1-4), 0 on results")
    total_steps: int
    breadcrumb: List[str] = Field(..., description="Breadcrumb labels, empty on intro and results")
    header: HeaderContent
    questions: List[Dict[str, Any]] = Field(..., description="Questions of the current step")
    form_data: Dict[str, Any] = Field(..., description="Answers collected so far")
    alert: Optional[str] = Field(None, description="Submission failure notice shown on results")
    submission: Optional[Dict[str, Any]] = Field(None, description="Outcome of the final submission")
