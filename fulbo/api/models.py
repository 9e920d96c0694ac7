"""
API Models
Pydantic Models für API Responses
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from fulbo.domain.models import QuizQuestion


class ErrorResponse(BaseModel):
    """Standard error body"""

    error: str
    detail: Optional[str] = None


class TeamListEntry(BaseModel):
    file: str
    team: str


class TeamListResponse(BaseModel):
    league: str
    teams: list[TeamListEntry] = Field(default_factory=list)


class QuizQuestionsResponse(BaseModel):
    total: int
    returned: int
    questions: list[QuizQuestion] = Field(default_factory=list)


def error_body(error: str, detail: Optional[str] = None, **extra: Any) -> dict[str, Any]:
    body = ErrorResponse(error=error, detail=detail).model_dump(exclude_none=True)
    body.update(extra)
    return body
