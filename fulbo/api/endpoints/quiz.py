"""
Quiz API Endpoints
"""

import json
import random
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from fulbo.api.dependencies import get_settings
from fulbo.api.models import QuizQuestionsResponse, error_body
from fulbo.core.config import Settings
from fulbo.domain.models import QuestionsCollection

router = APIRouter()


def _questions_file(settings: Settings) -> Optional[Path]:
    candidates = [
        Path(settings.questions_file),
        Path(settings.questions_dir).parent / "all_questions.json",
    ]
    return next((p for p in candidates if p.is_file()), None)


def _parse_count(count: Optional[str]) -> int:
    # anything that is not a positive integer means "all questions"
    try:
        return int(count) if count else 0
    except ValueError:
        return 0


@router.get("/api/quiz/questions", response_model=QuizQuestionsResponse)
async def get_questions(count: Optional[str] = None, settings: Settings = Depends(get_settings)):
    """Questions for the quiz; ``?count=N`` returns a random sample of N"""
    path = _questions_file(settings)
    if path is None:
        return JSONResponse(status_code=404, content=error_body("questions file not found"))
    try:
        collection = QuestionsCollection.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except OSError as e:
        return JSONResponse(status_code=500, content=error_body("could not read questions file", str(e)))
    except (ValueError, ValidationError) as e:
        return JSONResponse(status_code=500, content=error_body("could not parse questions file", str(e)))

    questions = collection.questions
    n = _parse_count(count)
    if n > 0:
        questions = random.sample(questions, min(n, len(questions)))
    return QuizQuestionsResponse(total=len(collection.questions), returned=len(questions), questions=questions)
