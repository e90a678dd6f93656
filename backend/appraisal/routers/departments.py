"""
Department-level endpoints: generated department feedback and the
cross-department comparison dashboard.
"""

from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import store
from ..constants import TOP_KEYWORDS_LIMIT, Messages
from ..db import get_db
from ..deps import get_completion_client
from ..feedback import request_department_feedback
from ..keywords import extract_labeled_bullets, rank_by_frequency
from ..llm_client import CompletionClient
from ..schemas import DepartmentFeedbackOut

router = APIRouter(prefix="/admin", tags=["departments"])


@router.get("/department-feedbacks")
def view_department_feedbacks(department: Optional[str] = None, db: Session = Depends(get_db)):
    feedbacks = store.list_department_feedbacks(db, department) if department else []
    return {
        "feedbacks": [DepartmentFeedbackOut.model_validate(f).model_dump() for f in feedbacks],
        "departments": store.distinct_departments(db),
        "selected_department": department or "",
    }


@router.post("/department-feedback/{department}")
async def generate_department_feedback(
    department: str,
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_completion_client),
):
    teachers = store.teachers_by_department(db, department)
    # Raises EmptyInputError (404) before any outbound call when the department is empty
    feedback = await request_department_feedback(department, teachers, client)
    store.save_department_feedback(db, department, feedback)
    return {
        "success": True,
        "department": department,
        "feedback": feedback,
        "message": Messages.FEEDBACK_GENERATED,
    }


@router.get("/comparison-dashboard")
def view_comparison_dashboard(db: Session = Depends(get_db)):
    departments = store.distinct_departments(db)
    teachers = store.list_teachers(db)
    feedbacks = {f.department: f.feedback for f in store.list_department_feedbacks(db)}

    strengths: List[str] = []
    improvements: List[str] = []
    for dept in departments:
        text = feedbacks.get(dept)
        if text:
            bullets = extract_labeled_bullets(text)
            strengths.extend(bullets.strengths)
            improvements.extend(bullets.improvements)

    return {
        "department_stats": store.department_stats(teachers, departments),
        "strengths": rank_by_frequency(strengths, TOP_KEYWORDS_LIMIT),
        "weaknesses": rank_by_frequency(improvements, TOP_KEYWORDS_LIMIT),
    }
