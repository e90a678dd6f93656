"""
Administrator endpoints: dashboard, profile preview with generated feedback,
rating and deletion.
"""

from __future__ import annotations
import re
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import store
from ..constants import ALL_DEPARTMENTS, DEPARTMENTS, Messages
from ..db import get_db
from ..deps import get_completion_client
from ..errors import NotFoundError, ValidationError
from ..feedback import request_individual_feedback
from ..llm_client import CompletionClient
from ..models import Teacher
from ..rating import auto_rating_out_of_10, combine_ratings, compute_auto_score
from ..schemas import ProfileDetailOut, ProfileOut, RateRequest

router = APIRouter(prefix="/admin", tags=["admin"])

_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def _validate_id(teacher_id: str) -> str:
    if not _ID_RE.match(teacher_id or ""):
        raise ValidationError(Messages.INVALID_ID)
    return teacher_id


def _load_teacher(db: Session, teacher_id: str) -> Teacher:
    teacher = store.get_teacher(db, _validate_id(teacher_id))
    if teacher is None:
        raise NotFoundError(Messages.PROFILE_NOT_FOUND)
    return teacher


@router.get("/profiles")
def view_all_profiles(department: Optional[str] = None, db: Session = Depends(get_db)):
    profiles = store.teachers_with_ratings(db, department)
    return {
        "profiles": [p.model_dump() for p in profiles],
        "departments": [ALL_DEPARTMENTS, *DEPARTMENTS],
        "selected_department": department or ALL_DEPARTMENTS,
    }


@router.get("/profile/{teacher_id}", response_model=ProfileDetailOut)
async def view_profile(
    teacher_id: str,
    db: Session = Depends(get_db),
    client: CompletionClient = Depends(get_completion_client),
):
    teacher = _load_teacher(db, teacher_id)
    # Best-effort: a failed completion comes back as a canned message
    feedback = await request_individual_feedback(teacher, client)
    return ProfileDetailOut(
        **ProfileOut.model_validate(teacher).model_dump(),
        auto_rating=auto_rating_out_of_10(teacher),
        feedback=feedback,
    )


@router.post("/profile/{teacher_id}/delete")
def delete_profile(teacher_id: str, db: Session = Depends(get_db)):
    deleted = store.delete_teacher(db, _validate_id(teacher_id))
    if deleted is None:
        raise NotFoundError(Messages.PROFILE_NOT_FOUND)
    return {"success": True, "message": Messages.PROFILE_DELETED, "id": teacher_id}


@router.post("/rate/{teacher_id}")
def rate_teacher(teacher_id: str, req: RateRequest, db: Session = Depends(get_db)):
    teacher = _load_teacher(db, teacher_id)
    auto_score = compute_auto_score(teacher)
    final_rating = combine_ratings(auto_score, req.admin_rating)
    teacher = store.update_rating(db, teacher.id, req.admin_rating, final_rating)
    if teacher is None:
        # Deleted between the read and the update
        raise NotFoundError(Messages.PROFILE_NOT_FOUND)
    return {
        "success": True,
        "message": Messages.RATING_SAVED,
        "id": teacher.id,
        "auto_rating": round(auto_score / 10, 2),
        "admin_rating": teacher.admin_rating,
        "final_rating": teacher.final_rating,
    }
