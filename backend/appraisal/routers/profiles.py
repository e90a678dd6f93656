"""
Profile intake endpoints.

Faculty members submit their profile once; sub-records (papers, workshops,
awards) arrive already grouped per entry. After the profile is committed its
papers are mirrored to the spreadsheet.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import store
from ..constants import DEPARTMENTS, DOMAINS, Messages
from ..db import get_db
from ..deps import get_sheets_mirror
from ..errors import ExternalServiceError
from ..schemas import ProfileCreate, ProfileOut
from ..sheets import SheetsMirror

router = APIRouter(prefix="/profile", tags=["profiles"])


@router.get("/create")
def create_profile_form():
    """Options the profile form needs."""
    return {"departments": DEPARTMENTS, "domains": DOMAINS}


@router.post("/create", status_code=201)
async def create_profile(
    req: ProfileCreate,
    db: Session = Depends(get_db),
    mirror: SheetsMirror = Depends(get_sheets_mirror),
):
    teacher = store.create_teacher(db, req)
    # The sheet quotes the stored row, so it is only touched after the commit
    try:
        rows = await mirror.mirror_profile(teacher)
    except ExternalServiceError as err:
        raise ExternalServiceError(
            err.service,
            f"{Messages.SHEET_APPEND_FAILED} (profile id {teacher.id}): {err.message}",
            status=err.status,
        ) from err
    return {
        "success": True,
        "message": Messages.PROFILE_CREATED,
        "profile": ProfileOut.model_validate(teacher).model_dump(),
        "sheet_rows": rows,
    }
