from fastapi import APIRouter

from ..settings import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok", "completion_configured": bool(settings.groq_api_key), "sheet_configured": bool(settings.google_sheet_id)}
