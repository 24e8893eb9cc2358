from datetime import datetime

from fastapi import APIRouter, Depends

from app.api.notes import store
from app.utils.jwt_auth import get_user_id

# mounted by app.main only when ENV=dev
router = APIRouter(prefix="/debug", tags=["debug"])


@router.get("/notes")
def debug_user_notes(user_id: str = Depends(get_user_id)) -> dict:
    notes = sorted(
        store.list_notes(user_id=user_id),
        key=lambda n: datetime.fromisoformat(n.created_at),
        reverse=True,
    )
    return {
        "user_id": user_id,
        "notes": [{"id": str(n.id), "title": n.title, "user_id": n.user_id} for n in notes],
    }
