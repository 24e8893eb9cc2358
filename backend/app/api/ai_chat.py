import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Body, Depends

from app.ai.client import AIProvider, get_ai_provider
from app.ai.prompts import build_chat_prompt
from app.models.ai_chat import ChatRequest, ChatResponse
from app.utils.errors import AuthError, UpstreamError, ValidationError
from app.utils.jwt_auth import AuthUser, get_optional_user

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ai"])

CHAT_PATH = "/api/ai-chat"
MISSING_FIELDS = "메시지와 사용자 ID가 필요합니다."


@router.post("/ai-chat", response_model=ChatResponse)
def ai_chat(
    payload: Optional[ChatRequest] = Body(default=None),
    user: Optional[AuthUser] = Depends(get_optional_user),
    ai: AIProvider = Depends(get_ai_provider),
) -> ChatResponse:
    # wrong-typed or malformed bodies are mapped to the same 400 in main.py
    if payload is None or not payload.message or not payload.user_id:
        raise ValidationError(MISSING_FIELDS)

    if user is None or user.user_id != payload.user_id:
        raise AuthError("인증이 필요합니다.")

    try:
        text = ai().generate_text(build_chat_prompt(payload.message))
    except Exception:
        log.exception("ai chat failed user=%s", user.user_id)
        raise UpstreamError("AI 응답 생성 중 오류가 발생했습니다.")

    return ChatResponse(response=text, timestamp=datetime.now(timezone.utc).isoformat())
