from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # presence checked in the route (400)
    message: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")


class ChatResponse(BaseModel):
    response: str
    timestamp: str
