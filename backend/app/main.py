import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app import config
from app.api import ai_chat, auth, debug, note_insights, notes
from app.utils.errors import ApiError, api_error_handler, body_error_handler


def _setup_logging() -> None:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


_setup_logging()

app = FastAPI(title="AI Memo API")

app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(
    RequestValidationError,
    body_error_handler({ai_chat.CHAT_PATH: ai_chat.MISSING_FIELDS}),
)

app.include_router(auth.router)
app.include_router(notes.router)
app.include_router(note_insights.router)
app.include_router(ai_chat.router)
if config.env() == "dev":
    app.include_router(debug.router)


@app.get("/health")
def health():
    return {"ok": True}
