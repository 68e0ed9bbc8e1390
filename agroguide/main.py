import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env explicitly from project root, before settings are read
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env", override=False)

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from agroguide.db.postgres import Base, engine
import agroguide.db.models  # noqa: F401  # ensure models are registered
from agroguide.api.auth import router as auth_router
from agroguide.api.plants import router as plants_router
from agroguide.api.favorites import router as favorites_router
from agroguide.api.feedback import router as feedback_router
from agroguide.api.admin import router as admin_router
from agroguide.api.admin_feedback import router as admin_feedback_router
from agroguide.core.config import get_settings
from agroguide.core.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="AgroGuide API")

# Frontend dev servers (Vite, React) plus anything listed in CORS_ORIGINS
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
] + get_settings().extra_cors_origins

# Cannot use allow_origins=["*"] with allow_credentials=True
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Validation errors as one readable line plus the raw error list"""
    errors = exc.errors()
    error_messages = []

    for error in errors:
        field = " -> ".join(str(loc) for loc in error.get("loc", []))
        message = error.get("msg", "Validation error")
        error_messages.append(f"{field}: {message}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({
            "detail": "; ".join(error_messages),
            "errors": errors,
        }),
    )


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(auth_router)
app.include_router(plants_router)
app.include_router(favorites_router)
app.include_router(feedback_router)  # Submission needs a session; sign-in prompt otherwise
app.include_router(admin_router)  # Protected by get_current_admin
app.include_router(admin_feedback_router)  # Protected by get_current_admin


@app.on_event("startup")
def on_startup() -> None:
    """
    Initialize database schema.

    Base.metadata.create_all is idempotent: it creates missing tables only
    and never drops or alters existing ones.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("AgroGuide API started")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
