# main.py
import logging
import os

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from vidtube.core.config import settings
from vidtube.core.database import engine, Base
from vidtube.core.errors import register_error_handlers

from vidtube.api.videos import router as videos_router
from vidtube.api.comments import router as comments_router
from vidtube.api.likes import router as likes_router
from vidtube.api.subscriptions import router as subscriptions_router

# register models with the metadata before create_all
import vidtube.models  # noqa: F401

logging.basicConfig(
    level=getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="VidTube API")

# -------------------------
# DB init
# -------------------------
Base.metadata.create_all(bind=engine)

# -------------------------
# Middleware / errors
# -------------------------
def cors_options(raw: str) -> dict:
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    return {
        "allow_origins": origins,
        # credentials are never sent to a wildcard origin
        "allow_credentials": "*" not in origins,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
    }


app.add_middleware(CORSMiddleware, **cors_options(settings.CORS_ORIGINS))

register_error_handlers(app)

# -------------------------
# Local media (MEDIA_BACKEND=local)
# -------------------------
if (settings.MEDIA_BACKEND or "local").strip().lower() == "local":
    os.makedirs(settings.MEDIA_ROOT, exist_ok=True)
    app.mount(settings.MEDIA_URL_PREFIX, StaticFiles(directory=settings.MEDIA_ROOT), name="media")

API_PREFIX = "/api/v1"

app.include_router(videos_router, prefix=API_PREFIX)
app.include_router(comments_router, prefix=API_PREFIX)
app.include_router(likes_router, prefix=API_PREFIX)
app.include_router(subscriptions_router, prefix=API_PREFIX)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
