#!/usr/bin/env python3
import json
import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import SONGS_LOG_DIR, SONGS_MAX_ITEMS, SONGS_USE_FAKE, SONGS_VERIFY_CONCURRENCY
from songs.generators import build_generator
from songs.resolution import ReferenceResolver
from songs.suggestions import parse_suggestions

APP_NAME = "Song Links API"


class SongsRequest(BaseModel):
    text: str | None = None


class CandidatePayload(BaseModel):
    title: str | None = None
    artist: str | None = None
    url: str | None = None
    reason: str | None = None


class ResolveRequest(BaseModel):
    candidates: list[CandidatePayload] = []


class SafeJSONResponse(JSONResponse):
    def render(self, content):
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
            default=str,
        ).encode("utf-8")


def _setup_logging(log_dir):
    os.makedirs(log_dir, exist_ok=True)
    root = logging.getLogger("")
    log_path = os.path.join(log_dir, "songs.log")
    root.setLevel(logging.INFO)
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            if os.path.abspath(getattr(handler, "baseFilename", "")) == os.path.abspath(log_path):
                return
    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s %(message)s"))
    file_handler.setLevel(logging.INFO)
    root.addHandler(file_handler)


app = FastAPI(
    title=APP_NAME,
    description="Mood-based song suggestions with verified YouTube links.",
    default_response_class=SafeJSONResponse,
)

app.state.generator = build_generator(SONGS_USE_FAKE)
app.state.resolver = ReferenceResolver(
    max_items=SONGS_MAX_ITEMS,
    concurrency=SONGS_VERIFY_CONCURRENCY,
)


@app.on_event("startup")
async def startup():
    try:
        _setup_logging(SONGS_LOG_DIR)
    except OSError as exc:
        logging.error("File logging unavailable (log_dir=%s): %s", SONGS_LOG_DIR, exc)
    if app.state.generator is None:
        logging.warning("No suggestion generator configured; POST /api/songs will return 500")


@app.get("/health")
async def health():
    return {"status": "ok", "pid": os.getpid()}


@app.get("/api/health")
async def api_health():
    return {"status": "OK", "message": "Health check passed"}


@app.post("/api/songs")
async def api_songs(request: SongsRequest):
    text = (request.text or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="text required")

    generator = app.state.generator
    if generator is None:
        raise HTTPException(status_code=500, detail="Suggestion generator not configured")

    try:
        raw = await generator.generate(text)
    except Exception as exc:
        logging.exception("Suggestion generator failed")
        raise HTTPException(status_code=502, detail="Suggestion generator failed") from exc

    logging.info("Songs raw generator output (%d chars)", len(raw or ""))
    candidates = parse_suggestions(raw, limit=app.state.resolver.max_items)
    if not candidates:
        logging.warning("Songs parse failed; raw=%r", raw)
        return JSONResponse(
            status_code=500,
            content={"error": "Could not parse model output", "raw": raw},
        )

    resolved = await app.state.resolver.resolve_batch(candidates)
    return {"songs": [item.as_payload() for item in resolved]}


@app.post("/api/songs/resolve")
async def api_songs_resolve(request: ResolveRequest):
    candidates = [candidate.model_dump() for candidate in request.candidates]
    resolved = await app.state.resolver.resolve_batch(candidates)
    return {"songs": [item.as_payload() for item in resolved]}
