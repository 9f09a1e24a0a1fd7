"""FastAPI entrypoint for the Wordtap backend."""

from __future__ import annotations

import asyncio
import logging
from typing import List

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from app_state import WordtapAppState
from models import (
    ClickRequest,
    ClickResponsePayload,
    DictionaryEntryPayload,
    TokenizeRequest,
    TokenizeResponsePayload,
)
from settings import configure_logging, settings

logger = logging.getLogger(__name__)

app = FastAPI(title="Wordtap Backend", description="Click-to-define dictionary API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

state = WordtapAppState(settings)


@app.get("/", tags=["health"])
async def root():
    return {"status": "ok", "message": "Wordtap backend is running"}


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok", "message": "Wordtap backend is running"}


@app.get("/dictionary/{term:path}", response_model=List[DictionaryEntryPayload], tags=["dictionary"])
async def dictionary(term: str):
    try:
        return await asyncio.to_thread(state.current().lookup.lookup, term)
    except Exception as exc:
        logger.exception("Lookup failed for %r", term)
        raise HTTPException(status_code=500, detail=str(exc))


@app.post("/tokenize", response_model=TokenizeResponsePayload, tags=["reader"])
async def tokenize(request: TokenizeRequest):
    try:
        tokens = await asyncio.to_thread(state.current().reader.tokenize, request.text)
        return TokenizeResponsePayload(tokens=tokens)
    except Exception as exc:
        logger.exception("Tokenization failed")
        raise HTTPException(status_code=500, detail=str(exc))


@app.post("/resolve", response_model=ClickResponsePayload, tags=["reader"])
async def resolve(request: ClickRequest):
    try:
        return await asyncio.to_thread(state.current().reader.resolve, request)
    except Exception as exc:
        logger.exception("Click resolution failed")
        raise HTTPException(status_code=500, detail=str(exc))


if __name__ == "__main__":
    configure_logging(settings.log_level)
    # Build the index before accepting requests.
    state.current()
    uvicorn.run(app, host=settings.host, port=settings.port)
