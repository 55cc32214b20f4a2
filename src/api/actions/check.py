from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, Depends, HTTPException

from backends.contracts import CheckBackend
from core.errors import BackendError, CheckAborted, DocumentError
from documents.loader import world_from_text
from schemas.requests import CheckInput, CheckOptions
from schemas.responses import CheckResult, ChunkView, ConvertResult
from services.checker import build_chunks, create_backend, run_check

router = APIRouter()

BackendFactory = Callable[[CheckOptions], CheckBackend]


def get_backend_factory() -> BackendFactory:
    """Dependency returning how a backend is built for one request."""
    return create_backend


@router.post("/check", response_model=CheckResult, tags=["Check"])
async def check_text(
    payload: CheckInput,
    backend_factory: BackendFactory = Depends(get_backend_factory),
):
    """Check plain text and return located diagnostics."""
    try:
        world = world_from_text(payload.text, payload.file)
    except DocumentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    backend = backend_factory(payload.options)
    try:
        result, _ = await run_check(world, payload.options, backend)
    except CheckAborted as e:
        raise HTTPException(status_code=502, detail=f"Check aborted: {e.cause}")
    except BackendError as e:
        raise HTTPException(status_code=502, detail=str(e))
    finally:
        close = getattr(backend, "aclose", None)
        if close is not None:
            await close()
    return result


@router.post("/convert", response_model=ConvertResult, tags=["Check"])
async def convert_text(payload: CheckInput):
    """Return the chunks the checker would receive for plain text."""
    world = world_from_text(payload.text, payload.file)
    chunks = build_chunks(world, payload.options)
    return ConvertResult(
        chunks=[
            ChunkView(text=chunk.stream, language=chunk.language, characters=len(chunk.stream))
            for chunk in chunks
        ]
    )
