from typing import Any, Dict

from fastapi import APIRouter

from core.config import get_settings

router = APIRouter()

@router.get("/config", response_model=Dict[str, Any], tags=["System"])
async def get_configuration():
    """Get current runtime configuration."""
    return get_settings().model_dump()
