"""Infra endpoints: health."""

from fastapi import APIRouter

from messenger.config import get_settings

router = APIRouter()


@router.get("/health", tags=["Infra"])
def health() -> dict[str, str]:
    """Report liveness and which deployment answered."""
    settings = get_settings()
    return {"status": "ok", "app": settings.app_name, "env": settings.env}
