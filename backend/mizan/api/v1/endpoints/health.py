"""
Health check
"""
from fastapi import APIRouter

from mizan import __version__
from mizan.core.config import settings

router = APIRouter()


@router.get("")
def health():
    return {"status": "healthy", "app": settings.APP_NAME, "version": __version__}
