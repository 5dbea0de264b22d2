"""Health check endpoint."""

from fastapi import APIRouter

from src import config

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok", "service": config.SERVICE_NAME, "version": config.VERSION}


@router.get("/")
async def root():
    return {"service": config.SERVICE_NAME, "version": config.VERSION}
