"""API router aggregator."""

from fastapi import APIRouter

from adminpanel.api import settings

api_router = APIRouter()

api_router.include_router(settings.router)
