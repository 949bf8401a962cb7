"""
Main API router aggregator
"""
from fastapi import APIRouter

from mizan.api.v1.endpoints import (
    alerts,
    documents,
    finance,
    health,
    permissions,
)

api_router = APIRouter()

# Include routers
api_router.include_router(alerts.router, prefix="/alerts", tags=["Alerts"])
api_router.include_router(finance.router, prefix="/finance", tags=["Fees & Expenses"])
api_router.include_router(documents.router, prefix="/documents", tags=["Documents"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["Permissions"])
api_router.include_router(health.router, prefix="/health", tags=["Health"])
