"""
API v1 router combining all v1 endpoints.
"""
from fastapi import APIRouter
from sptable.api.v1 import health, sp_table

api_router = APIRouter()

# Include all v1 routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(sp_table.router, prefix="/sp-table", tags=["sp-table"])
