"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from yoursplit.api.routes import groups

api_router = APIRouter()

api_router.include_router(groups.router)
