"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from kickoff.api.routes import travelers, expenses, settlements, summary

api_router = APIRouter()

# Include all route modules
api_router.include_router(travelers.router)
api_router.include_router(expenses.router)
api_router.include_router(settlements.router)
api_router.include_router(summary.router)
