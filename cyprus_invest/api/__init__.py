"""
API routes for the calculator.
"""

from fastapi import APIRouter

from cyprus_invest.api import calculations

router = APIRouter()

router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
