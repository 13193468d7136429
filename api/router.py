# api/router.py
from fastapi import APIRouter

from . import meta, planner

api_router = APIRouter()

api_router.include_router(planner.router, tags=["Planner"])
api_router.include_router(meta.router, tags=["Meta"])
