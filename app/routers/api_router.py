from fastapi import APIRouter
from app.routers import departments, personnel, leave, leave_analytics, notifications

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(departments.router)
api_router.include_router(personnel.router)
api_router.include_router(leave_analytics.router)
api_router.include_router(leave.router)
api_router.include_router(notifications.router)
