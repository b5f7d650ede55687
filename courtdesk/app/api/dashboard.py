"""Dashboard overview endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.user import User
from courtdesk.app.schemas.dashboard import DashboardStats
from courtdesk.app.services.dashboard_service import get_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_stats(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return get_dashboard_stats(db, current_user.id)
