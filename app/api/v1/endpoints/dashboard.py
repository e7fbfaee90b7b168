"""
Endpoints del dashboard de administración.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_admin_user
from app.models.user import User
from app.schemas.dashboard import DashboardStats
from app.services import dashboard_service

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Estadísticas generales para el panel de administración.

    Incluye contadores de productos y usuarios, los productos más recientes
    y alertas de stock bajo.
    """
    return dashboard_service.get_dashboard_stats(db)
