"""
Servicio de estadísticas del panel de administración.
"""
from datetime import datetime
from typing import Any, Dict
from sqlalchemy.orm import Session

from app.models.product import Product
from app.models.user import User

RECENT_LIMIT = 10


def _low_stock_filter():
    """Stock positivo pero en o por debajo del mínimo."""
    return (Product.stock_quantity > 0) & (Product.stock_quantity <= Product.min_stock_level)


def get_dashboard_stats(db: Session) -> Dict[str, Any]:
    """
    Calcular contadores de productos y usuarios para el dashboard.

    Args:
        db: Sesión de base de datos

    Returns:
        Contadores, productos recientes y alertas de stock bajo
    """
    products = db.query(Product).filter(Product.deleted_at.is_(None))
    users = db.query(User).filter(User.deleted_at.is_(None))

    month_start = datetime.utcnow().replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    return {
        "products": {
            "total": products.count(),
            "active": products.filter(Product.is_active.is_(True)).count(),
            "inactive": products.filter(Product.is_active.is_(False)).count(),
            "featured": products.filter(Product.is_featured.is_(True)).count(),
            "low_stock": products.filter(_low_stock_filter()).count(),
            "out_of_stock": products.filter(Product.stock_quantity <= 0).count(),
        },
        "users": {
            "total": users.count(),
            "new_this_month": users.filter(User.created_at >= month_start).count(),
        },
        "recent_products": (
            products.order_by(Product.id.desc()).limit(RECENT_LIMIT).all()
        ),
        "low_stock_alerts": (
            products.filter(Product.is_active.is_(True), _low_stock_filter())
            .order_by(Product.stock_quantity.asc(), Product.id.asc())
            .limit(RECENT_LIMIT)
            .all()
        ),
    }
