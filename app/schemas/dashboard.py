"""
Schemas para el panel de administración.
"""
from pydantic import BaseModel
from typing import List

from app.schemas.product import ProductResponse


class ProductStats(BaseModel):
    """Contadores de productos."""

    total: int
    active: int
    inactive: int
    featured: int
    low_stock: int
    out_of_stock: int


class UserStats(BaseModel):
    """Contadores de usuarios."""

    total: int
    new_this_month: int


class DashboardStats(BaseModel):
    """Estadísticas generales del dashboard."""

    products: ProductStats
    users: UserStats
    recent_products: List[ProductResponse]
    low_stock_alerts: List[ProductResponse]
