from decimal import Decimal

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_students: int
    total_classes: int
    total_lessons: int
    total_materials: int
    monthly_revenue: Decimal
    pending_payments: Decimal
