from sqlalchemy.orm import relationship
from sqlalchemy import Boolean, Column, Enum, ForeignKey, Integer, String, UniqueConstraint

from models.base_model import BaseModel, Base

PLAN_INTERVALS = ("MONTH", "YEAR")


class Plan(BaseModel, Base):
    __tablename__ = "plans"

    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(128), nullable=False)
    price_cents = Column(Integer, nullable=False, default=0)
    currency = Column(String(8), nullable=False, default="INR")
    interval = Column(Enum(*PLAN_INTERVALS, name="plan_interval"), nullable=False, default="MONTH")
    active = Column(Boolean, nullable=False, default=True)

    tenant = relationship("Tenant", back_populates="plans")

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_plans_tenant_name"),
    )
