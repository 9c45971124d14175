from sqlalchemy.orm import relationship
from sqlalchemy import Column, String

from models.base_model import BaseModel, Base


class Tenant(BaseModel, Base):
    __tablename__ = "tenants"

    name = Column(String(128), nullable=False)
    # stored lower-cased and trimmed
    slug = Column(String(128), nullable=False, unique=True, index=True)

    plans = relationship(
        "Plan",
        back_populates="tenant",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
