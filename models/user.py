from models.base_model import Base, BaseModel
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship


class User(BaseModel, Base):
    __tablename__ = "users"
    # case-sensitive as stored; uniqueness is enforced here, not in the service
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)

    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        passive_deletes=True,
    )

    @property
    def password(self):
        raise AttributeError("Password: Write-only field")
