"""
RefreshToken model: one row per issued refresh token.
Fields:
- id (String(36)) - the lookup half of the "<id>.<secret>" wire value
- user_id (String(36)) - FK to users.id
- token_hash - argon2 hash of the secret half; the secret itself is never stored
- expires_at, revoked
- created_at, updated_at

Rows are only ever flipped to revoked; they stay behind as an audit trail.
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class RefreshToken(BaseModel, Base):
    __tablename__ = "refresh_tokens"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(String(255), nullable=False)
    revoked = Column(Boolean, default=False, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="refresh_tokens")

    def __repr__(self):
        return f"<RefreshToken id={self.id} user_id={self.user_id} revoked={self.revoked}>"
