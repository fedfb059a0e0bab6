"""Server-side login session, used by the database session backend."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from ecotrack.db.session import Base


class AuthSession(Base):
    __tablename__ = "sessions"

    token = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
