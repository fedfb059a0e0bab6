"""Daily task completion: at most one row per user per calendar date."""
from sqlalchemy import Column, Integer, Boolean, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ecotrack.db.session import Base


class TaskCompletion(Base):
    __tablename__ = "tasks"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_tasks_user_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    done = Column(Boolean, nullable=False, default=True)

    user = relationship("User", back_populates="completions")
