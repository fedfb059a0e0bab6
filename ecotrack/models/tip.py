"""Static tip catalog row."""
from sqlalchemy import Column, Integer, Text

from ecotrack.db.session import Base


class Tip(Base):
    __tablename__ = "tips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tip = Column(Text, nullable=False)
