"""SQLAlchemy declarative base and model imports for Alembic."""
from ecotrack.db.session import Base

# Import all models so Alembic can see them
from ecotrack.models.user import User  # noqa: F401
from ecotrack.models.completion import TaskCompletion  # noqa: F401
from ecotrack.models.reward import Reward  # noqa: F401
from ecotrack.models.tip import Tip  # noqa: F401
from ecotrack.models.session import AuthSession  # noqa: F401

__all__ = ["Base", "User", "TaskCompletion", "Reward", "Tip", "AuthSession"]
