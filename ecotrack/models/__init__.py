from ecotrack.models.user import User
from ecotrack.models.completion import TaskCompletion
from ecotrack.models.reward import Reward
from ecotrack.models.tip import Tip
from ecotrack.models.session import AuthSession

__all__ = ["User", "TaskCompletion", "Reward", "Tip", "AuthSession"]
