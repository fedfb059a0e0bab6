from ecotrack.schemas.auth import CredentialsSchema, MeOutSchema, UserOutSchema
from ecotrack.schemas.stats import (
    RewardSchema,
    RewardsOutSchema,
    StreakOutSchema,
    TaskOutSchema,
    TipSchema,
)

__all__ = [
    "CredentialsSchema",
    "MeOutSchema",
    "UserOutSchema",
    "RewardSchema",
    "RewardsOutSchema",
    "StreakOutSchema",
    "TaskOutSchema",
    "TipSchema",
]
