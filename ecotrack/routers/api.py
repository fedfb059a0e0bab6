"""API routes: JSON for the daily task, streak, tip and rewards."""
import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecotrack.db.session import get_db
from ecotrack.routers.auth import require_user_id
from ecotrack.schemas.stats import (
    RewardSchema,
    RewardsOutSchema,
    StreakOutSchema,
    TaskOutSchema,
    TipSchema,
)
from ecotrack.services import store
from ecotrack.services.daily import reward_text, task_of_the_day, tip_of_the_day
from ecotrack.services.streak import (
    DEFAULT_STREAK_DAYS,
    MAX_STREAK_DAYS,
    completion_flags,
    window,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

REWARD_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_today() -> date:
    """Current calendar date (server local time)."""
    return date.today()


@router.get("/task", response_model=TaskOutSchema)
def get_task(
    user_id: Annotated[int, Depends(require_user_id)],
    today: Annotated[date, Depends(get_today)],
):
    """Task of the day; same for every user."""
    return TaskOutSchema(task=task_of_the_day(today))


@router.post("/task")
def complete_task(
    user_id: Annotated[int, Depends(require_user_id)],
    today: Annotated[date, Depends(get_today)],
    db: Annotated[Session, Depends(get_db)],
):
    """Mark today's task done; the first claim of the day earns a reward."""
    reward = store.claim_daily_task(db, user_id, today, reward_text(today))
    if reward is None:
        return {"message": "Already completed today"}
    log.info("User %s completed the task for %s", user_id, today)
    return {"success": True, "reward": reward.reward}


@router.get("/streak", response_model=StreakOutSchema)
def get_streak(
    user_id: Annotated[int, Depends(require_user_id)],
    today: Annotated[date, Depends(get_today)],
    db: Annotated[Session, Depends(get_db)],
    days: Annotated[int, Query(ge=1, le=MAX_STREAK_DAYS)] = DEFAULT_STREAK_DAYS,
):
    dates = window(today, days)
    done = store.list_completion_dates(db, user_id, dates[0], dates[-1])
    return StreakOutSchema(
        labels=[d.isoformat() for d in dates],
        values=completion_flags(dates, done),
    )


@router.get("/tip", response_model=TipSchema)
def get_tip(
    today: Annotated[date, Depends(get_today)],
    db: Annotated[Session, Depends(get_db)],
):
    """Tip of the day; falls back to a fixed tip if the catalog can't be read."""
    try:
        tips = store.list_tips(db)
    except SQLAlchemyError:
        log.exception("Could not read tips; serving fallback")
        tips = []
    return TipSchema(tip=tip_of_the_day(tips, today))


@router.get("/rewards", response_model=RewardsOutSchema)
def get_rewards(
    user_id: Annotated[int, Depends(require_user_id)],
    db: Annotated[Session, Depends(get_db)],
):
    rewards = store.list_rewards(db, user_id)
    return RewardsOutSchema(
        rewards=[RewardSchema(text=r.reward, date=r.created_at.strftime(REWARD_DATE_FORMAT)) for r in rewards],
        count=len(rewards),
    )
