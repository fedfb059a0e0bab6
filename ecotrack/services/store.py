"""Query shapes over users, task completions, rewards and tips."""
import logging
from datetime import date
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ecotrack.core.errors import DuplicateUsernameError
from ecotrack.models.completion import TaskCompletion
from ecotrack.models.reward import Reward
from ecotrack.models.tip import Tip
from ecotrack.models.user import User

log = logging.getLogger(__name__)


# ---------- users ----------

def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.execute(select(User).where(User.username == username)).scalar_one_or_none()


def create_user(db: Session, username: str, password_hash: str) -> User:
    """Insert a user; DuplicateUsernameError if the name is taken."""
    user = User(username=username, password_hash=password_hash)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateUsernameError(username) from exc
    db.refresh(user)
    return user


# ---------- task completions / rewards ----------

def get_completion(db: Session, user_id: int, day: date) -> TaskCompletion | None:
    return db.execute(
        select(TaskCompletion).where(TaskCompletion.user_id == user_id, TaskCompletion.date == day)
    ).scalar_one_or_none()


def claim_daily_task(db: Session, user_id: int, day: date, reward_text: str) -> Reward | None:
    """Record the day's completion and its reward together.

    Returns None when a completion for (user_id, day) already exists, whether
    it was seen up front or surfaced as a unique violation from a concurrent
    claim.
    """
    if get_completion(db, user_id, day) is not None:
        return None

    reward = Reward(user_id=user_id, reward=reward_text)
    db.add(TaskCompletion(user_id=user_id, date=day, done=True))
    db.add(reward)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        log.info("Concurrent claim for user %s on %s resolved as already completed", user_id, day)
        return None
    db.refresh(reward)
    return reward


def list_completion_dates(db: Session, user_id: int, start: date, end: date) -> set[date]:
    rows = db.execute(
        select(TaskCompletion.date).where(
            TaskCompletion.user_id == user_id,
            TaskCompletion.date >= start,
            TaskCompletion.date <= end,
            TaskCompletion.done.is_(True),
        )
    ).scalars()
    return set(rows)


def list_rewards(db: Session, user_id: int) -> list[Reward]:
    return list(
        db.execute(
            select(Reward)
            .where(Reward.user_id == user_id)
            .order_by(Reward.created_at.desc(), Reward.id.desc())
        ).scalars()
    )


# ---------- tips ----------

def list_tips(db: Session) -> list[str]:
    return list(db.execute(select(Tip.tip).order_by(Tip.id.asc())).scalars())


def count_tips(db: Session) -> int:
    return db.execute(select(func.count(Tip.id))).scalar_one()


def add_tips(db: Session, texts: Iterable[str]) -> None:
    db.add_all([Tip(tip=text) for text in texts])
    db.commit()
