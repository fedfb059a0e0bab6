"""Seed the tip catalog on first startup."""
import logging

from sqlalchemy.orm import Session

from ecotrack.services.daily import SEED_TIPS
from ecotrack.services.store import add_tips, count_tips

log = logging.getLogger(__name__)


def seed_tips(db: Session, tips: list[str] = SEED_TIPS) -> int:
    """Insert the seed list in order iff the tips table is empty; return rows added."""
    if count_tips(db) > 0:
        return 0
    add_tips(db, tips)
    log.info("Seeded %d tips", len(tips))
    return len(tips)
