"""Task of the day and tip of the day: deterministic picks by day of month."""
from datetime import date
from typing import Sequence, TypeVar

T = TypeVar("T")

DAILY_TASKS = [
    "Plant a seed or small plant 🌱",
    "Refill a reusable bottle instead of buying plastic",
    "Collect and compost kitchen scraps for 15 minutes",
    "Pick up 5 pieces of litter in your neighborhood",
    "Avoid single-use plastics for the whole day",
    "Use public transport or walk for one trip today",
]

# Seeded into the tips table on first startup, in this order
SEED_TIPS = [
    "Turn off lights when leaving a room.",
    "Use a reusable bottle instead of single-use plastic.",
    "Take shorter showers to save water.",
    "Carry a cloth bag for shopping.",
    "Compost kitchen scraps if you can.",
    "Plant a native flower to help pollinators.",
    "Air dry clothes when possible to save energy.",
]

FALLBACK_TIP = "Reduce, reuse, recycle."

REWARD_TEMPLATE = "Eco Star — completed task on {day}"


def pick_for_day(items: Sequence[T], day: date) -> T:
    """Day of month (1-31) modulo len(items); items must not be empty."""
    if not items:
        raise ValueError("cannot pick from an empty list")
    return items[day.day % len(items)]


def task_of_the_day(day: date) -> str:
    return pick_for_day(DAILY_TASKS, day)


def tip_of_the_day(tips: Sequence[str], day: date) -> str:
    """Pick from the catalog, or the fallback tip when the catalog is empty."""
    if not tips:
        return FALLBACK_TIP
    return pick_for_day(tips, day)


def reward_text(day: date) -> str:
    return REWARD_TEMPLATE.format(day=day.isoformat())
