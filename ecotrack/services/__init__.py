from ecotrack.services.daily import task_of_the_day, tip_of_the_day
from ecotrack.services.seeding import seed_tips

__all__ = ["task_of_the_day", "tip_of_the_day", "seed_tips"]
