"""Pydantic schemas for task, streak, tip and reward responses."""
from pydantic import BaseModel


class TaskOutSchema(BaseModel):
    task: str


class StreakOutSchema(BaseModel):
    labels: list[str]  # ISO dates, oldest first
    values: list[int]  # 1 = completed that day


class TipSchema(BaseModel):
    tip: str


class RewardSchema(BaseModel):
    text: str
    date: str


class RewardsOutSchema(BaseModel):
    rewards: list[RewardSchema]
    count: int
