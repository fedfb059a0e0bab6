"""Pydantic schemas for signup/login and the current-user probe."""
from pydantic import BaseModel, Field, field_validator


class CredentialsSchema(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        return v.strip() if isinstance(v, str) else v


class UserOutSchema(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True


class MeOutSchema(BaseModel):
    loggedIn: bool
    user: UserOutSchema | None = None
