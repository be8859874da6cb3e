from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class UserCreate(BaseModel):
    username: str = Field(..., description="Unique, case-sensitive username")
    # Strict: JSON booleans and numeric strings are rejected rather than coerced.
    age: StrictInt = Field(default=0, description="Non-negative age")


class UserUpdate(BaseModel):
    """Partial update request.

    Each field is independent: leaving it out (or sending null) keeps the
    current value. A blank username is also treated as "no change".
    """

    username: Optional[str] = Field(default=None, description="New username")
    age: Optional[StrictInt] = Field(default=None, description="New non-negative age")


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    age: int


class DeleteResponse(BaseModel):
    message: str
    user: UserOut
