from typing import Optional
from pydantic import Field
from app.schemas.common import CamelModel

class StreakIn(CamelModel):
    profile_user_id: Optional[str] = Field(None, description="ストリークを受け取るユーザーID")
    watch_user_id: Optional[str] = Field(None, description="ストリークを付けるユーザーID")

class StreakGrantOut(CamelModel):
    message: str
    count: int
    granted: bool

class StreakCheckOut(CamelModel):
    count: int
    has_granted: bool

class StreakCountOut(CamelModel):
    count: int
