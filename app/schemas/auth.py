from typing import Optional
from pydantic import Field
from app.schemas.common import CamelModel

class RegisterIn(CamelModel):
    username: Optional[str] = Field(None, description="ユーザー名")
    password: Optional[str] = Field(None, description="パスワード")
    email: Optional[str] = Field(None, description="メールアドレス（任意）")

class RegisterOut(CamelModel):
    message: str
    user_id: str
    username: str
    registered_at: str

class SigninIn(CamelModel):
    identifier: Optional[str] = Field(None, description="ユーザー名またはメールアドレス")
    password: Optional[str] = Field(None, description="パスワード")

class SigninOut(CamelModel):
    message: str
    user_id: str
    username: str
    email: Optional[str] = None
