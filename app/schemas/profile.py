from typing import List, Optional
from app.schemas.common import CamelModel

class SocialLink(CamelModel):
    name: str
    url: str
    platform: str

class ProfileUpdateOut(CamelModel):
    message: str
    profile_photo_url: Optional[str] = None

class ProfileOut(CamelModel):
    name: str = ""
    bio: str = ""
    profile_pic: str = ""
    username: str = ""
    social_links: List[SocialLink] = []
    account_age_days: Optional[int] = None
