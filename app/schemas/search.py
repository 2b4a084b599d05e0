from app.schemas.common import CamelModel


class UserSearchResult(CamelModel):
    user_id: str
    username: str
