from typing import Optional

from app.core.logger import Logger as CoreLogger
from app.db.base import Database


class ProfileCrud:
    def __init__(self, db: Database):
        self.table = db.profiles
        self.logger = CoreLogger.get_logger()

    def get_profile_by_user_id(self, user_id: str) -> Optional[dict]:
        """
        ユーザーIDによるプロフィール取得
        """
        response = self.table.get_item(Key={"userId": user_id})
        return response.get("Item")

    def put_profile(self, profile: dict) -> dict:
        """
        プロフィールを保存（同じユーザーIDのレコードは上書き）
        """
        self.table.put_item(Item=profile)
        return profile
