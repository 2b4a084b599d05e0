import uuid
from typing import List, Optional

from boto3.dynamodb.conditions import Attr, Key
from tenacity import retry, retry_if_exception_type, stop_after_attempt

from app.core.config import settings
from app.core.logger import Logger as CoreLogger
from app.core.security import hash_password, now_iso
from app.db.base import (
    ConditionalWriteError,
    Database,
    is_conditional_check_failed,
    query_all,
    scan_all,
)


class UserCrud:
    def __init__(self, db: Database):
        self.table = db.users
        self.logger = CoreLogger.get_logger()

    def get_user_by_id(self, user_id: str) -> Optional[dict]:
        """
        ユーザーIDによるユーザー取得
        """
        response = self.table.get_item(Key={"userId": user_id})
        return response.get("Item")

    def get_user_by_username(self, username: str) -> Optional[dict]:
        """
        ユーザー名によるユーザー取得（username-index）
        """
        items = query_all(
            self.table,
            IndexName=settings.USERNAME_INDEX,
            KeyConditionExpression=Key("username").eq(username),
        )
        return items[0] if items else None

    def get_user_by_email(self, email: str) -> Optional[dict]:
        """
        メールアドレスによるユーザー取得（email-index）
        """
        items = query_all(
            self.table,
            IndexName=settings.EMAIL_INDEX,
            KeyConditionExpression=Key("email").eq(email),
        )
        return items[0] if items else None

    def get_user_by_identifier(self, identifier: str) -> Optional[dict]:
        """
        メールアドレスまたはユーザー名によるユーザー取得

        Args:
            identifier (str): メールアドレスまたはユーザー名

        Returns:
            Optional[dict]: ユーザー
        """
        if "@" in identifier:
            user = self.get_user_by_email(identifier)
            if user:
                return user
        return self.get_user_by_username(identifier)

    def create_user(self, username: str, password: str, email: Optional[str] = None) -> dict:
        """
        ユーザー作成

        ユーザーIDが衝突した場合はIDを振り直して再試行する

        Args:
            username (str): ユーザー名
            password (str): 平文のパスワード
            email (Optional[str]): メールアドレス

        Returns:
            dict: 作成したユーザー
        """
        item = {
            "username": username,
            "passwordHash": hash_password(password),
            "registeredAt": now_iso(),
        }
        if email:
            item["email"] = email
        return self._put_with_new_id(item)

    @retry(
        retry=retry_if_exception_type(ConditionalWriteError),
        stop=stop_after_attempt(settings.USER_ID_ATTEMPTS),
        reraise=True,
    )
    def _put_with_new_id(self, item: dict) -> dict:
        user = {**item, "userId": str(uuid.uuid4())}
        try:
            self.table.put_item(
                Item=user,
                ConditionExpression=Attr("userId").not_exists(),
            )
        except Exception as e:
            if is_conditional_check_failed(e):
                self.logger.warning(f"User ID collision, regenerating: {user['userId']}")
                raise ConditionalWriteError(user["userId"]) from e
            raise
        return user

    def search_users_by_username(self, query: str) -> List[dict]:
        """
        ユーザー名の部分一致検索（大文字小文字を区別しない）

        Args:
            query (str): 検索文字列

        Returns:
            List[dict]: userIdとusernameのみのユーザー一覧
        """
        needle = query.lower()
        items = scan_all(
            self.table,
            ProjectionExpression="#uid, #un",
            ExpressionAttributeNames={"#uid": "userId", "#un": "username"},
        )
        return [
            item for item in items
            if needle in str(item.get("username", "")).lower()
        ]
