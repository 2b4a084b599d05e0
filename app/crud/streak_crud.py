from typing import Optional

from boto3.dynamodb.conditions import Attr

from app.core.logger import Logger as CoreLogger
from app.core.security import now_iso
from app.db.base import ConditionalWriteError, Database, is_conditional_check_failed


def _to_record(item: dict) -> dict:
    watchers = item.get("watchUserIds") or set()
    return {
        "profileUserId": item["profileUserId"],
        "watchUserIds": set(watchers),
        "count": int(item.get("count", 0)),
        "version": int(item.get("version", 0)),
        "createdAt": item.get("createdAt"),
        "updatedAt": item.get("updatedAt"),
    }


class StreakCrud:
    def __init__(self, db: Database):
        self.table = db.streaks
        self.logger = CoreLogger.get_logger()

    def get_streak(self, profile_user_id: str) -> Optional[dict]:
        """
        ストリークレコード取得

        Args:
            profile_user_id (str): ストリークを受け取るユーザーID

        Returns:
            Optional[dict]: watchUserIdsはset、count/versionはint
        """
        response = self.table.get_item(Key={"profileUserId": profile_user_id}, ConsistentRead=True)
        item = response.get("Item")
        return _to_record(item) if item else None

    def create_streak(self, profile_user_id: str, watch_user_id: str) -> dict:
        """
        最初のストリークを作成（レコードが既に存在する場合はConditionalWriteError）
        """
        now = now_iso()
        item = {
            "profileUserId": profile_user_id,
            "watchUserIds": {watch_user_id},
            "count": 1,
            "version": 1,
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            self.table.put_item(
                Item=item,
                ConditionExpression=Attr("profileUserId").not_exists(),
            )
        except Exception as e:
            if is_conditional_check_failed(e):
                raise ConditionalWriteError(profile_user_id) from e
            raise
        return _to_record(item)

    def add_watch_user(self, profile_user_id: str, watch_user_id: str, expected_version: int) -> int:
        """
        ストリークを追加（読み込み時のversionと一致しない場合はConditionalWriteError）

        Args:
            profile_user_id (str): ストリークを受け取るユーザーID
            watch_user_id (str): ストリークを付けるユーザーID
            expected_version (int): 読み込み時のversion

        Returns:
            int: 追加後のcount
        """
        try:
            response = self.table.update_item(
                Key={"profileUserId": profile_user_id},
                UpdateExpression=(
                    "SET #count = #count + :one, #version = #version + :one, #updatedAt = :now "
                    "ADD #watchers :watcher"
                ),
                ConditionExpression="#version = :expected AND NOT contains(#watchers, :watch_user_id)",
                ExpressionAttributeNames={
                    "#count": "count",
                    "#version": "version",
                    "#updatedAt": "updatedAt",
                    "#watchers": "watchUserIds",
                },
                ExpressionAttributeValues={
                    ":one": 1,
                    ":now": now_iso(),
                    ":watcher": {watch_user_id},
                    ":watch_user_id": watch_user_id,
                    ":expected": expected_version,
                },
                ReturnValues="UPDATED_NEW",
            )
        except Exception as e:
            if is_conditional_check_failed(e):
                raise ConditionalWriteError(profile_user_id) from e
            raise
        return int(response["Attributes"]["count"])
