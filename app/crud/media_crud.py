from typing import List, Optional

from boto3.dynamodb.conditions import Attr

from app.constants.enums import Category
from app.core.logger import Logger as CoreLogger
from app.db.base import Database, scan_all


def _category_filter(condition, category: Optional[str]):
    if category and category != Category.ALL:
        return condition & Attr("category").eq(category)
    return condition


def _newest_first(items: List[dict]) -> List[dict]:
    return sorted(items, key=lambda item: item.get("createdAt") or "", reverse=True)


class MediaCrud:
    def __init__(self, db: Database):
        self.table = db.media
        self.logger = CoreLogger.get_logger()

    def create_media(self, media: dict) -> dict:
        """
        メディアのメタデータを保存
        """
        self.table.put_item(Item=media)
        return media

    def get_media_by_file_type(self, file_type: str, category: Optional[str] = None) -> List[dict]:
        """
        ファイル種別によるメディア一覧取得（新しい順）

        Args:
            file_type (str): image / video
            category (Optional[str]): カテゴリ（"All"または未指定は絞り込みなし）

        Returns:
            List[dict]: メディア一覧
        """
        condition = _category_filter(Attr("fileType").eq(file_type), category)
        return _newest_first(scan_all(self.table, FilterExpression=condition))

    def get_media_by_user_id(self, user_id: str, category: Optional[str] = None) -> List[dict]:
        """
        ユーザーIDによるメディア一覧取得（新しい順）
        """
        condition = _category_filter(Attr("userId").eq(user_id), category)
        return _newest_first(scan_all(self.table, FilterExpression=condition))

    def increment_view_count(self, file_id: str) -> int:
        """
        再生数を1加算（未設定の場合は0から）

        存在しないファイルIDの場合はConditionalCheckFailedExceptionになる

        Args:
            file_id (str): ファイルID

        Returns:
            int: 加算後の再生数
        """
        response = self.table.update_item(
            Key={"fileId": file_id},
            UpdateExpression="SET #v = if_not_exists(#v, :zero) + :inc",
            ConditionExpression=Attr("fileId").exists(),
            ExpressionAttributeNames={"#v": "viewCount"},
            ExpressionAttributeValues={":zero": 0, ":inc": 1},
            ReturnValues="UPDATED_NEW",
        )
        return int(response.get("Attributes", {}).get("viewCount", 0))
