# app/db/base.py
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from app.core.config import settings


class ConditionalWriteError(Exception):
    """条件付き書き込みの条件を満たさなかった"""


def is_conditional_check_failed(error: Exception) -> bool:
    return (
        isinstance(error, ClientError)
        and error.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"
    )


@dataclass
class Database:
    """DynamoDBテーブルのハンドル"""

    users: Any
    profiles: Any
    media: Any
    streaks: Any


@lru_cache(maxsize=1)
def dynamodb_resource():
    """DynamoDBリソースを取得（プロセス内で1つだけ生成）

    Returns:
        boto3.resource: DynamoDBリソース
    """
    kwargs: Dict[str, Any] = {
        "region_name": settings.AWS_REGION,
        "config": Config(retries={"max_attempts": 3, "mode": "standard"}),
    }
    if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
        kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
        kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
    if settings.DYNAMODB_ENDPOINT_URL:
        kwargs["endpoint_url"] = settings.DYNAMODB_ENDPOINT_URL
    return boto3.resource("dynamodb", **kwargs)


@lru_cache(maxsize=1)
def get_database() -> Database:
    resource = dynamodb_resource()
    return Database(
        users=resource.Table(settings.USERS_TABLE),
        profiles=resource.Table(settings.PROFILE_TABLE),
        media=resource.Table(settings.STORAGE_TABLE),
        streaks=resource.Table(settings.STREAK_TABLE),
    )


def get_db() -> Database:
    """
    FastAPIの依存関係用
    """
    return get_database()


def scan_all(table, **kwargs) -> List[dict]:
    """
    LastEvaluatedKeyを辿ってスキャン結果を全件取得

    Args:
        table: DynamoDBテーブル
        **kwargs: scanに渡すパラメータ（FilterExpression等）

    Returns:
        List[dict]: アイテム一覧
    """
    items: List[dict] = []
    while True:
        response = table.scan(**kwargs)
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key


def query_all(table, **kwargs) -> List[dict]:
    """
    LastEvaluatedKeyを辿ってクエリ結果を全件取得
    """
    items: List[dict] = []
    while True:
        response = table.query(**kwargs)
        items.extend(response.get("Items", []))
        last_key = response.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key
