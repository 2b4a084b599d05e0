import json
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import HTTPException
from pydantic import ValidationError

from app.constants.number import SocialLinkLimit
from app.core.config import settings
from app.core.logger import Logger
from app.schemas.profile import SocialLink

logger = Logger.get_logger()


def internal_error(message: str, error: Exception) -> HTTPException:
    """
    外部サービスのエラーを500に変換

    エラー内容はログに出力し、レスポンスにはDEBUG時のみ含める

    Args:
        message (str): レスポンスに含めるメッセージ
        error (Exception): 発生したエラー

    Returns:
        HTTPException: 500エラー
    """
    logger.error(f"{message}: {error}")
    detail = f"{message}: {error}" if settings.DEBUG else message
    return HTTPException(status_code=500, detail=detail)


def parse_social_links(raw: Optional[str]) -> Optional[List[dict]]:
    """
    SNSリンクのJSON文字列をパース

    不正な値・上限超過の場合はログを出してNoneを返す（リクエストは失敗させない）

    Args:
        raw (Optional[str]): JSON文字列

    Returns:
        Optional[List[dict]]: name/url/platformのリスト
    """
    if not raw:
        return None
    try:
        parsed = json.loads(raw)
        if not isinstance(parsed, list) or len(parsed) > SocialLinkLimit.MAX:
            logger.warning(f"Ignored social links: expected a list of at most {SocialLinkLimit.MAX} items")
            return None
        return [SocialLink.model_validate(link).model_dump() for link in parsed]
    except (ValueError, ValidationError) as e:
        logger.warning(f"Error parsing social links: {e}")
        return None


def account_age_days(registered_at: Optional[str], now: Optional[datetime] = None) -> Optional[int]:
    """
    登録日時からのアカウント経過日数

    Args:
        registered_at (Optional[str]): ISO 8601の登録日時

    Returns:
        Optional[int]: 経過日数（登録日時が不明な場合はNone）
    """
    if not registered_at:
        return None
    try:
        registered = datetime.fromisoformat(registered_at.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Invalid registeredAt: {registered_at}")
        return None
    if registered.tzinfo is None:
        registered = registered.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return max(0, (now - registered).days)
