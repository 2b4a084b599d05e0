# app/services/s3/client.py
from functools import lru_cache
import boto3
from botocore.config import Config
from app.core.config import settings
from app.core.logger import Logger

logger = Logger.get_logger()


@lru_cache(maxsize=1)
def s3_client():
    """S3クライアントを取得（プロセス内で1つだけ生成）

    Returns:
        boto3.client: S3クライアント
    """
    kwargs = {
        "region_name": settings.AWS_REGION,
        "config": Config(signature_version="s3v4"),
    }
    if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
        kwargs["aws_access_key_id"] = settings.AWS_ACCESS_KEY_ID
        kwargs["aws_secret_access_key"] = settings.AWS_SECRET_ACCESS_KEY
    return boto3.client("s3", **kwargs)


def get_s3():
    """
    FastAPIの依存関係用
    """
    return s3_client()


def public_url(key: str) -> str:
    """
    オブジェクトの公開URLを生成

    Args:
        key (str): キー

    Returns:
        str: 公開URL
    """
    return f"{settings.PUBLIC_BASE_URL}/{key}"


def upload_object(client, key: str, body: bytes, content_type: str | None) -> str:
    """
    オブジェクトをS3にアップロード

    Args:
        client: S3クライアント
        key: S3キー
        body: バイナリデータ
        content_type: Content-Type

    Returns:
        str: アップロードしたオブジェクトの公開URL

    Raises:
        Exception: アップロード失敗時
    """
    params = {
        "Bucket": settings.AWS_S3_BUCKET,
        "Key": key,
        "Body": body,
    }
    if content_type:
        params["ContentType"] = content_type
    try:
        client.put_object(**params)
    except Exception as e:
        logger.error(f"Failed to upload object to S3: {settings.AWS_S3_BUCKET}/{key}: {e}")
        raise
    logger.info(f"Uploaded object to S3: {settings.AWS_S3_BUCKET}/{key}")
    return public_url(key)
