# app/services/s3/keygen.py
import uuid
from typing import Tuple


def _safe_filename(filename: str | None) -> str:
    if not filename:
        return "upload"
    # パス区切りは除去する
    return filename.replace("\\", "/").rsplit("/", 1)[-1] or "upload"


def media_key(filename: str | None) -> Tuple[str, str]:
    """
    メディアキー生成

    Args:
        filename (str): ファイル名

    Returns:
        Tuple[str, str]: (ファイルID, キー)
    """
    file_id = str(uuid.uuid4())
    return file_id, f"{file_id}-{_safe_filename(filename)}"


def profile_photo_key(filename: str | None) -> str:
    """
    プロフィール画像キー生成

    Args:
        filename (str): ファイル名

    Returns:
        str: プロフィール画像キー
    """
    return f"{uuid.uuid4()}-{_safe_filename(filename)}"
