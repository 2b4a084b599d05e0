# app/core/security.py
from passlib.context import CryptContext
import datetime as dt

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(plain: str) -> str:
    """
    パスワードをハッシュ化する

    Args:
        plain: 平文のパスワード
    """
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str | None) -> bool:
    """
    パスワードを検証する

    Args:
        plain: 平文のパスワード
        hashed: ハッシュ化されたパスワード
    """
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # ハッシュ形式でない値（旧データ等）は一致しない扱い
        return False

def now_utc() -> dt.datetime:
    """
    現在のUTC時刻を取得する
    """
    return dt.datetime.now(dt.timezone.utc)

def now_iso() -> str:
    """
    現在のUTC時刻をISO 8601文字列で取得する
    """
    return now_utc().isoformat()
