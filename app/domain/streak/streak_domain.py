from __future__ import annotations
from dataclasses import dataclass
from logging import Logger
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_random
from app.core.config import settings
from app.core.logger import Logger as CoreLogger
from app.crud.streak_crud import StreakCrud
from app.db.base import ConditionalWriteError, Database
from app.domain.exceptions import SelfStreakError, StreakContentionError, StreakValidationError


@dataclass(frozen=True)
class StreakGrantResult:
    count: int
    granted: bool


@dataclass(frozen=True)
class StreakStatus:
    count: int
    has_granted: bool


class StreakDomain:
    """
    ストリーク（1ユーザーにつき1回だけ付けられる応援）の台帳

    countは常にwatchUserIdsの要素数と一致する。
    書き込みはversionによる条件付き更新で行い、競合した場合は読み込みからやり直す。
    """

    def __init__(self, db: Database, max_attempts: int | None = None):
        self.db: Database = db
        self.logger: Logger = CoreLogger.get_logger()
        self.streak_crud: StreakCrud = StreakCrud(db=self.db)
        self.max_attempts: int = max_attempts or settings.STREAK_WRITE_ATTEMPTS

    def add_streak(self, profile_user_id: str | None, watch_user_id: str | None) -> StreakGrantResult:
        """
        ストリークを付与

        Args:
            profile_user_id: ストリークを受け取るユーザーID
            watch_user_id: ストリークを付けるユーザーID

        Returns:
            StreakGrantResult: 付与済みだった場合はgranted=Falseで件数は変わらない

        Raises:
            StreakValidationError: IDが未指定
            SelfStreakError: 自分自身へのストリーク
            StreakContentionError: 同時更新で規定回数書き込みに失敗
        """
        if not profile_user_id or not watch_user_id:
            raise StreakValidationError("profileUserId and watchUserId are required")
        if profile_user_id == watch_user_id:
            raise SelfStreakError(profile_user_id)

        try:
            for attempt in Retrying(
                retry=retry_if_exception_type(ConditionalWriteError),
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_random(min=0, max=0.05),
                reraise=True,
            ):
                with attempt:
                    return self._grant_once(profile_user_id, watch_user_id)
        except ConditionalWriteError as e:
            self.logger.error(f"Streak write contention for {profile_user_id}: {e}")
            raise StreakContentionError(profile_user_id) from e

    def _grant_once(self, profile_user_id: str, watch_user_id: str) -> StreakGrantResult:
        record = self.streak_crud.get_streak(profile_user_id)

        if record is None:
            created = self.streak_crud.create_streak(profile_user_id, watch_user_id)
            self.logger.info(f"Streak created: {profile_user_id} <- {watch_user_id}")
            return StreakGrantResult(count=created["count"], granted=True)

        if watch_user_id in record["watchUserIds"]:
            return StreakGrantResult(count=record["count"], granted=False)

        count = self.streak_crud.add_watch_user(profile_user_id, watch_user_id, record["version"])
        self.logger.info(f"Streak added: {profile_user_id} <- {watch_user_id} (count={count})")
        return StreakGrantResult(count=count, granted=True)

    def check_streak(self, profile_user_id: str, watch_user_id: str) -> StreakStatus:
        """
        ストリークの件数と付与済みかどうかを取得（レコードがなければ0/False）
        """
        record = self.streak_crud.get_streak(profile_user_id)
        if record is None:
            return StreakStatus(count=0, has_granted=False)
        return StreakStatus(
            count=record["count"],
            has_granted=watch_user_id in record["watchUserIds"],
        )

    def get_streak_count(self, profile_user_id: str) -> int:
        record = self.streak_crud.get_streak(profile_user_id)
        return record["count"] if record else 0
