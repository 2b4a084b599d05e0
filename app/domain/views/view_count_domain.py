from __future__ import annotations
import asyncio
from dataclasses import dataclass, field
from logging import Logger
from typing import List, Optional, Sequence
from app.constants.enums import ViewIncrementStatus
from app.core.config import settings
from app.core.logger import Logger as CoreLogger
from app.crud.media_crud import MediaCrud
from app.db.base import Database, is_conditional_check_failed


@dataclass(frozen=True)
class ViewIncrementOutcome:
    video_id: str
    status: str
    error: Optional[str] = None


@dataclass
class ViewIncrementSummary:
    results: List[ViewIncrementOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.status == ViewIncrementStatus.SUCCESS)

    @property
    def failed_count(self) -> int:
        return self.total - self.success_count


class ViewCountDomain:
    """
    再生数の一括加算

    IDをbatch_size件ずつのラウンドに分け、ラウンド内は並行に加算する。
    次のラウンドは前のラウンドが全件完了してから開始する。
    1件の失敗は他のIDの加算に影響しない。
    """

    def __init__(self, db: Database, batch_size: int | None = None):
        self.db: Database = db
        self.logger: Logger = CoreLogger.get_logger()
        self.media_crud: MediaCrud = MediaCrud(db=self.db)
        self.batch_size: int = max(1, batch_size or settings.VIEW_INCREMENT_BATCH_SIZE)

    async def increment_many(self, video_ids: Sequence[object]) -> ViewIncrementSummary:
        summary = ViewIncrementSummary()
        for start in range(0, len(video_ids), self.batch_size):
            batch = list(video_ids[start:start + self.batch_size])
            summary.results.extend(await self._run_batch(batch))

        self.logger.info(
            f"View increments: total={summary.total} "
            f"success={summary.success_count} failed={summary.failed_count}"
        )
        return summary

    async def _run_batch(self, batch: List[object]) -> List[ViewIncrementOutcome]:
        outcomes = await asyncio.gather(
            *(self._increment_one(video_id) for video_id in batch),
            return_exceptions=True,
        )
        results: List[ViewIncrementOutcome] = []
        for video_id, outcome in zip(batch, outcomes):
            if isinstance(outcome, ViewIncrementOutcome):
                results.append(outcome)
            elif isinstance(outcome, Exception):
                results.append(self._failed(video_id, outcome))
            else:
                raise outcome
        return results

    async def _increment_one(self, video_id: object) -> ViewIncrementOutcome:
        if not isinstance(video_id, str) or not video_id:
            return ViewIncrementOutcome(
                video_id=str(video_id),
                status=ViewIncrementStatus.FAILED,
                error="Invalid video id",
            )
        await asyncio.to_thread(self.media_crud.increment_view_count, video_id)
        return ViewIncrementOutcome(video_id=video_id, status=ViewIncrementStatus.SUCCESS)

    def _failed(self, video_id: object, error: Exception) -> ViewIncrementOutcome:
        if is_conditional_check_failed(error):
            detail = "Video not found"
        else:
            detail = str(error)
        self.logger.warning(f"Failed to increment views for {video_id}: {detail}")
        return ViewIncrementOutcome(
            video_id=str(video_id),
            status=ViewIncrementStatus.FAILED,
            error=detail,
        )
