from typing import Any, List, Optional
from pydantic import Field
from app.schemas.common import CamelModel

class IncrementViewsIn(CamelModel):
    # 型チェックはエンドポイント側で行い400を返す
    video_ids: Optional[Any] = Field(None, description="再生数を加算する動画IDの配列")

class ViewIncrementResult(CamelModel):
    video_id: str
    status: str
    error: Optional[str] = None

class IncrementViewsOut(CamelModel):
    message: str
    total: int
    success_count: int
    failed_count: int
    results: List[ViewIncrementResult]
