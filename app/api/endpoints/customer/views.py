from fastapi import APIRouter, Depends, HTTPException
from app.api.commons.utils import internal_error
from app.constants.messages import ViewMessage
from app.db.base import Database, get_db
from app.domain.views.view_count_domain import ViewCountDomain
from app.schemas.views import IncrementViewsIn, IncrementViewsOut, ViewIncrementResult

router = APIRouter()


@router.post("/increment-views", response_model=IncrementViewsOut, response_model_exclude_none=True)
async def increment_views(payload: IncrementViewsIn, db: Database = Depends(get_db)):
    """
    再生数の一括加算

    IDごとに成功/失敗を返す（一部失敗してもリクエスト自体は成功）
    """
    if not isinstance(payload.video_ids, list):
        raise HTTPException(status_code=400, detail=ViewMessage.IDS_REQUIRED)

    try:
        summary = await ViewCountDomain(db=db).increment_many(payload.video_ids)
    except Exception as e:
        raise internal_error(ViewMessage.FAILED, e)

    return IncrementViewsOut(
        message=ViewMessage.COMPLETED,
        total=summary.total,
        success_count=summary.success_count,
        failed_count=summary.failed_count,
        results=[
            ViewIncrementResult(video_id=r.video_id, status=r.status, error=r.error)
            for r in summary.results
        ],
    )
