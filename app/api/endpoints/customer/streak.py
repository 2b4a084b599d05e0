from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from app.api.commons.utils import internal_error
from app.constants.messages import StreakMessage
from app.db.base import Database, get_db
from app.domain.exceptions import SelfStreakError, StreakContentionError, StreakValidationError
from app.domain.streak.streak_domain import StreakDomain
from app.schemas.streak import StreakCheckOut, StreakCountOut, StreakGrantOut, StreakIn

router = APIRouter()


@router.post("/add-streak", response_model=StreakGrantOut)
def add_streak(payload: StreakIn, db: Database = Depends(get_db)):
    """
    ストリークを付与（1ユーザーにつき1回まで）

    付与済みの場合は400で現在の件数とgranted=Falseを返す
    """
    try:
        result = StreakDomain(db=db).add_streak(payload.profile_user_id, payload.watch_user_id)
    except StreakValidationError:
        raise HTTPException(status_code=400, detail=StreakMessage.REQUIRED_FIELDS)
    except SelfStreakError:
        raise HTTPException(status_code=400, detail=StreakMessage.SELF_STREAK)
    except StreakContentionError:
        raise HTTPException(status_code=409, detail=StreakMessage.CONTENTION)
    except Exception as e:
        raise internal_error(StreakMessage.FAILED, e)

    if not result.granted:
        body = StreakGrantOut(message=StreakMessage.ALREADY_ADDED, count=result.count, granted=False)
        return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))

    return StreakGrantOut(message=StreakMessage.ADDED, count=result.count, granted=True)


@router.get("/check-streak", response_model=StreakCheckOut)
def check_streak(
    profile_user_id: Optional[str] = Query(None, alias="profileUserId", description="ストリークを受け取るユーザーID"),
    watch_user_id: Optional[str] = Query(None, alias="watchUserId", description="ストリークを付けるユーザーID"),
    db: Database = Depends(get_db),
):
    """付与済みかどうかと件数を取得"""
    if not profile_user_id or not watch_user_id:
        raise HTTPException(status_code=400, detail=StreakMessage.REQUIRED_FIELDS)
    try:
        status = StreakDomain(db=db).check_streak(profile_user_id, watch_user_id)
        return StreakCheckOut(count=status.count, has_granted=status.has_granted)
    except Exception as e:
        raise internal_error(StreakMessage.FETCH_FAILED, e)


@router.get("/get-streak-count", response_model=StreakCountOut)
def get_streak_count(
    profile_user_id: Optional[str] = Query(None, alias="profileUserId", description="ストリークを受け取るユーザーID"),
    db: Database = Depends(get_db),
):
    """件数を取得"""
    if not profile_user_id:
        raise HTTPException(status_code=400, detail=StreakMessage.PROFILE_USER_ID_REQUIRED)
    try:
        return StreakCountOut(count=StreakDomain(db=db).get_streak_count(profile_user_id))
    except Exception as e:
        raise internal_error(StreakMessage.FETCH_FAILED, e)
