from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from app.api.commons.utils import internal_error
from app.constants.messages import SearchMessage
from app.crud.user_crud import UserCrud
from app.db.base import Database, get_db
from app.schemas.search import UserSearchResult

router = APIRouter()


@router.get("/search-users", response_model=List[UserSearchResult])
def search_users(
    username: Optional[str] = Query(None, description="検索するユーザー名（部分一致・大文字小文字を区別しない）"),
    db: Database = Depends(get_db),
):
    """
    ユーザー名検索
    """
    if not username or not username.strip():
        raise HTTPException(status_code=400, detail=SearchMessage.USERNAME_REQUIRED)
    try:
        return UserCrud(db=db).search_users_by_username(username.strip())
    except Exception as e:
        raise internal_error(SearchMessage.FAILED, e)
