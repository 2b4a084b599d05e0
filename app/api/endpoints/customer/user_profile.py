from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from app.api.commons.utils import account_age_days, internal_error, parse_social_links
from app.constants.messages import ProfileMessage
from app.core.logger import Logger
from app.core.security import now_iso
from app.crud.profile_crud import ProfileCrud
from app.crud.user_crud import UserCrud
from app.db.base import Database, get_db
from app.schemas.profile import ProfileOut, ProfileUpdateOut
from app.services.s3.client import get_s3, upload_object
from app.services.s3.keygen import profile_photo_key

logger = Logger.get_logger()
router = APIRouter()


@router.post("/profile-send", response_model=ProfileUpdateOut, response_model_exclude_none=True)
def update_profile(
    user_id: Optional[str] = Form(None, alias="userId", description="ユーザーID"),
    username: Optional[str] = Form(None, description="ユーザー名"),
    name: Optional[str] = Form(None, description="表示名"),
    bio: Optional[str] = Form(None, description="自己紹介"),
    social_links: Optional[str] = Form(None, alias="socialLinks", description="SNSリンク（JSON配列、最大5件）"),
    file: Optional[UploadFile] = File(None, description="プロフィール画像"),
    db: Database = Depends(get_db),
    s3=Depends(get_s3),
):
    """
    プロフィール更新

    送信されなかった項目は保存済みの値を引き継ぐ
    """
    if not user_id:
        raise HTTPException(status_code=400, detail=ProfileMessage.USER_ID_REQUIRED)

    try:
        profile_crud = ProfileCrud(db=db)
        existing = profile_crud.get_profile_by_user_id(user_id) or {}
        now = now_iso()

        profile = {
            **existing,
            "userId": user_id,
            "createdAt": existing.get("createdAt", now),
            "updatedAt": now,
        }
        for attr, value in (("username", username), ("name", name), ("bio", bio)):
            if value is not None:
                profile[attr] = value

        links = parse_social_links(social_links)
        if links is not None:
            profile["socialLinks"] = links

        photo_url = None
        if file is not None:
            photo_url = upload_object(s3, profile_photo_key(file.filename), file.file.read(), file.content_type)
            profile["profilePhotoUrl"] = photo_url

        profile_crud.put_profile(profile)
        logger.info(f"Profile updated: {user_id}")
        return ProfileUpdateOut(message=ProfileMessage.UPDATED, profile_photo_url=photo_url)
    except Exception as e:
        raise internal_error(ProfileMessage.UPDATE_FAILED, e)


@router.get("/profileget", response_model=ProfileOut)
def get_profile(
    user_id: Optional[str] = Query(None, alias="userId", description="ユーザーID"),
    db: Database = Depends(get_db),
):
    """
    プロフィール取得（アカウント経過日数を含む）
    """
    if not user_id:
        raise HTTPException(status_code=400, detail=ProfileMessage.USER_ID_REQUIRED)

    try:
        profile = ProfileCrud(db=db).get_profile_by_user_id(user_id)
        if not profile:
            raise HTTPException(status_code=404, detail=ProfileMessage.NOT_FOUND)

        user = UserCrud(db=db).get_user_by_id(user_id)
        return ProfileOut(
            name=profile.get("name") or "",
            bio=profile.get("bio") or "",
            profile_pic=profile.get("profilePhotoUrl") or "",
            username=profile.get("username") or "",
            social_links=profile.get("socialLinks") or [],
            account_age_days=account_age_days(user.get("registeredAt")) if user else None,
        )
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(ProfileMessage.FETCH_FAILED, e)
