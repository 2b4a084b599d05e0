from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from app.api.commons.utils import internal_error
from app.constants.enums import FileType
from app.constants.messages import MediaMessage
from app.core.logger import Logger
from app.core.security import now_iso
from app.crud.media_crud import MediaCrud
from app.db.base import Database, get_db
from app.schemas.media import MediaOut, UploadOut
from app.services.s3.client import get_s3, upload_object
from app.services.s3.keygen import media_key

logger = Logger.get_logger()
router = APIRouter()


@router.post("/upload", response_model=UploadOut)
def upload_media(
    user_id: Optional[str] = Form(None, alias="userId", description="ユーザーID"),
    category: Optional[str] = Form(None, description="カテゴリ"),
    description: Optional[str] = Form(None, description="説明"),
    is_public: Optional[str] = Form(None, alias="isPublic", description="公開フラグ（'true'で公開）"),
    file: Optional[UploadFile] = File(None, description="メインファイル"),
    docfile: Optional[UploadFile] = File(None, description="添付ファイル"),
    db: Database = Depends(get_db),
    s3=Depends(get_s3),
):
    """
    メディアをS3にアップロードしてメタデータを保存

    Content-Typeがimage/*の場合は画像、それ以外は動画として扱う
    """
    if not user_id:
        raise HTTPException(status_code=400, detail=MediaMessage.USER_ID_REQUIRED)
    if file is None:
        raise HTTPException(status_code=400, detail=MediaMessage.FILE_REQUIRED)

    try:
        file_id, key = media_key(file.filename)
        file_type = FileType.from_content_type(file.content_type)
        file_url = upload_object(s3, key, file.file.read(), file.content_type)

        media = {
            "fileId": file_id,
            "userId": user_id,
            "isPublic": (is_public or "").lower() == "true",
            "fileName": file.filename or key,
            "fileUrl": file_url,
            "fileType": file_type,
            "viewCount": 0,
            "createdAt": now_iso(),
        }
        if category:
            media["category"] = category
        if description:
            media["description"] = description

        doc_file_url = None
        if docfile is not None:
            _, doc_key = media_key(docfile.filename)
            doc_file_url = upload_object(s3, doc_key, docfile.file.read(), docfile.content_type)
            media["docFileUrl"] = doc_file_url
            media["docFileName"] = doc_key

        MediaCrud(db=db).create_media(media)
        logger.info(f"Media uploaded: {file_id} ({file_type}) by {user_id}")

        return UploadOut(
            message=MediaMessage.UPLOADED,
            file_id=file_id,
            file_url=file_url,
            file_type=file_type,
            doc_file_url=doc_file_url,
        )
    except Exception as e:
        raise internal_error(MediaMessage.UPLOAD_FAILED, e)


@router.get("/reels", response_model=List[MediaOut])
def get_reels(
    category: Optional[str] = Query(None, description="カテゴリ（Allは絞り込みなし）"),
    db: Database = Depends(get_db),
):
    """動画一覧を取得"""
    try:
        return MediaCrud(db=db).get_media_by_file_type(FileType.VIDEO, category)
    except Exception as e:
        raise internal_error(MediaMessage.FETCH_VIDEOS_FAILED, e)


@router.get("/memes", response_model=List[MediaOut])
def get_memes(
    category: Optional[str] = Query(None, description="カテゴリ（Allは絞り込みなし）"),
    db: Database = Depends(get_db),
):
    """画像一覧を取得"""
    try:
        return MediaCrud(db=db).get_media_by_file_type(FileType.IMAGE, category)
    except Exception as e:
        raise internal_error(MediaMessage.FETCH_MEMES_FAILED, e)


@router.get("/getUserMedia", response_model=List[MediaOut])
def get_user_media(
    user_id: Optional[str] = Query(None, alias="userId", description="ユーザーID"),
    category: Optional[str] = Query(None, description="カテゴリ（Allは絞り込みなし）"),
    db: Database = Depends(get_db),
):
    """ユーザーのメディア一覧を取得（該当なしは空配列）"""
    if not user_id:
        raise HTTPException(status_code=400, detail=MediaMessage.USER_ID_REQUIRED)
    try:
        return MediaCrud(db=db).get_media_by_user_id(user_id, category)
    except Exception as e:
        raise internal_error(MediaMessage.FETCH_USER_MEDIA_FAILED, e)
