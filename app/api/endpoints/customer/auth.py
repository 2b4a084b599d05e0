from fastapi import APIRouter, Depends, HTTPException, status
from app.api.commons.utils import internal_error
from app.constants.messages import AuthMessage
from app.constants.number import PasswordLimit
from app.core.logger import Logger
from app.core.security import verify_password
from app.crud.user_crud import UserCrud
from app.db.base import Database, get_db
from app.schemas.auth import RegisterIn, RegisterOut, SigninIn, SigninOut

logger = Logger.get_logger()
router = APIRouter()


@router.post("/register", response_model=RegisterOut)
def register_user(payload: RegisterIn, db: Database = Depends(get_db)):
    """
    ユーザー登録

    Args:
        payload (RegisterIn): ユーザー名・パスワード・メールアドレス（任意）
        db (Database): DynamoDBテーブル

    Raises:
        HTTPException: 必須項目が未指定、パスワードが72バイト超、ユーザー名/メールアドレスが登録済みの場合

    Returns:
        RegisterOut: 登録したユーザー
    """
    username = (payload.username or "").strip()
    if not username or not payload.password:
        raise HTTPException(status_code=400, detail=AuthMessage.REQUIRED_FIELDS)
    if len(payload.password.encode("utf-8")) > PasswordLimit.MAX_BYTES:
        raise HTTPException(status_code=400, detail=AuthMessage.PASSWORD_TOO_LONG)

    try:
        user_crud = UserCrud(db=db)
        if payload.email and user_crud.get_user_by_email(payload.email):
            raise HTTPException(status_code=400, detail=AuthMessage.EMAIL_TAKEN)
        if user_crud.get_user_by_username(username):
            raise HTTPException(status_code=400, detail=AuthMessage.USERNAME_TAKEN)

        user = user_crud.create_user(username, payload.password, payload.email)
        logger.info(f"User registered: {user['userId']}")
        return RegisterOut(
            message=AuthMessage.REGISTERED,
            user_id=user["userId"],
            username=user["username"],
            registered_at=user["registeredAt"],
        )
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(AuthMessage.REGISTER_FAILED, e)


@router.post("/signin", response_model=SigninOut)
def signin(payload: SigninIn, db: Database = Depends(get_db)):
    """
    サインイン（ユーザー名またはメールアドレス）

    Raises:
        HTTPException: ユーザーが存在しない場合は404、パスワード不一致は401
    """
    if not payload.identifier or not payload.password:
        raise HTTPException(status_code=400, detail=AuthMessage.SIGNIN_REQUIRED_FIELDS)

    try:
        user = UserCrud(db=db).get_user_by_identifier(payload.identifier)
        if not user:
            raise HTTPException(status_code=404, detail=AuthMessage.USER_NOT_FOUND)
        if not verify_password(payload.password, user.get("passwordHash")):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail=AuthMessage.INVALID_CREDENTIALS
            )
        return SigninOut(
            message=AuthMessage.LOGIN_SUCCESS,
            user_id=user["userId"],
            username=user["username"],
            email=user.get("email"),
        )
    except HTTPException:
        raise
    except Exception as e:
        raise internal_error(AuthMessage.SIGNIN_FAILED, e)
