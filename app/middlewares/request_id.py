# app/middlewares/request_id.py
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from app.core.logger import reset_correlation_id, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"

class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # ヘッダーにリクエストIDがなければ採番する
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = set_correlation_id(request_id)
        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
