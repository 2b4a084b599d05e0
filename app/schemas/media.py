from typing import Optional
from pydantic import Field
from app.schemas.common import CamelModel

class MediaOut(CamelModel):
    file_id: str
    user_id: str
    category: Optional[str] = None
    description: Optional[str] = None
    is_public: bool = False
    file_name: Optional[str] = None
    file_url: str
    file_type: str
    doc_file_url: Optional[str] = None
    doc_file_name: Optional[str] = None
    view_count: int = Field(0, ge=0)
    created_at: Optional[str] = None

class UploadOut(CamelModel):
    message: str
    file_id: str
    file_url: str
    file_type: str
    doc_file_url: Optional[str] = None
