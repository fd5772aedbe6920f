"""Reference to a CV file stored in Google Drive."""

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    """Drive file id and the public links returned after upload."""

    file_id: str = Field(..., description="Google Drive file id")
    web_view_link: str = Field(default="", description="Browser link, readable by anyone with it")
    web_content_link: str = Field(default="", description="Direct download link")
