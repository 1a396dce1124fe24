from __future__ import annotations

from pydantic import BaseModel


class BookmarkToggleRequest(BaseModel):
    job_id: int


class BookmarkToggleResponse(BaseModel):
    bookmarked: bool
