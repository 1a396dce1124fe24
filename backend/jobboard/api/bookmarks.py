from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from jobboard.auth import Actor, get_current_actor
from jobboard.database import get_db
from jobboard.schemas.bookmark import BookmarkToggleRequest, BookmarkToggleResponse
from jobboard.schemas.job import JobOut
from jobboard.services.bookmarks import BookmarkService
from jobboard.services.jobs import jobs_to_out


router = APIRouter()
bookmarks = BookmarkService()


@router.post("", response_model=BookmarkToggleResponse)
def toggle_bookmark(
    payload: BookmarkToggleRequest,
    response: Response,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> BookmarkToggleResponse:
    bookmarked = bookmarks.toggle(db, payload.job_id, actor)
    response.status_code = 201 if bookmarked else 200
    return BookmarkToggleResponse(bookmarked=bookmarked)


@router.get("", response_model=list[JobOut])
def list_bookmarks(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)) -> list[JobOut]:
    return jobs_to_out(db, bookmarks.list_jobs(db, actor))


@router.delete("/{job_id}")
def remove_bookmark(
    job_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> dict[str, bool]:
    bookmarks.remove(db, job_id, actor)
    return {"success": True}
