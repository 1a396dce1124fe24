from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from jobboard.auth import Actor
from jobboard.database import unit_of_work
from jobboard.errors import AuthenticationError, NotFoundError
from jobboard.models.bookmark import Bookmark
from jobboard.models.enums import ApprovalStatus
from jobboard.models.job import Job
from jobboard.models.user import User


logger = logging.getLogger(__name__)


def _approved_job_exists(db: Session, job_id: int) -> bool:
    return (
        db.query(Job.id)
        .filter(Job.id == job_id, Job.status == ApprovalStatus.APPROVED.value)
        .first()
        is not None
    )


def _find_bookmark(db: Session, user_id: int, job_id: int) -> Bookmark | None:
    return db.query(Bookmark).filter(Bookmark.user_id == user_id, Bookmark.job_id == job_id).first()


class BookmarkService:
    def toggle(self, db: Session, job_id: int, actor: Actor) -> bool:
        """Flip the caller's bookmark on a job and return whether it is now bookmarked."""
        if not _approved_job_exists(db, job_id):
            raise NotFoundError("Job not found")

        existing = _find_bookmark(db, actor.user_id, job_id)
        if existing:
            with unit_of_work(db):
                db.delete(existing)
            return False

        try:
            with unit_of_work(db):
                db.add(Bookmark(user_id=actor.user_id, job_id=job_id))
        except IntegrityError:
            if _find_bookmark(db, actor.user_id, job_id) is not None:
                logger.info("Bookmark for user %s on job %s was created concurrently", actor.user_id, job_id)
                return True
            if not db.query(User.id).filter(User.id == actor.user_id).first():
                logger.warning("Bookmark rejected: user %s no longer exists", actor.user_id)
                raise AuthenticationError() from None
            if not _approved_job_exists(db, job_id):
                raise NotFoundError("Job not found") from None
            raise
        return True

    def list_jobs(self, db: Session, actor: Actor) -> list[Job]:
        bookmarks = (
            db.query(Bookmark)
            .join(Job, Job.id == Bookmark.job_id)
            .options(
                selectinload(Bookmark.job).selectinload(Job.company),
                selectinload(Bookmark.job).selectinload(Job.qualifications),
                selectinload(Bookmark.job).selectinload(Job.responsibilities),
                selectinload(Bookmark.job).selectinload(Job.required_skills),
            )
            .filter(Bookmark.user_id == actor.user_id, Job.status == ApprovalStatus.APPROVED.value)
            .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
            .all()
        )
        return [bookmark.job for bookmark in bookmarks]

    def remove(self, db: Session, job_id: int, actor: Actor) -> None:
        bookmark = _find_bookmark(db, actor.user_id, job_id)
        if not bookmark:
            raise NotFoundError("Bookmark not found")
        with unit_of_work(db):
            db.delete(bookmark)
