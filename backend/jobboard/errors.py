from __future__ import annotations


class JobBoardError(Exception):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AuthenticationError(JobBoardError):
    status_code = 401
    default_detail = "Unauthorized"


class AuthorizationError(JobBoardError):
    status_code = 403
    default_detail = "Forbidden"


class ValidationError(JobBoardError):
    status_code = 400
    default_detail = "Invalid request"


class NotFoundError(JobBoardError):
    status_code = 404
    default_detail = "Not found"


class ConflictError(JobBoardError):
    status_code = 409
    default_detail = "Conflict"


class DependencyError(JobBoardError):
    """A database or collaborator failure; the public detail stays generic."""

    status_code = 500


class BlobStoreError(DependencyError):
    default_detail = "Failed to upload file"
