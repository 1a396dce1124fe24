from jobboard.schemas.application import (
    ApplicantSummaryOut,
    ApplicationCheckOut,
    ApplicationCreate,
    ApplicationCreated,
    ApplicationOut,
    ApplicationStatusUpdate,
    AppliedJobOut,
    Experience,
)
from jobboard.schemas.auth import (
    AdminCreateRequest,
    AuthResponse,
    LoginRequest,
    OAuthLoginRequest,
    ProfileUpdate,
    SignupRequest,
    UserOut,
)
from jobboard.schemas.bookmark import BookmarkToggleRequest, BookmarkToggleResponse
from jobboard.schemas.company import CompanyOut, CompanyRegisterRequest, CompanyRegisterResponse, CompanyStatusUpdate
from jobboard.schemas.job import CompanyJobsOut, JobCreate, JobOut, JobStatusUpdate, JobUpdate
from jobboard.schemas.upload import UploadResponse

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "OAuthLoginRequest",
    "AdminCreateRequest",
    "AuthResponse",
    "UserOut",
    "ProfileUpdate",
    "CompanyRegisterRequest",
    "CompanyRegisterResponse",
    "CompanyStatusUpdate",
    "CompanyOut",
    "JobCreate",
    "JobUpdate",
    "JobStatusUpdate",
    "JobOut",
    "CompanyJobsOut",
    "Experience",
    "ApplicationCreate",
    "ApplicationCreated",
    "ApplicationStatusUpdate",
    "ApplicationOut",
    "AppliedJobOut",
    "ApplicantSummaryOut",
    "ApplicationCheckOut",
    "BookmarkToggleRequest",
    "BookmarkToggleResponse",
    "UploadResponse",
]
