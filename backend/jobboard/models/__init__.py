from jobboard.models.application import Application
from jobboard.models.bookmark import Bookmark
from jobboard.models.company import Company
from jobboard.models.enums import ApplicationStatus, ApprovalStatus, JobSite, Role
from jobboard.models.job import Job, Qualification, RequiredSkill, Responsibility
from jobboard.models.user import OAuthAccount, User

__all__ = [
    "User",
    "OAuthAccount",
    "Company",
    "Job",
    "Qualification",
    "Responsibility",
    "RequiredSkill",
    "Application",
    "Bookmark",
    "Role",
    "ApprovalStatus",
    "JobSite",
    "ApplicationStatus",
]
