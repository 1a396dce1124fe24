from __future__ import annotations

import enum


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    JOB_SEEKER = "JOB_SEEKER"
    COMPANY_ADMIN = "COMPANY_ADMIN"


class ApprovalStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class JobSite(str, enum.Enum):
    FULL_TIME = "Full_time"
    PART_TIME = "Part_time"
    FREELANCE = "Freelance"


class ApplicationStatus(str, enum.Enum):
    PENDING = "Pending"
    REVIEWED = "Reviewed"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
