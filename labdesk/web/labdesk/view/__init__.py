"""View models for the labdesk web application."""

__all__ = [
    # Auth views
    "ActorResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "TokenResponse",
    # Assignment views
    "AssignmentCreateRequest",
    "AssignmentDeleteResponse",
    "AssignmentDetailResponse",
    "AssignmentListResponse",
    "AssignmentResponse",
    "AssignmentUpdateRequest",
    "DeadlineListResponse",
    "GradeRequest",
    "SubmissionResponse",
    "SubmitRequest",
    "SubmitResponse",
    # Roster and report views
    "ReportResponse",
    "StudentListResponse",
    # Administration views
    "GroupCreateRequest",
    "GroupListResponse",
    "UserCreateRequest",
    "UserListResponse",
    # Profile views
    "PasswordChangeRequest",
    "ProfileUpdateRequest",
]

from .admin import GroupCreateRequest, GroupListResponse, UserCreateRequest, UserListResponse
from .assignment import AssignmentCreateRequest, AssignmentDeleteResponse, AssignmentDetailResponse, \
    AssignmentListResponse, AssignmentResponse, AssignmentUpdateRequest, DeadlineListResponse, GradeRequest, \
    SubmissionResponse, SubmitRequest, SubmitResponse
from .auth import ActorResponse, LoginRequest, LoginResponse, MessageResponse, TokenResponse
from .profile import PasswordChangeRequest, ProfileUpdateRequest
from .report import ReportResponse
from .student import StudentListResponse
