from testdesk.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    RefreshRequest,
    TokenResponse,
    UserSummary,
)
from testdesk.schemas.question import QuestionAdminOut, QuestionCountOut, QuestionCreate, SubjectOut
from testdesk.schemas.test import (
    AssignmentChainResponse,
    AssignmentOut,
    AssignTestRequest,
    PendingReassignmentListResponse,
    ReassignTestRequest,
    StartTestOut,
    SubmitTestOut,
    SubmitTestRequest,
)

__all__ = [
    'AssignTestRequest',
    'AssignmentChainResponse',
    'AssignmentOut',
    'LoginRequest',
    'LoginResponse',
    'LogoutRequest',
    'PendingReassignmentListResponse',
    'QuestionAdminOut',
    'QuestionCountOut',
    'QuestionCreate',
    'ReassignTestRequest',
    'RefreshRequest',
    'StartTestOut',
    'SubjectOut',
    'SubmitTestOut',
    'SubmitTestRequest',
    'TokenResponse',
    'UserSummary',
]
