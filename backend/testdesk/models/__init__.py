from testdesk.models.assignment import Assignment, AssignmentAnswer
from testdesk.models.audit import AuditLog
from testdesk.models.position import Position
from testdesk.models.question_bank import Question, QuestionOption, Subject
from testdesk.models.rbac import Role, User, UserRole
from testdesk.models.token import RefreshToken

__all__ = [
    'Assignment',
    'AssignmentAnswer',
    'AuditLog',
    'Position',
    'Question',
    'QuestionOption',
    'RefreshToken',
    'Role',
    'Subject',
    'User',
    'UserRole',
]
