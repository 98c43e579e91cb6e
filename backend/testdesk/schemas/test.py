from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from testdesk.schemas.common import BaseSchema, PaginationMeta


class AssignTestRequest(BaseModel):
    user_id: UUID
    subject_id: UUID


class ReassignTestRequest(BaseModel):
    user_id: UUID
    subject_id: UUID


class AnswerIn(BaseModel):
    question_id: UUID
    option_id: UUID


class SubmitTestRequest(BaseModel):
    subject_id: UUID
    answers: list[AnswerIn] = Field(default_factory=list)


class OptionOut(BaseModel):
    id: UUID
    text: str


class QuestionOut(BaseModel):
    id: UUID
    text: str
    options: list[OptionOut]


class StartTestOut(BaseModel):
    assignment_id: UUID
    subject_id: UUID
    subject_name: str
    questions: list[QuestionOut]


class AssignmentOut(BaseSchema):
    id: UUID
    user_id: UUID
    subject_id: UUID
    state: str
    is_active: bool
    is_start: bool
    is_finish: bool
    started_at: datetime | None
    finished_at: datetime | None
    score: str | None
    percentage: int | None
    reassign_count: int
    supersedes_id: UUID | None
    created_at: datetime
    updated_at: datetime


class SubmitTestOut(BaseModel):
    assignment_id: UUID
    score: str
    percentage: int


class CandidateSummary(BaseSchema):
    id: UUID
    email: str
    full_name: str
    mobile: str | None
    position_name: str | None = None


class PendingReassignmentOut(BaseModel):
    assignment_id: UUID
    subject_id: UUID
    subject_name: str
    reassign_count: int
    started_at: datetime | None
    updated_at: datetime
    user: CandidateSummary


class PendingReassignmentListResponse(BaseModel):
    items: list[PendingReassignmentOut]
    meta: PaginationMeta


class AssignmentChainResponse(BaseModel):
    items: list[AssignmentOut]
