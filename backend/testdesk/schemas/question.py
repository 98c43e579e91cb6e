from uuid import UUID

from pydantic import BaseModel, Field

from testdesk.schemas.common import BaseSchema


class QuestionOptionCreate(BaseModel):
    text: str = Field(min_length=1)
    is_correct: bool = False
    is_active: bool = True
    order_index: int | None = Field(default=None, ge=0)


class QuestionCreate(BaseModel):
    subject_id: UUID
    text: str = Field(min_length=1)
    is_active: bool = True
    options: list[QuestionOptionCreate] = Field(min_length=2)


class QuestionOptionOut(BaseSchema):
    id: UUID
    text: str
    is_correct: bool
    is_active: bool
    order_index: int


class QuestionAdminOut(BaseSchema):
    id: UUID
    subject_id: UUID
    text: str
    is_active: bool
    options: list[QuestionOptionOut]


class SubjectOut(BaseSchema):
    id: UUID
    name: str
    is_active: bool


class QuestionCountOut(BaseModel):
    subject_id: UUID
    count: int
