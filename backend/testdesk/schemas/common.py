from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PaginationMeta(BaseModel):
    page: int
    page_size: int
    total: int


class ErrorOut(BaseModel):
    """Body of a refused lifecycle operation."""

    detail: str
    error: str


def error_responses(*status_codes: int) -> dict[int, dict]:
    return {code: {'model': ErrorOut} for code in status_codes}
