import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AddWorkRequest(BaseModel):
    open_library_key: str = Field(min_length=1, description="Catalog work key, e.g. /works/OL1W")
    title: str = Field(min_length=1)
    author_name: str = Field(min_length=1)
    image_url: str | None = None


class UserBookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    open_library_key: str
    title: str
    author_name: str
    image_url: str | None
    current_page_number: int
    status: str
    start_date: dt.date | None
    finish_date: dt.date | None
    created_at: dt.datetime
    updated_at: dt.datetime


class AddWorkResponse(BaseModel):
    message: str
    work: UserBookResponse


class ReadingSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_book_id: int
    pages_read_in_session: int
    notes: str | None
    session_date: dt.datetime


class OpenLibraryDetailsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    description: str
    excerpts: str
    number_of_pages: int | str
    isbn_10: str
    isbn_13: str
    subjects: list[str]
    publish_date: str


class AugmentedWorkResponse(UserBookResponse):
    open_library_details: OpenLibraryDetailsResponse
    enriched: bool
    reading_sessions: list[ReadingSessionResponse] = []


class LogSessionRequest(BaseModel):
    # Validated by the progress ledger so that a bad count is reported as InvalidInput
    pages_read: Any = None
    notes: str | None = None


class LogSessionResponse(BaseModel):
    message: str
    session: ReadingSessionResponse
    updated_current_page: int


class PartialFailureResponse(BaseModel):
    error: str = "PartialFailure"
    message: str
    partial: bool = True
    session: ReadingSessionResponse
    expected_current_page: int


class DriftResponse(BaseModel):
    work_id: int
    current_page_number: int
    recomputed_page: int
    drifted: bool


class RepairResponse(BaseModel):
    message: str
    work: UserBookResponse
