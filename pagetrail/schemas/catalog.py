from pydantic import BaseModel, ConfigDict


class BookSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    author_name: str
    first_publish_year: int | str
    open_library_key: str
    image_url: str


class AuthorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    bio: str
    birth_date: str
    death_date: str


class BookDetailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    open_library_key: str
    title: str
    author_name: str
    image_url: str
    description: str
    subjects: list[str]
    first_publish_date: str
    covers: list[str]
    authors: list[AuthorResponse]
