from datetime import UTC, date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pagetrail.database import Base

STATUSES = ("to-read", "reading", "finished")


class UserBook(Base):
    __tablename__ = "user_books"
    __table_args__ = (UniqueConstraint("user_id", "open_library_key"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    open_library_key: Mapped[str] = mapped_column(String(500), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author_name: Mapped[str] = mapped_column(String(300), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(500))
    current_page_number: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="to-read", nullable=False)
    start_date: Mapped[date | None] = mapped_column(Date)
    finish_date: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    sessions: Mapped[list["ReadingSession"]] = relationship(
        back_populates="user_book", cascade="all, delete-orphan", order_by="ReadingSession.session_date.desc()"
    )


class ReadingSession(Base):
    __tablename__ = "reading_sessions"
    __table_args__ = (CheckConstraint("pages_read_in_session > 0", name="ck_reading_sessions_pages_positive"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_book_id: Mapped[int] = mapped_column(ForeignKey("user_books.id", ondelete="CASCADE"), index=True)
    pages_read_in_session: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    session_date: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    user_book: Mapped["UserBook"] = relationship(back_populates="sessions")
