"""add library and reading sessions

Revision ID: 9c4d2e6f1a07
Revises: 5e1b7c20d8a3
Create Date: 2026-10-01 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9c4d2e6f1a07'
down_revision: Union[str, Sequence[str], None] = '5e1b7c20d8a3'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'user_books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('open_library_key', sa.String(length=500), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('author_name', sa.String(length=300), nullable=False),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('current_page_number', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='to-read'),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('finish_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'open_library_key'),
    )
    op.create_index('ix_user_books_user_id', 'user_books', ['user_id'])

    op.create_table(
        'reading_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_book_id', sa.Integer(), nullable=False),
        sa.Column('pages_read_in_session', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('session_date', sa.DateTime(), nullable=False),
        sa.CheckConstraint('pages_read_in_session > 0', name='ck_reading_sessions_pages_positive'),
        sa.ForeignKeyConstraint(['user_book_id'], ['user_books.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reading_sessions_user_book_id', 'reading_sessions', ['user_book_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_reading_sessions_user_book_id', 'reading_sessions')
    op.drop_table('reading_sessions')
    op.drop_index('ix_user_books_user_id', 'user_books')
    op.drop_table('user_books')
