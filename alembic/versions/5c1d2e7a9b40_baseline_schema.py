"""baseline_schema

Revision ID: 5c1d2e7a9b40
Revises:
Create Date: 2026-10-19 10:12:41.118204

Creates users, tags, candidates, candidate_tags, reviews and request_logs.
Tables that already exist are left untouched.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5c1d2e7a9b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('username', sa.String(length=150), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    if not table_exists('tags'):
        op.create_table('tags',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_tags_id'), 'tags', ['id'], unique=False)
        op.create_index(op.f('ix_tags_name'), 'tags', ['name'], unique=True)

    if not table_exists('candidates'):
        op.create_table('candidates',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('uuid', sa.String(), nullable=False),
            sa.Column('sender', sa.String(), nullable=False),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('full_name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('github_link', sa.String(), nullable=True),
            sa.Column('raw_answers', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_candidate_status_created', 'candidates', ['status', 'created_at'], unique=False)
        op.create_index(op.f('ix_candidates_created_at'), 'candidates', ['created_at'], unique=False)
        op.create_index(op.f('ix_candidates_id'), 'candidates', ['id'], unique=False)
        op.create_index(op.f('ix_candidates_status'), 'candidates', ['status'], unique=False)
        op.create_index(op.f('ix_candidates_uuid'), 'candidates', ['uuid'], unique=False)

    if not table_exists('candidate_tags'):
        op.create_table('candidate_tags',
            sa.Column('candidate_id', sa.Integer(), nullable=False),
            sa.Column('tag_id', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['candidate_id'], ['candidates.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('candidate_id', 'tag_id')
        )

    if not table_exists('reviews'):
        op.create_table('reviews',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('phase', sa.Integer(), nullable=False),
            sa.Column('candidate_id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('criteria_ratings', sa.JSON(), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('final_score', sa.Float(), nullable=True),
            sa.Column('hire_decision', sa.Boolean(), nullable=True),
            sa.Column('final_comment', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.CheckConstraint('phase IN (1, 2)', name='ck_review_phase'),
            sa.ForeignKeyConstraint(['candidate_id'], ['candidates.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('candidate_id', 'phase', name='uq_review_candidate_phase')
        )
        op.create_index(op.f('ix_reviews_candidate_id'), 'reviews', ['candidate_id'], unique=False)
        op.create_index(op.f('ix_reviews_id'), 'reviews', ['id'], unique=False)
        op.create_index(op.f('ix_reviews_user_id'), 'reviews', ['user_id'], unique=False)

    if not table_exists('request_logs'):
        op.create_table('request_logs',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('method', sa.String(length=10), nullable=False),
            sa.Column('path', sa.String(), nullable=False),
            sa.Column('status_code', sa.Integer(), nullable=False),
            sa.Column('latency_ms', sa.Integer(), nullable=False),
            sa.Column('ip_address', sa.String(), nullable=True),
            sa.Column('user_id', sa.Integer(), nullable=True),
            sa.Column('api_key_used', sa.Boolean(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_request_log_path_created', 'request_logs', ['path', 'created_at'], unique=False)
        op.create_index(op.f('ix_request_logs_created_at'), 'request_logs', ['created_at'], unique=False)
        op.create_index(op.f('ix_request_logs_id'), 'request_logs', ['id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_request_logs_id'), table_name='request_logs')
    op.drop_index(op.f('ix_request_logs_created_at'), table_name='request_logs')
    op.drop_index('idx_request_log_path_created', table_name='request_logs')
    op.drop_table('request_logs')

    op.drop_index(op.f('ix_reviews_user_id'), table_name='reviews')
    op.drop_index(op.f('ix_reviews_id'), table_name='reviews')
    op.drop_index(op.f('ix_reviews_candidate_id'), table_name='reviews')
    op.drop_table('reviews')

    op.drop_table('candidate_tags')

    op.drop_index(op.f('ix_candidates_uuid'), table_name='candidates')
    op.drop_index(op.f('ix_candidates_status'), table_name='candidates')
    op.drop_index(op.f('ix_candidates_id'), table_name='candidates')
    op.drop_index(op.f('ix_candidates_created_at'), table_name='candidates')
    op.drop_index('idx_candidate_status_created', table_name='candidates')
    op.drop_table('candidates')

    op.drop_index(op.f('ix_tags_name'), table_name='tags')
    op.drop_index(op.f('ix_tags_id'), table_name='tags')
    op.drop_table('tags')

    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
