"""create_job_board_tables

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-18 10:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'companies',
        sa.Column('handle', sa.String(25), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False, unique=True),
        sa.Column('num_employees', sa.Integer(), sa.CheckConstraint('num_employees >= 0')),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('logo_url', sa.Text()),
    )
    op.create_index('ix_companies_handle', 'companies', ['handle'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('salary', sa.Integer(), sa.CheckConstraint('salary >= 0')),
        sa.Column('equity', sa.Numeric(), sa.CheckConstraint('equity <= 1.0')),
        sa.Column(
            'company_handle',
            sa.Text(),
            sa.ForeignKey('companies.handle', ondelete='CASCADE'),
            nullable=False,
        ),
    )
    op.create_index('ix_jobs_id', 'jobs', ['id'])
    op.create_index('ix_jobs_title', 'jobs', ['title'])

    op.create_table(
        'users',
        sa.Column('username', sa.String(25), primary_key=True),
        sa.Column('password', sa.Text(), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), sa.CheckConstraint("email LIKE '%_@%'"), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_users_username', 'users', ['username'])

    op.create_table(
        'applications',
        sa.Column(
            'username',
            sa.String(25),
            sa.ForeignKey('users.username', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column(
            'job_id',
            sa.Integer(),
            sa.ForeignKey('jobs.id', ondelete='CASCADE'),
            primary_key=True,
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('applications')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    op.drop_index('ix_jobs_title', table_name='jobs')
    op.drop_index('ix_jobs_id', table_name='jobs')
    op.drop_table('jobs')
    op.drop_index('ix_companies_handle', table_name='companies')
    op.drop_table('companies')
