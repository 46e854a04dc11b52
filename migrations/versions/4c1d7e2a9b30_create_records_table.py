"""create_records_table

Revision ID: 4c1d7e2a9b30
Revises:
Create Date: 2026-10-19 10:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d7e2a9b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the byte-keyed records table."""
    op.create_table('records',
        sa.Column('address', sa.LargeBinary(length=32), nullable=False),
        sa.Column('namespace', sa.String(length=16), nullable=False),
        sa.Column('data', sa.LargeBinary(), nullable=False),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('deposit', sa.BigInteger(), nullable=False),
        sa.Column('payer', sa.LargeBinary(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('size = length(data)', name='ck_records_size'),
        sa.CheckConstraint('deposit >= 0', name='ck_records_deposit'),
        sa.PrimaryKeyConstraint('address'),
    )
    op.create_index('ix_records_namespace', 'records', ['namespace'], unique=False)


def downgrade() -> None:
    """Drop the records table."""
    op.drop_index('ix_records_namespace', table_name='records')
    op.drop_table('records')
