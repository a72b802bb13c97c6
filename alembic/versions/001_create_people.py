"""Create people table

Revision ID: 001_create_people
Revises:
Create Date: 2025-01-15 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision = '001_create_people'
down_revision = None
branch_labels = None
depends_on = None

GEN_RANDOM_UUID = sa.text('gen_random_uuid()')
NOW = sa.text('now()')


def upgrade():
    """Create people table."""
    op.create_table(
        'people',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=GEN_RANDOM_UUID, nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=NOW, nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(), server_default=NOW, nullable=False),
        sa.UniqueConstraint('email', name='people_email_unique'),
    )

    # List queries page by insertion order
    op.create_index('ix_people_created_at_id', 'people', ['created_at', 'id'])


def downgrade():
    """Drop people table."""
    op.drop_index('ix_people_created_at_id')
    op.drop_table('people')
