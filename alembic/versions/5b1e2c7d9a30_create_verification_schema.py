"""create user, employer_verification and notification tables

Revision ID: 5b1e2c7d9a30
Revises:
Create Date: 2026-10-19 10:12:41.307215

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '5b1e2c7d9a30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum columns store member names, matching how SQLModel maps str Enums
user_role_enum = sa.Enum('JOBSEEKER', 'EMPLOYER', 'ADMIN', name='userrole')
user_verification_status_enum = sa.Enum(
    'UNDER_REVIEW', 'PASSED', 'FAILED', name='userverificationstatus'
)
verification_status_enum = sa.Enum(
    'PENDING', 'APPROVED', 'REJECTED', name='verificationstatus'
)
notification_severity_enum = sa.Enum(
    'INFO', 'SUCCESS', 'WARNING', 'ERROR', name='notificationseverity'
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'user',
        sa.Column('id_user', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('role', user_role_enum, nullable=False),
        sa.Column('hashed_password', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('verification_status', user_verification_status_enum, nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('date_creation', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id_user'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)
    op.create_index(op.f('ix_user_role'), 'user', ['role'], unique=False)

    op.create_table(
        'employer_verification',
        sa.Column('id_verification', sa.Integer(), nullable=False),
        sa.Column('id_employer', sa.Integer(), nullable=False),
        sa.Column('status', verification_status_enum, nullable=False),
        sa.Column('note', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=False),
        sa.Column('storage_key', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('original_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('mime_type', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('size_bytes', sa.Integer(), nullable=False),
        sa.Column('document_url', sqlmodel.sql.sqltypes.AutoString(length=2048), nullable=False),
        sa.Column('id_reviewer', sa.Integer(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['id_employer'], ['user.id_user']),
        sa.ForeignKeyConstraint(['id_reviewer'], ['user.id_user']),
        sa.PrimaryKeyConstraint('id_verification'),
    )
    op.create_index(
        op.f('ix_employer_verification_id_employer'),
        'employer_verification', ['id_employer'], unique=True,
    )
    op.create_index(
        op.f('ix_employer_verification_status'),
        'employer_verification', ['status'], unique=False,
    )
    op.create_index(
        op.f('ix_employer_verification_updated_at'),
        'employer_verification', ['updated_at'], unique=False,
    )

    op.create_table(
        'notification',
        sa.Column('id_notification', sa.Integer(), nullable=False),
        sa.Column('id_recipient', sa.Integer(), nullable=False),
        sa.Column('severity', notification_severity_enum, nullable=False),
        sa.Column('message', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ['id_recipient'], ['user.id_user'],
            name='notification_id_recipient_fkey', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id_notification'),
    )
    op.create_index(op.f('ix_notification_id_recipient'), 'notification', ['id_recipient'], unique=False)
    op.create_index(op.f('ix_notification_severity'), 'notification', ['severity'], unique=False)
    op.create_index(op.f('ix_notification_is_read'), 'notification', ['is_read'], unique=False)
    op.create_index(op.f('ix_notification_created_at'), 'notification', ['created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_notification_created_at'), table_name='notification')
    op.drop_index(op.f('ix_notification_is_read'), table_name='notification')
    op.drop_index(op.f('ix_notification_severity'), table_name='notification')
    op.drop_index(op.f('ix_notification_id_recipient'), table_name='notification')
    op.drop_table('notification')

    op.drop_index(op.f('ix_employer_verification_updated_at'), table_name='employer_verification')
    op.drop_index(op.f('ix_employer_verification_status'), table_name='employer_verification')
    op.drop_index(op.f('ix_employer_verification_id_employer'), table_name='employer_verification')
    op.drop_table('employer_verification')

    op.drop_index(op.f('ix_user_role'), table_name='user')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')

    bind = op.get_bind()
    for enum_type in (
        notification_severity_enum,
        verification_status_enum,
        user_verification_status_enum,
        user_role_enum,
    ):
        enum_type.drop(bind, checkfirst=True)
