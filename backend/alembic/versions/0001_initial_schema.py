"""Initial schema

Revision ID: 0001
Revises:
Create Date: 2025-07-01 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

window_type = sa.Enum('proposal', 'application', 'submission', 'assessment', 'grade_release', name='windowtype')
project_type = sa.Enum('IDP', 'UROP', 'CAPSTONE', name='projecttype')
assessment_type = sa.Enum('cla1', 'cla2', 'cla3', 'external', name='assessmenttype')
submission_type = sa.Enum('solo', 'group', name='submissiontype')


def _component_columns(prefix):
    return [
        sa.Column(f'{prefix}_conduct', sa.Float(), nullable=False, server_default='0'),
        sa.Column(f'{prefix}_comments', sa.Text(), nullable=True),
        sa.Column(f'{prefix}_conducted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # Create windows table
    op.create_table('windows',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('window_type', window_type, nullable=False),
        sa.Column('project_type', project_type, nullable=False),
        sa.Column('assessment_type', assessment_type, nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint('start_date <= end_date', name='ck_window_bounds'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_windows_lookup', 'windows', ['window_type', 'project_type'])

    # Create submissions table
    op.create_table('submissions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('submission_type', submission_type, nullable=False),
        sa.Column('project_type', project_type, nullable=False),
        sa.Column('group_id', sa.String(length=36), nullable=True),
        sa.Column('term', sa.String(length=20), nullable=False),
        sa.Column('assessment_type', assessment_type, nullable=True),
        sa.Column('github_url', sa.String(length=500), nullable=True),
        sa.Column('report_url', sa.String(length=500), nullable=True),
        sa.Column('presentation_url', sa.String(length=500), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_submissions_group_id', 'submissions', ['group_id'])
    op.create_index('ix_submissions_term', 'submissions', ['term'])

    # Create submission_members table
    op.create_table('submission_members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('submission_id', sa.String(length=36), nullable=False),
        sa.Column('student_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['submission_id'], ['submissions.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('submission_id', 'student_id', name='uq_submission_student')
    )
    op.create_index('ix_submission_members_student_id', 'submission_members', ['student_id'])

    # Create student_evaluations table
    op.create_table('student_evaluations',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('student_id', sa.String(length=36), nullable=False),
        sa.Column('term', sa.String(length=20), nullable=False),
        sa.Column('project_type', project_type, nullable=False),
        sa.Column('group_id', sa.String(length=36), nullable=True),
        *_component_columns('cla1'),
        *_component_columns('cla2'),
        *_component_columns('cla3'),
        *_component_columns('external'),
        sa.Column('total_internal', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_external', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total', sa.Float(), nullable=False, server_default='0'),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('published_by', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'term', name='uq_student_term')
    )
    op.create_index('ix_student_evaluations_student_id', 'student_evaluations', ['student_id'])
    op.create_index('ix_student_evaluations_project_type', 'student_evaluations', ['project_type'])
    op.create_index('ix_student_evaluations_group_id', 'student_evaluations', ['group_id'])
    op.create_index('ix_student_evaluations_is_published', 'student_evaluations', ['is_published'])


def downgrade() -> None:
    op.drop_table('student_evaluations')
    op.drop_table('submission_members')
    op.drop_table('submissions')
    op.drop_table('windows')

    # Enum types only exist as named types on PostgreSQL
    bind = op.get_bind()
    for enum_type in (window_type, project_type, assessment_type, submission_type):
        enum_type.drop(bind, checkfirst=True)
