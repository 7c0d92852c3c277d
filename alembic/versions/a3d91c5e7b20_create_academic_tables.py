"""create academic progression tables

Revision ID: a3d91c5e7b20
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a3d91c5e7b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Reference tables owned by the registry and curriculum subsystems
    op.create_table('programs',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('code', sa.String(length=20), nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.Column('credit_hours', sa.Integer(), nullable=True),
    sa.Column('duration_years', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.CheckConstraint('credit_hours > 0'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('code')
    )

    op.create_table('students',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('student_number', sa.String(length=50), nullable=True),
    sa.Column('first_name', sa.String(length=100), nullable=False),
    sa.Column('last_name', sa.String(length=100), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=True),
    sa.Column('program_id', sa.UUID(), nullable=True),
    sa.Column('level', sa.Integer(), nullable=False, server_default='100'),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['program_id'], ['programs.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('student_number')
    )
    op.create_index('idx_students_program', 'students', ['program_id'], unique=False)

    op.create_table('semesters',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('name', sa.String(length=100), nullable=False),
    sa.Column('academic_year', sa.String(length=20), nullable=False),
    sa.Column('semester_number', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('academic_year', 'semester_number', name='uq_semesters_year_number')
    )
    op.create_index('idx_semesters_year_number', 'semesters', ['academic_year', 'semester_number'], unique=False)

    op.create_table('courses',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('code', sa.String(length=20), nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.Column('credit_hours', sa.Integer(), nullable=False),
    sa.Column('level', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.CheckConstraint('credit_hours >= 0'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('code')
    )
    op.create_index('idx_courses_code', 'courses', ['code'], unique=False)

    op.create_table('enrollments',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('student_id', sa.UUID(), nullable=False),
    sa.Column('semester_id', sa.UUID(), nullable=False),
    sa.Column('course_id', sa.UUID(), nullable=False),
    sa.Column('grade', sa.String(length=5), nullable=True),
    sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['semester_id'], ['semesters.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_enrollments_student_semester', 'enrollments', ['student_id', 'semester_id'], unique=False)
    op.create_index('idx_enrollments_student_status', 'enrollments', ['student_id', 'status'], unique=False)

    # Progression tables
    op.create_table('academic_histories',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('student_id', sa.UUID(), nullable=False),
    sa.Column('admission_year', sa.String(length=20), nullable=False),
    sa.Column('admission_semester', sa.Integer(), nullable=False, server_default='1'),
    sa.Column('expected_graduation_year', sa.String(length=20), nullable=True),
    sa.Column('current_level', sa.Integer(), nullable=False, server_default='100'),
    sa.Column('current_semester', sa.Integer(), nullable=False, server_default='1'),
    sa.Column('cumulative_gpa', sa.Float(), nullable=True),
    sa.Column('overall_credits_attempted', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('overall_credits_earned', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('total_semesters_completed', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('current_status', sa.String(length=30), nullable=False, server_default='GOOD_STANDING'),
    sa.Column('has_graduated', sa.Boolean(), nullable=False, server_default='false'),
    sa.Column('graduation_date', sa.Date(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.CheckConstraint('cumulative_gpa >= 0 AND cumulative_gpa <= 4'),
    sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='RESTRICT'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('student_id')
    )

    op.create_table('semester_records',
    sa.Column('id', sa.UUID(), nullable=False),
    sa.Column('student_id', sa.UUID(), nullable=False),
    sa.Column('semester_id', sa.UUID(), nullable=False),
    sa.Column('courses_registered', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('courses_completed', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('courses_failed', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('courses_dropped', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('courses_in_progress', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('credits_attempted', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('credits_earned', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('semester_gpa', sa.Float(), nullable=True),
    sa.Column('total_grade_points', sa.Float(), nullable=False, server_default='0'),
    sa.Column('academic_standing', sa.String(length=30), nullable=False, server_default='GOOD_STANDING'),
    sa.Column('is_on_probation', sa.Boolean(), nullable=False, server_default='false'),
    sa.Column('probation_count', sa.Integer(), nullable=False, server_default='0'),
    sa.Column('is_finalized', sa.Boolean(), nullable=False, server_default='false'),
    sa.Column('finalized_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('finalized_by', sa.UUID(), nullable=True),
    sa.Column('remarks_from_advisor', sa.Text(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.CheckConstraint('semester_gpa >= 0 AND semester_gpa <= 4'),
    sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['semester_id'], ['semesters.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('student_id', 'semester_id', name='uq_semester_records_student_semester')
    )
    op.create_index('idx_semester_records_student_finalized', 'semester_records', ['student_id', 'is_finalized'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_semester_records_student_finalized', table_name='semester_records')
    op.drop_table('semester_records')
    op.drop_table('academic_histories')

    op.drop_index('idx_enrollments_student_status', table_name='enrollments')
    op.drop_index('idx_enrollments_student_semester', table_name='enrollments')
    op.drop_table('enrollments')

    op.drop_index('idx_courses_code', table_name='courses')
    op.drop_table('courses')

    op.drop_index('idx_semesters_year_number', table_name='semesters')
    op.drop_table('semesters')

    op.drop_index('idx_students_program', table_name='students')
    op.drop_table('students')

    op.drop_table('programs')
