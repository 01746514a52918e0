"""create users, courses, enrollments, payments and syllabus progress tables

Revision ID: 3f1c2a7d9b10
Revises:
Create Date: 2026-10-19 09:12:44.218310

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a7d9b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=100), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('date_created', sa.DateTime(), server_default=sa.func.now(), nullable=False)
    )
    op.create_table(
        'courses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False)
    )
    op.create_table(
        'course_tutors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('course_id', sa.Integer(), sa.ForeignKey('courses.id'), nullable=False),
        sa.Column('tutor_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('course_id', 'tutor_id', name='unique_course_tutor')
    )
    op.create_table(
        'enrollments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('course_id', sa.Integer(), sa.ForeignKey('courses.id'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='ACTIVE'),
        sa.Column('final_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='USD'),
        sa.Column('payment_status', sa.String(length=20), nullable=False, server_default='PENDING'),
        sa.Column('enrolled_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('student_id', 'course_id', name='unique_student_course')
    )
    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('enrollment_id', sa.Integer(), sa.ForeignKey('enrollments.id'), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='USD'),
        sa.Column('method', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='PENDING'),
        sa.Column('due_date', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('transaction_id', sa.String(length=255), nullable=True),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False)
    )
    op.create_table(
        'syllabus_phases',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('course_id', sa.Integer(), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False)
    )
    op.create_table(
        'syllabus_items',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('phase_id', sa.String(length=36), sa.ForeignKey('syllabus_phases.id', ondelete='CASCADE'), nullable=False),
        sa.Column('course_id', sa.Integer(), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False)
    )
    op.create_table(
        'item_progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('item_id', sa.String(length=36), sa.ForeignKey('syllabus_items.id', ondelete='CASCADE'), nullable=False),
        sa.Column('completed_by_student', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_by_tutor', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('student_id', 'item_id', name='unique_student_item')
    )
    op.create_table(
        'phase_progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('phase_id', sa.String(length=36), sa.ForeignKey('syllabus_phases.id', ondelete='CASCADE'), nullable=False),
        sa.Column('completed_by_student', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_by_tutor', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('student_id', 'phase_id', name='unique_student_phase')
    )


def downgrade():
    op.drop_table('phase_progress')
    op.drop_table('item_progress')
    op.drop_table('syllabus_items')
    op.drop_table('syllabus_phases')
    op.drop_table('payments')
    op.drop_table('enrollments')
    op.drop_table('course_tutors')
    op.drop_table('courses')
    op.drop_table('users')
