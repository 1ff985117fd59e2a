"""Employees, education and the employee number sequence

Revision ID: 001_initial_employee_schema
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_employee_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute(sa.schema.CreateSequence(sa.Sequence('employee_number_seq', start=1)))

    op.create_table('employees',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('emp_id', sa.String(length=20), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('date_of_birth', sa.DateTime(timezone=True), nullable=True),
        sa.Column('gender', sa.String(length=20), nullable=True),
        sa.Column('aadhaar_number', sa.String(length=20), nullable=True),
        sa.Column('pan_number', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('emergency_contact', sa.String(length=100), nullable=True),
        sa.Column('photo', sa.Text(), nullable=True),
        sa.Column('blood_group', sa.String(length=5), nullable=True),
        sa.Column('present_address', sa.Text(), nullable=True),
        sa.Column('permanent_address', sa.Text(), nullable=True),
        sa.Column('designation', sa.String(length=100), nullable=True),
        sa.Column('department', sa.String(length=100), nullable=True),
        sa.Column('date_of_joining', sa.DateTime(timezone=True), nullable=True),
        sa.Column('work_location', sa.String(length=100), nullable=True),
        sa.Column('bank_name', sa.String(length=100), nullable=True),
        sa.Column('account_number', sa.String(length=50), nullable=True),
        sa.Column('ifsc_code', sa.String(length=20), nullable=True),
        sa.Column('password', sa.String(length=255), nullable=True),
        sa.Column('changed_temp_password', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('temp_password_hash', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_employees_emp_id', 'employees', ['emp_id'], unique=True)
    op.create_index('ix_employees_department', 'employees', ['department'], unique=False)
    op.create_index('ix_employees_created_at', 'employees', ['created_at'], unique=False)

    op.create_table('education',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('employee_id', sa.Uuid(), nullable=False),
        sa.Column('institution', sa.String(length=255), nullable=True),
        sa.Column('university', sa.String(length=255), nullable=True),
        sa.Column('qualification', sa.String(length=100), nullable=True),
        sa.Column('year_completed', sa.String(length=10), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_education_employee_id', 'education', ['employee_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_education_employee_id', table_name='education')
    op.drop_table('education')
    op.drop_index('ix_employees_created_at', table_name='employees')
    op.drop_index('ix_employees_department', table_name='employees')
    op.drop_index('ix_employees_emp_id', table_name='employees')
    op.drop_table('employees')
    op.execute(sa.schema.DropSequence(sa.Sequence('employee_number_seq')))
