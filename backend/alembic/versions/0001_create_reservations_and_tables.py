"""Create reservations and tables

Revision ID: 0001_create_reservations_and_tables
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_reservations_and_tables'
down_revision = None
branch_labels = None
depends_on = None


reservation_status = sa.Enum(
    'booked', 'seated', 'finished', 'cancelled', name='reservation_status'
)
table_status = sa.Enum('free', 'occupied', name='table_status')


def upgrade():
    op.create_table('reservations',
        sa.Column('reservation_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('mobile_number', sa.String(length=30), nullable=False),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('reservation_time', sa.Time(), nullable=False),
        sa.Column('people', sa.Integer(), nullable=False),
        sa.Column('status', reservation_status, nullable=False, server_default='booked'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('reservation_id')
    )
    op.create_index('ix_reservations_reservation_id', 'reservations', ['reservation_id'])
    op.create_index('ix_reservations_mobile_number', 'reservations', ['mobile_number'])
    op.create_index('ix_reservations_reservation_date', 'reservations', ['reservation_date'])
    op.create_index(
        'idx_reservation_date_time', 'reservations', ['reservation_date', 'reservation_time']
    )

    op.create_table('tables',
        sa.Column('table_id', sa.Integer(), nullable=False),
        sa.Column('table_name', sa.String(length=50), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('status', table_status, nullable=False, server_default='free'),
        sa.Column('reservation_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('capacity >= 1', name='chk_table_capacity'),
        sa.CheckConstraint(
            "(status = 'free' AND reservation_id IS NULL) OR status = 'occupied'",
            name='chk_table_free_unlinked'
        ),
        sa.ForeignKeyConstraint(['reservation_id'], ['reservations.reservation_id']),
        sa.PrimaryKeyConstraint('table_id')
    )


def downgrade():
    op.drop_table('tables')
    op.drop_index('idx_reservation_date_time', table_name='reservations')
    op.drop_index('ix_reservations_reservation_date', table_name='reservations')
    op.drop_index('ix_reservations_mobile_number', table_name='reservations')
    op.drop_index('ix_reservations_reservation_id', table_name='reservations')
    op.drop_table('reservations')

    bind = op.get_bind()
    table_status.drop(bind, checkfirst=True)
    reservation_status.drop(bind, checkfirst=True)
