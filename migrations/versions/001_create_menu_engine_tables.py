"""create menu engine tables

Revision ID: 001_create_menu_engine_tables
Revises:
Create Date: 2024-06-01
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic
revision = '001_create_menu_engine_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'seasonal_menus',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False, server_default=''),
        sa.Column('start_date', sa.String(length=10), nullable=False),
        sa.Column('end_date', sa.String(length=10), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_seasonal_menus_id', 'seasonal_menus', ['id'])

    # seasonal_menu_id is an ownership reference, deliberately without a foreign key
    op.create_table(
        'menu_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False, server_default=''),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('base_price', sa.Float(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('seasonal_menu_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_menu_items_id', 'menu_items', ['id'])
    op.create_index('ix_menu_items_category', 'menu_items', ['category'])
    op.create_index('ix_menu_items_seasonal_menu_id', 'menu_items', ['seasonal_menu_id'])

    op.create_table(
        'stock_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('branch_id', sa.String(), nullable=False),
        sa.Column('menu_item_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='100'),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('branch_id', 'menu_item_id', name='uq_stock_branch_item')
    )
    op.create_index('ix_stock_records_id', 'stock_records', ['id'])
    op.create_index('ix_stock_records_branch_id', 'stock_records', ['branch_id'])
    op.create_index('ix_stock_records_menu_item_id', 'stock_records', ['menu_item_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('branch_id', sa.String(), nullable=False),
        sa.Column('status', sa.Enum('PENDING', 'CONFIRMED', 'COMPLETED', 'CANCELLED', name='orderstatus'), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('seasonal_menu_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_branch_id', 'orders', ['branch_id'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('menu_item_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Float(), nullable=False),
        sa.Column('total_price', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_order_items_id', 'order_items', ['id'])


def downgrade():
    op.drop_index('ix_order_items_id', 'order_items')
    op.drop_table('order_items')
    op.drop_index('ix_orders_branch_id', 'orders')
    op.drop_index('ix_orders_id', 'orders')
    op.drop_table('orders')
    op.execute('DROP TYPE IF EXISTS orderstatus')
    op.drop_index('ix_stock_records_menu_item_id', 'stock_records')
    op.drop_index('ix_stock_records_branch_id', 'stock_records')
    op.drop_index('ix_stock_records_id', 'stock_records')
    op.drop_table('stock_records')
    op.drop_index('ix_menu_items_seasonal_menu_id', 'menu_items')
    op.drop_index('ix_menu_items_category', 'menu_items')
    op.drop_index('ix_menu_items_id', 'menu_items')
    op.drop_table('menu_items')
    op.drop_index('ix_seasonal_menus_id', 'seasonal_menus')
    op.drop_table('seasonal_menus')
