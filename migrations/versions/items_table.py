"""Alembic 마이그레이션: items 테이블 추가"""
from alembic import op
import sqlalchemy as sa


def upgrade():
    """재고 아이템 테이블 생성"""
    op.create_table(
        'items',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category', sa.String(50), nullable=True),
        sa.Column('storage_method', sa.String(10), nullable=False, server_default='fridge'),
        sa.Column('status', sa.String(10), nullable=False, server_default='active'),
        sa.Column('purchase_date', sa.Date(), nullable=False),
        sa.Column('expiry_date', sa.Date(), nullable=False),
        sa.Column('is_estimated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('memo', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )

    # 인덱스 추가
    op.create_index('ix_items_user_id', 'items', ['user_id'])
    op.create_index('ix_items_status', 'items', ['status'])
    op.create_index('ix_items_expiry_date', 'items', ['expiry_date'])
    op.create_index('idx_items_status_expiry', 'items', ['status', 'expiry_date'])


def downgrade():
    """테이블 삭제"""
    op.drop_index('idx_items_status_expiry', table_name='items')
    op.drop_index('ix_items_expiry_date', table_name='items')
    op.drop_index('ix_items_status', table_name='items')
    op.drop_index('ix_items_user_id', table_name='items')
    op.drop_table('items')
