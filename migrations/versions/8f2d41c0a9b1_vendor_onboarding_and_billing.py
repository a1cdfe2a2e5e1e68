"""vendor onboarding, plans, transactions and subscriptions

Revision ID: 8f2d41c0a9b1
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '8f2d41c0a9b1'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade():
    op.create_table(
        'otp',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('phone_number', sa.String(20), nullable=False),
        sa.Column('type', sa.String(40), nullable=False),
        sa.Column('otp', sa.String(6), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('phone_number', 'type', name='uq_otp_phone_type'),
    )
    op.create_table(
        'user',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('full_name', sa.String(150), nullable=True),
        sa.Column('email', sa.String(255), nullable=True, unique=True),
        sa.Column('mobile_number', sa.String(20), nullable=False, unique=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(20), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        'plan',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('interval', sa.String(20), nullable=False),
        sa.Column('features', sa.JSON(), nullable=True),
        sa.Column('is_popular', sa.Boolean(), nullable=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('external_plan_id', sa.String(64), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('name', 'role', name='uq_plan_name_role'),
    )
    op.create_table(
        'vendor',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('mobile_number', sa.String(20), nullable=False, unique=True),
        sa.Column('business_type', sa.String(100), nullable=False),
        sa.Column('service_category', sa.String(100), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column('vendor_type', sa.String(20), nullable=True),
        sa.Column('selfie_image', sa.String(500), nullable=True),
        sa.Column('identification_type', sa.String(50), nullable=True),
        sa.Column('identification_number', sa.String(50), nullable=True),
        sa.Column('tax_identification_number', sa.String(50), nullable=True),
        sa.Column('gender', sa.String(20), nullable=True),
        sa.Column('business_name', sa.String(200), nullable=True),
        sa.Column('registration_number', sa.String(50), nullable=True),
        sa.Column('cac_certificate_url', sa.String(500), nullable=True),
        sa.Column('onboarding_status', sa.String(30), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=True),
        sa.Column('current_plan_id', sa.BigInteger(), sa.ForeignKey('plan.id'), nullable=True),
        sa.Column('plan_started_at', sa.DateTime(), nullable=True),
        sa.Column('plan_expires_at', sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        'vendor_bank_account',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('vendor_id', sa.BigInteger(), sa.ForeignKey('vendor.id'), nullable=False, unique=True),
        sa.Column('bank_name', sa.String(100), nullable=False),
        sa.Column('bank_code', sa.String(20), nullable=True),
        sa.Column('account_name', sa.String(150), nullable=False),
        sa.Column('account_number', sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'service',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('vendor_id', sa.BigInteger(), sa.ForeignKey('vendor.id'), nullable=False),
        sa.Column('title', sa.String(150), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('average_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('image_url', sa.String(500), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_service_vendor_id', 'service', ['vendor_id'])
    op.create_table(
        'transaction',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('uuid', sa.String(36), nullable=False, unique=True),
        sa.Column('vendor_id', sa.BigInteger(), sa.ForeignKey('vendor.id'), nullable=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('user.id'), nullable=True),
        sa.Column('plan_id', sa.BigInteger(), sa.ForeignKey('plan.id'), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('charge_amount', sa.Numeric(12, 2), nullable=True),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('type', sa.String(40), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('reference', sa.String(120), nullable=True, unique=True),
        sa.Column('external_reference', sa.String(120), nullable=True),
        sa.Column('gateway_transaction_id', sa.String(64), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('payment_type', sa.String(30), nullable=True),
        sa.Column('transaction_type', sa.String(30), nullable=True),
        sa.Column('gateway', sa.String(20), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_transaction_vendor_id', 'transaction', ['vendor_id'])
    op.create_index('ix_transaction_user_id', 'transaction', ['user_id'])
    op.create_index('ix_transaction_external_reference', 'transaction', ['external_reference'])
    op.create_index('ix_transaction_gateway_status', 'transaction', ['gateway', 'status'])
    op.create_table(
        'vendor_subscription',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('vendor_id', sa.BigInteger(), sa.ForeignKey('vendor.id'), nullable=False),
        sa.Column('plan_id', sa.BigInteger(), sa.ForeignKey('plan.id'), nullable=False),
        sa.Column('transaction_id', sa.BigInteger(), sa.ForeignKey('transaction.id'), nullable=True, unique=True),
        sa.Column('status', sa.String(20), nullable=True),
        sa.Column('started_at', sa.DateTime(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('cancelled_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_vendor_subscription_vendor_status', 'vendor_subscription', ['vendor_id', 'status'])


def downgrade():
    op.drop_index('ix_vendor_subscription_vendor_status', table_name='vendor_subscription')
    op.drop_table('vendor_subscription')
    op.drop_index('ix_transaction_gateway_status', table_name='transaction')
    op.drop_index('ix_transaction_external_reference', table_name='transaction')
    op.drop_index('ix_transaction_user_id', table_name='transaction')
    op.drop_index('ix_transaction_vendor_id', table_name='transaction')
    op.drop_table('transaction')
    op.drop_index('ix_service_vendor_id', table_name='service')
    op.drop_table('service')
    op.drop_table('vendor_bank_account')
    op.drop_table('vendor')
    op.drop_table('plan')
    op.drop_table('user')
    op.drop_table('otp')
