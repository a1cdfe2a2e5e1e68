from sqlalchemy import Column, String, Numeric, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from models import db, BIGINT


class Transaction(db.Model):
    __tablename__ = "transaction"
    __table_args__ = (
        db.Index("ix_transaction_gateway_status", "gateway", "status"),
    )

    id = Column(BIGINT, primary_key=True)
    uuid = Column(String(36), unique=True, nullable=False)
    vendor_id = Column(BIGINT, ForeignKey("vendor.id"), nullable=True, index=True)
    user_id = Column(BIGINT, ForeignKey("user.id"), nullable=True, index=True)
    plan_id = Column(BIGINT, ForeignKey("plan.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    charge_amount = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=False, default="NGN")
    type = Column(String(40), nullable=False)  # PLAN_SUBSCRIPTION
    status = Column(String(20), nullable=False, default="PENDING")  # PENDING, SUCCESSFUL, FAILED
    reference = Column(String(120), unique=True, nullable=True)  # our order id / Flutterwave tx_ref
    external_reference = Column(String(120), nullable=True, index=True)  # gateway transaction id
    gateway_transaction_id = Column(String(64), nullable=True)  # Flutterwave numeric id
    description = Column(Text, nullable=True)
    payment_type = Column(String(30), nullable=True)  # BANK_TRANSFER, CARD
    transaction_type = Column(String(30), nullable=True)  # SUBSCRIPTION
    gateway = Column(String(20), nullable=True)  # ALATPAY, FLUTTERWAVE
    # "metadata" is reserved on declarative models
    meta = Column("metadata", db.JSON, nullable=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    plan = db.relationship("Plan", lazy=True)

    @property
    def is_terminal(self):
        return self.status in ("SUCCESSFUL", "FAILED")

    def to_dict(self):
        return {
            "id": self.id,
            "uuid": self.uuid,
            "vendorId": self.vendor_id,
            "userId": self.user_id,
            "planId": self.plan_id,
            "amount": float(self.amount),
            "currency": self.currency,
            "type": self.type,
            "status": self.status,
            "reference": self.reference,
            "externalReference": self.external_reference,
            "description": self.description,
            "paymentType": self.payment_type,
            "transactionType": self.transaction_type,
            "gateway": self.gateway,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
