from sqlalchemy import Column, String, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from models import db, BIGINT


class Plan(db.Model):
    __tablename__ = "plan"
    __table_args__ = (
        db.UniqueConstraint("name", "role", name="uq_plan_name_role"),
    )

    id = Column(BIGINT, primary_key=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="NGN")
    interval = Column(String(20), nullable=False, default="monthly")  # weekly, monthly, quarterly, yearly
    features = Column(db.JSON, default=list)
    is_popular = Column(Boolean, default=False)
    role = Column(String(20), nullable=False, default="VENDOR")
    external_plan_id = Column(String(64), nullable=True)  # Flutterwave payment plan id
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "price": float(self.price),
            "currency": self.currency,
            "interval": self.interval,
            "features": self.features or [],
            "isPopular": self.is_popular,
            "role": self.role,
            "externalPlanId": self.external_plan_id,
        }


class VendorSubscription(db.Model):
    __tablename__ = "vendor_subscription"
    __table_args__ = (
        db.Index("ix_vendor_subscription_vendor_status", "vendor_id", "status"),
    )

    id = Column(BIGINT, primary_key=True)
    vendor_id = Column(BIGINT, ForeignKey("vendor.id"), nullable=False)
    plan_id = Column(BIGINT, ForeignKey("plan.id"), nullable=False)
    # One activation per successful payment
    transaction_id = Column(BIGINT, ForeignKey("transaction.id"), unique=True, nullable=True)
    status = Column(String(20), default="ACTIVE")  # ACTIVE, EXPIRED, CANCELLED
    started_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    cancelled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now())

    plan = db.relationship("Plan", lazy=True)
    vendor = db.relationship("Vendor", backref=db.backref("subscriptions", lazy=True))

    def to_dict(self):
        return {
            "id": self.id,
            "vendorId": self.vendor_id,
            "plan": self.plan.to_dict() if self.plan else None,
            "transactionId": self.transaction_id,
            "status": self.status,
            "startedAt": self.started_at.isoformat() if self.started_at else None,
            "expiresAt": self.expires_at.isoformat() if self.expires_at else None,
        }
