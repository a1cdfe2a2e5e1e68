from models import db, BIGINT
from datetime import datetime


class Vendor(db.Model):
    __tablename__ = "vendor"

    id = db.Column(BIGINT, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    mobile_number = db.Column(db.String(20), unique=True, nullable=False)
    business_type = db.Column(db.String(100), nullable=False)
    service_category = db.Column(db.String(100), nullable=False)
    skills = db.Column(db.JSON, default=list)

    # Profile completion
    vendor_type = db.Column(db.String(20), nullable=True)  # individual, registered
    selfie_image = db.Column(db.String(500), nullable=True)
    identification_type = db.Column(db.String(50), nullable=True)  # nin, bvn, passport, drivers_license
    identification_number = db.Column(db.String(50), nullable=True)
    tax_identification_number = db.Column(db.String(50), nullable=True)
    gender = db.Column(db.String(20), nullable=True)

    # Registered business verification
    business_name = db.Column(db.String(200), nullable=True)
    registration_number = db.Column(db.String(50), nullable=True)
    cac_certificate_url = db.Column(db.String(500), nullable=True)

    onboarding_status = db.Column(db.String(30), default="in_progress")  # in_progress, pending_review, approved, rejected
    submitted_at = db.Column(db.DateTime, nullable=True)

    # Subscription
    current_plan_id = db.Column(BIGINT, db.ForeignKey("plan.id"), nullable=True)
    plan_started_at = db.Column(db.DateTime, nullable=True)
    plan_expires_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    current_plan = db.relationship("Plan", lazy=True)
    bank_account = db.relationship("VendorBankAccount", uselist=False, backref="vendor", lazy=True)
    services = db.relationship(
        "Service", backref="vendor", cascade="all, delete-orphan", lazy=True
    )

    def summary(self):
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "mobileNumber": self.mobile_number,
            "businessType": self.business_type,
        }

    def to_dict(self):
        data = self.summary()
        data.update({
            "serviceCategory": self.service_category,
            "skills": self.skills or [],
            "vendorType": self.vendor_type,
            "selfieImage": self.selfie_image,
            "identificationType": self.identification_type,
            "identificationNumber": self.identification_number,
            "taxIdentificationNumber": self.tax_identification_number,
            "gender": self.gender,
            "businessName": self.business_name,
            "registrationNumber": self.registration_number,
            "cacCertificateUrl": self.cac_certificate_url,
            "onboardingStatus": self.onboarding_status,
            "submittedAt": self.submitted_at.isoformat() if self.submitted_at else None,
            "currentPlan": self.current_plan.to_dict() if self.current_plan else None,
            "planStartedAt": self.plan_started_at.isoformat() if self.plan_started_at else None,
            "planExpiresAt": self.plan_expires_at.isoformat() if self.plan_expires_at else None,
            "bankAccount": self.bank_account.to_dict() if self.bank_account else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        })
        return data

    def __repr__(self):
        return f"<Vendor id={self.id} email={self.email}>"


class VendorBankAccount(db.Model):
    __tablename__ = "vendor_bank_account"

    id = db.Column(BIGINT, primary_key=True)
    vendor_id = db.Column(BIGINT, db.ForeignKey("vendor.id"), unique=True, nullable=False)
    bank_name = db.Column(db.String(100), nullable=False)
    bank_code = db.Column(db.String(20), nullable=True)
    account_name = db.Column(db.String(150), nullable=False)
    account_number = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "bankName": self.bank_name,
            "bankCode": self.bank_code,
            "accountName": self.account_name,
            "accountNumber": self.account_number,
        }


class Service(db.Model):
    __tablename__ = "service"

    id = db.Column(BIGINT, primary_key=True)
    vendor_id = db.Column(BIGINT, db.ForeignKey("vendor.id"), nullable=False, index=True)
    title = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=False)
    average_price = db.Column(db.Numeric(12, 2), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    image_url = db.Column(db.String(500), nullable=False)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "vendorId": self.vendor_id,
            "title": self.title,
            "description": self.description,
            "averagePrice": float(self.average_price) if self.average_price is not None else None,
            "category": self.category,
            "imageUrl": self.image_url,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
