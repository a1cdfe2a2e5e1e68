import os


def _flag(name, default="0"):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    JSON_SORT_KEYS = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MAX_CONTENT_LENGTH = 100 * 1024 * 1024
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URL", "memory://")
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "200 per hour")
    OTP_SEND_LIMIT_PER_IP = os.getenv("OTP_SEND_LIMIT_PER_IP", "5 per 15 minutes")
    OTP_SEND_LIMIT_PER_PHONE = os.getenv("OTP_SEND_LIMIT_PER_PHONE", "3 per 15 minutes")
    LOGIN_LIMIT_PER_IP = os.getenv("LOGIN_LIMIT_PER_IP", "10 per 30 minutes")

    JWT_SECRET = os.getenv("JWT_SECRET_KEY", "dev-insecure-jwt-key")
    ACCESS_TOKEN_LIFETIME_MIN = int(os.getenv("ACCESS_TOKEN_LIFETIME_MIN", 24 * 60))
    REFRESH_TOKEN_LIFETIME_DAYS = int(os.getenv("REFRESH_TOKEN_LIFETIME_DAYS", 30))

    OTP_EXPIRY_MINUTES = int(os.getenv("OTP_EXPIRY_MINUTES", 10))
    OTP_SMS_ENABLED = _flag("OTP_SMS_ENABLED")
    OTP_RETURN_IN_RESPONSE = _flag("OTP_RETURN_IN_RESPONSE", "1")

    TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
    TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
    TWILIO_FROM_NUMBER = os.getenv("TWILIO_FROM_NUMBER")

    SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
    EMAIL_FROM = os.getenv("EMAIL_FROM", "noreply@ficago.ng")
    EMAILS_FROM = {
        "noreply": EMAIL_FROM,
        "vendor": "vendor@ficago.ng",
        "onboarding": "onboarding@ficago.ng",
        "system": "system@ficago.ng",
    }

    PAYMENT_DEFAULT_GATEWAY = os.getenv("PAYMENT_DEFAULT_GATEWAY", "ALATPAY")
    PAYMENT_PENDING_CHECK_SECONDS = int(os.getenv("PAYMENT_PENDING_CHECK_SECONDS", 600))
    PAYMENT_PENDING_CHECK_ENABLED = _flag("PAYMENT_PENDING_CHECK_ENABLED", "1")
    ALATPAY_MOCK_STATUS = os.getenv("ALATPAY_MOCK_STATUS", "successful")
    ALATPAY_ACCOUNT_TTL_HOURS = int(os.getenv("ALATPAY_ACCOUNT_TTL_HOURS", 24))
    FLUTTERWAVE_BASE_URL = os.getenv("FLUTTERWAVE_BASE_URL", "https://api.flutterwave.com/v3")
    FLUTTERWAVE_PUBLIC_KEY = os.getenv("FLUTTERWAVE_PUBLIC_KEY")
    FLUTTERWAVE_SECRET_KEY = os.getenv("FLUTTERWAVE_SECRET_KEY")
    FLUTTERWAVE_WEBHOOK_SECRET = os.getenv("FLUTTERWAVE_WEBHOOK_SECRET")
    FLUTTERWAVE_TIMEOUT = float(os.getenv("FLUTTERWAVE_TIMEOUT", 15))
    PAYMENT_REDIRECT_URL = os.getenv("PAYMENT_REDIRECT_URL", "http://localhost:3000/payment/complete")

    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "ficago/files")
    UPLOAD_MAX_FILES = int(os.getenv("UPLOAD_MAX_FILES", 10))

    SEED_PLANS_ON_STARTUP = _flag("SEED_PLANS_ON_STARTUP", "1")
    SEED_FLUTTERWAVE_PLANS = _flag("SEED_FLUTTERWAVE_PLANS", "1")

    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "ficago-backend")
    OTEL_EXPORTER = os.getenv("OTEL_EXPORTER", "otlp")
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///dev.db")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-key"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    RATELIMIT_ENABLED = False
    OTP_SMS_ENABLED = False
    OTP_RETURN_IN_RESPONSE = True
    SEED_PLANS_ON_STARTUP = False
    SEED_FLUTTERWAVE_PLANS = False
    PAYMENT_PENDING_CHECK_ENABLED = False
    FLUTTERWAVE_SECRET_KEY = "FLWSECK_TEST-secret"
    FLUTTERWAVE_PUBLIC_KEY = "FLWPUBK_TEST-public"
    FLUTTERWAVE_WEBHOOK_SECRET = "test-webhook-secret"
    ALATPAY_MOCK_STATUS = "successful"
    OTEL_EXPORTER = "none"


class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    OTP_RETURN_IN_RESPONSE = _flag("OTP_RETURN_IN_RESPONSE", "0")

    @staticmethod
    def validate():
        missing = []
        for key in ("SECRET_KEY", "DATABASE_URL", "JWT_SECRET_KEY"):
            if not os.getenv(key):
                missing.append(key)
        if missing:
            raise RuntimeError(
                f"Missing required env vars in production: {', '.join(missing)}"
            )


def get_config_class():
    env = os.getenv("APP_ENV", "development").lower()
    if env == "production":
        ProductionConfig.validate()
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
