import logging
import requests
from celery import shared_task
from flask import current_app
from twilio.base.exceptions import TwilioRestException

logger = logging.getLogger(__name__)

SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"


def send_sms(to: str, body: str) -> bool:
    if not current_app.config.get("OTP_SMS_ENABLED"):
        logger.info({"event": "sms_disabled", "phoneNumber": to, "otp": body})
        return False
    client = current_app.twilio_client
    from_number = current_app.config.get("TWILIO_FROM_NUMBER")
    message = client.messages.create(from_=from_number, to=f"+{to.lstrip('+')}", body=body)
    logger.info("[SMS] Message sent. SID: %s", message.sid)
    return True


def send_email(to: str, subject: str, text: str, sender: str = None) -> bool:
    cfg = current_app.config
    api_key = cfg.get("SENDGRID_API_KEY")
    if not api_key:
        logger.info({"event": "email_disabled", "subject": subject, "email": to})
        return False
    payload = {
        "personalizations": [{"to": [{"email": to}], "subject": subject}],
        "from": {"email": sender or cfg.get("EMAIL_FROM"), "name": "FicaGo"},
        "subject": subject,
        "content": [{"type": "text/plain", "value": text}],
    }
    response = requests.post(
        SENDGRID_URL,
        json=payload,
        headers={"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
        timeout=10,
    )
    response.raise_for_status()
    logger.info({"event": "email_sent", "subject": subject, "email": to})
    return True


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_otp_message_task(self, to: str, body: str) -> bool:
    """Deliver an OTP by SMS, retrying on Twilio errors."""
    try:
        return send_sms(to, body)
    except TwilioRestException as exc:
        logger.error("Failed to send SMS: %s", exc)
        if current_app.config.get("TESTING"):
            return False
        raise self.retry(exc=exc)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_email_task(self, to: str, subject: str, text: str, sender: str = None) -> bool:
    try:
        return send_email(to, subject, text, sender=sender)
    except requests.RequestException as exc:
        logger.error("Failed to send e-mail %s: %s", subject, exc)
        if current_app.config.get("TESTING"):
            return False
        raise self.retry(exc=exc)
