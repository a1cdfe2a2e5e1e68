import logging
from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import ok, transactional
from app.services.payments import checkout

webhook_bp = Blueprint("webhook", __name__, url_prefix=f"{API_PREFIX}/webhook")

SIGNATURE_HEADER = "verif-hash"


def _process():
    raw = request.get_data(cache=True)
    payload = request.get_json(silent=True) or {}
    signature = request.headers.get(SIGNATURE_HEADER)
    logging.info({
        "event": "webhook_received",
        "hasSignature": bool(signature),
        "remote": request.remote_addr,
    })
    with transactional("Webhook processing failed"):
        result = checkout.handle_flutterwave_webhook(raw, payload, signature)
    return ok(result, message="Webhook processed")


@webhook_bp.route("", methods=["POST"])
def flutterwave_webhook():
    """
    Flutterwave webhook
    ---
    tags: [Payments]
    parameters:
      - in: header
        name: verif-hash
        type: string
        required: true
    responses:
      200: {description: Processed or acknowledged}
      400: {description: Invalid webhook signature}
    """
    return _process()


@webhook_bp.route("/failed", methods=["POST"])
def flutterwave_failed_webhook():
    return _process()
