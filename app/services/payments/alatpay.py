import logging
import random
import threading
import time
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

MOCK_BANK_NAME = "Mock Bank"
MOCK_BANK_CODE = "999"
MOCK_ACCOUNT_NAME = "FicaGo Mock Account"


def _now_iso():
    return datetime.utcnow().isoformat() + "Z"


class AlatPayMockedService:
    """In-process stand-in for the AlatPay bank transfer API.

    A status check echoes back the amount and order of the transaction
    the virtual account was generated for. Accounts generated by this
    instance are cached; any other id is looked up in the stored
    ALATPAY transactions, so a worker or another process confirms the
    same way. The status returned by ``confirm_transaction_status``
    comes from ``mock_status``.
    """

    def __init__(self, mock_status="successful", account_ttl_hours=24):
        self.mock_status = mock_status
        self.account_ttl_hours = account_ttl_hours
        self._accounts = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config):
        return cls(
            mock_status=config.get("ALATPAY_MOCK_STATUS", "successful"),
            account_ttl_hours=config.get("ALATPAY_ACCOUNT_TTL_HOURS", 24),
        )

    @staticmethod
    def _account_number():
        return "".join(str(random.randint(0, 9)) for _ in range(10))

    def generate_virtual_account(self, amount, currency, order_id, description, customer):
        logger.info({"event": "virtual_account_requested", "orderId": order_id, "currency": currency})
        stamp = int(time.time() * 1000)
        expires = (datetime.utcnow() + timedelta(hours=self.account_ttl_hours)).isoformat() + "Z"
        account_number = self._account_number()
        transaction_id = f"TX_REQ_{stamp}_{random.randint(1000, 9999)}"
        data = {
            "id": f"VA_{stamp}",
            "merchantId": "MOCK_MERCHANT",
            "virtualBankCode": MOCK_BANK_CODE,
            "virtualBankAccountNumber": account_number,
            "businessBankCode": "058",
            "transactionId": transaction_id,
            "status": "active",
            "expiredAt": expires,
            "settlementType": "instant",
            "createdAt": _now_iso(),
            "amount": float(amount),
            "currency": currency,
            "orderId": order_id,
            "description": description,
            "customer": {
                "email": customer.get("email"),
                "phone": customer.get("phone"),
                "firstName": customer.get("firstName"),
                "lastName": customer.get("lastName"),
            },
            "virtualAccountNumber": account_number,
            "bankName": MOCK_BANK_NAME,
            "accountName": MOCK_ACCOUNT_NAME,
            "expiryTime": expires,
            "reference": f"REF_{order_id}",
        }
        with self._lock:
            self._accounts[transaction_id] = data
        return {
            "success": True,
            "data": data,
            "message": "Virtual account generated successfully (MOCKED)",
        }

    def _find_account(self, transaction_id):
        with self._lock:
            account = self._accounts.get(transaction_id)
        if account is not None:
            return account
        return _account_from_transaction(transaction_id)

    def confirm_transaction_status(self, transaction_id):
        logger.info("Confirming transaction status (MOCKED) for %s", transaction_id)
        account = self._find_account(transaction_id)
        if account is None:
            return {
                "success": False,
                "error": "Transaction not found",
                "message": "Unknown transaction id (MOCKED)",
            }
        status = (self.mock_status or "successful").lower()
        amount = account["amount"]
        return {
            "success": True,
            "data": {
                "id": f"TX_{int(time.time() * 1000)}",
                "transactionId": transaction_id,
                "orderId": account["orderId"],
                "amount": amount,
                "amountSent": amount,
                "isAmountDiscrepant": False,
                "currency": account["currency"],
                "status": status,
                "statusReason": "Payment received" if status == "successful" else "Payment not received",
                "isCallbackValidated": status == "successful",
                "channel": "bank_transfer",
                "virtualAccount": {
                    "virtualBankAccountNumber": account["virtualBankAccountNumber"],
                    "virtualBankCode": account["virtualBankCode"],
                },
                "createdAt": account["createdAt"],
                "updatedAt": _now_iso(),
            },
            "message": "Transaction confirmed successfully (MOCKED)",
        }


def _account_from_transaction(transaction_id):
    """Rebuild the echoed account fields from a stored ALATPAY transaction."""
    from app.services.transactions import find_by_external_reference

    tx = find_by_external_reference(transaction_id)
    if tx is None or tx.gateway != "ALATPAY":
        return None
    meta = tx.meta or {}
    created_at = tx.created_at.isoformat() + "Z" if tx.created_at else _now_iso()
    return {
        "transactionId": transaction_id,
        "orderId": tx.reference,
        "amount": float(tx.amount),
        "currency": tx.currency,
        "virtualBankAccountNumber": meta.get("virtualBankAccountNumber"),
        "virtualBankCode": meta.get("virtualBankCode", MOCK_BANK_CODE),
        "createdAt": meta.get("createdAt", created_at),
    }
