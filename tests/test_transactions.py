import pytest
from app.services import transactions
from app.services.transactions import TransactionNotFound


def test_create_and_lookup(app, vendor_login):
    tx = transactions.create_transaction(
        amount=1500,
        type="PLAN_SUBSCRIPTION",
        reference="plan-1-1-1",
        vendor_id=vendor_login["id"],
        gateway="ALATPAY",
    )
    assert tx.id is not None
    assert len(tx.uuid) == 36
    assert tx.status == "PENDING"
    assert tx.currency == "NGN"
    assert transactions.check_status(tx.id) == "PENDING"
    assert transactions.transaction_exists(tx.id)
    assert transactions.find_by_reference("plan-1-1-1") is tx
    assert transactions.find_by_reference(None) is None


def test_update_only_whitelisted_fields(app):
    tx = transactions.create_transaction(amount=2500, type="PLAN_SUBSCRIPTION")
    transactions.update_transaction(
        tx.id, status="SUCCESSFUL", external_reference="TX_REQ_1", amount=1, charge_amount="2500.5"
    )
    assert tx.status == "SUCCESSFUL"
    assert float(tx.amount) == 2500.0
    assert float(tx.charge_amount) == 2500.5
    assert transactions.find_by_external_reference("TX_REQ_1") is tx


def test_missing_transaction(app):
    assert transactions.transaction_exists(12345) is False
    with pytest.raises(TransactionNotFound) as excinfo:
        transactions.get_transaction(12345)
    assert excinfo.value.status_code == 404
    with pytest.raises(TransactionNotFound):
        transactions.update_transaction(12345, status="FAILED")
