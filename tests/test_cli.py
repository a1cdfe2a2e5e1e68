from datetime import datetime, timedelta
from models import db
from models.plan import Plan, VendorSubscription
from app.services.subscriptions import activate_subscription


def test_seed_plans_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["seed-plans"])
    assert result.exit_code == 0
    assert "Seeded 3 plans." in result.output
    assert Plan.query.count() == 3

    again = runner.invoke(args=["seed-plans"])
    assert "Plans already exist." in again.output


def test_expire_subscriptions_command(app, vendor_login, seeded_plans):
    activate_subscription(vendor_login["id"], seeded_plans["Basic"], now=datetime.utcnow() - timedelta(days=60))
    db.session.commit()
    result = app.test_cli_runner().invoke(args=["expire-subscriptions"])
    assert result.exit_code == 0
    assert "Expired 1 subscriptions." in result.output
    assert VendorSubscription.query.one().status == "EXPIRED"


def test_upgrade_refused_in_production(app, monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("ALLOW_DB_MIGRATIONS", raising=False)
    result = app.test_cli_runner().invoke(args=["db-upgrade-safe"])
    assert result.exit_code != 0
    assert "Refusing to run DB migration" in result.output
