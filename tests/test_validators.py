from matchday import MatchdayConfig, StoreApp
from matchday.config import AuthConfig, StatConfig
from matchday.diagnostics import run_checklist
from matchday.domain.catalog import Currency
from matchday.validators import validate_app


def test_validate_app_success():
    app = StoreApp(MatchdayConfig(auth=AuthConfig(secret_key="s3cret")))
    app.catalog.skill("rabona", "Rabona", 400).item("boost", "Training Boost", 10, Currency.FC)
    assert validate_app(app) == []


def test_validate_app_reports_problems():
    config = MatchdayConfig(stats=StatConfig(min_value=50, max_value=99, default_value=40))
    app = StoreApp(config)
    issues = validate_app(app)
    assert "No catalog entries registered in application." in issues
    assert any("default_value" in issue for issue in issues)
    assert any("secret key" in issue for issue in issues)


def test_checklist_flags_unaffordable_entries():
    app = StoreApp(MatchdayConfig())
    app.catalog.skill("rabona", "Rabona", 400).item("kit", "Club Kit", 150, Currency.FC)
    issues = run_checklist(app)
    messages = [issue.message for issue in issues]
    assert any("Club Kit costs 150 FC" in message for message in messages)
    assert any("No style entries" in message for message in messages)
    assert not any("Rabona" in message for message in messages)
