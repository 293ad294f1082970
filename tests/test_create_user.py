from click.testing import CliRunner

from database.user_store import UsernameTaken
from models.user import Role
from users import create_user


def test_create_user_command(monkeypatch):
    calls = []

    async def fake_create(username, password, role):
        calls.append((username, password, role))
        return "652f1c2e9b1e8a0012345678"

    monkeypatch.setattr(create_user, "create_staff_user", fake_create)

    result = CliRunner().invoke(create_user.main, ["asha", "--role", "admin", "--password", "s3cret"])

    assert result.exit_code == 0, result.output
    assert calls == [("asha", "s3cret", Role.ADMIN)]
    assert "Created admin 'asha'" in result.output


def test_create_user_command_reports_duplicates(monkeypatch):
    async def fake_create(username, password, role):
        raise UsernameTaken(username)

    monkeypatch.setattr(create_user, "create_staff_user", fake_create)

    result = CliRunner().invoke(create_user.main, ["asha", "--password", "s3cret"])

    assert result.exit_code == 1
    assert "already exists" in result.output
