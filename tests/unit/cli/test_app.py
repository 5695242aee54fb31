"""Tests for the gatekeep CLI commands."""

import pytest
from typer.testing import CliRunner

from gatekeep.cli import app as cli_module
from gatekeep.cli.app import (
    EXIT_BAD_CONFIG,
    EXIT_REJECTED,
    EXIT_STORE_UNAVAILABLE,
    app,
)

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    # basicConfig would bind handlers to CliRunner's temporary streams
    monkeypatch.setattr(cli_module, "_configure_logging", lambda level: None)


@pytest.fixture
def sqlite_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_BACKEND", "sqlite")
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "cli.db"))
    monkeypatch.setenv("PASSWORD_HASH_ROUNDS", "4")
    return tmp_path


@pytest.fixture
def initialized_db(sqlite_env):
    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 0, result.output
    return sqlite_env


def _register(username="alice", email="alice@example.com", password="secure_pass"):
    return runner.invoke(
        app,
        ["register", "--username", username, "--email", email],
        input=f"{password}\n{password}\n",
    )


class TestDatabaseCommands:
    def test_init_db(self, sqlite_env):
        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database initialized successfully!" in result.output
        assert (sqlite_env / "cli.db").exists()

    def test_drop_db_asks_for_confirmation(self, initialized_db):
        result = runner.invoke(app, ["drop-db"], input="n\n")

        assert result.exit_code != 0
        assert "Credential tables dropped" not in result.output

    def test_drop_db_force(self, initialized_db):
        result = runner.invoke(app, ["drop-db", "--force"])

        assert result.exit_code == 0
        assert "Credential tables dropped" in result.output

    def test_invalid_configuration_exits(self, monkeypatch):
        monkeypatch.setenv("DATABASE_BACKEND", "postgresql")
        monkeypatch.delenv("POSTGRES_PASSWORD", raising=False)

        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == EXIT_BAD_CONFIG
        assert "Invalid configuration" in result.output


class TestRegisterCommand:
    def test_register_success(self, initialized_db):
        result = _register()

        assert result.exit_code == 0
        assert "User registered successfully!" in result.output
        assert "Welcome, alice! Registration successful." in result.output

    def test_register_duplicate(self, initialized_db):
        _register()

        result = _register(email="other@example.com")

        assert result.exit_code == EXIT_REJECTED
        assert "Username or Email already taken." in result.output

    def test_register_invalid_fields(self, initialized_db):
        result = _register(username="bad name", email="nope", password="short")

        assert result.exit_code == EXIT_REJECTED
        assert "Username can only contain letters, numbers and underscores" in (
            result.output
        )
        assert "Please enter a valid email address" in result.output
        assert "Password must be 8-255 characters" in result.output


class TestLoginCommand:
    def test_login_with_username_and_email(self, initialized_db):
        _register()

        by_username = runner.invoke(app, ["login", "alice"], input="secure_pass\n")
        by_email = runner.invoke(
            app, ["login", "alice@example.com"], input="secure_pass\n"
        )

        assert by_username.exit_code == 0
        assert "Welcome back, alice!" in by_username.output
        assert by_email.exit_code == 0
        assert "Welcome back, alice!" in by_email.output

    @pytest.mark.parametrize(
        ("identifier", "password"),
        [("alice", "wrong_pass"), ("nobody", "secure_pass")],
    )
    def test_login_failures_share_one_message(
        self, initialized_db, identifier, password
    ):
        _register()

        result = runner.invoke(app, ["login", identifier], input=f"{password}\n")

        assert result.exit_code == EXIT_REJECTED
        assert "Invalid username/email or password." in result.output

    def test_login_store_unavailable(self, sqlite_env, monkeypatch):
        monkeypatch.setenv("SQLITE_PATH", str(sqlite_env / "missing" / "cli.db"))

        result = runner.invoke(app, ["login", "alice"], input="secure_pass\n")

        assert result.exit_code == EXIT_STORE_UNAVAILABLE
        assert "Credential store is unavailable" in result.output


class TestPasswordNeverOnCommandLine:
    @pytest.mark.parametrize(
        "args",
        [
            ["register", "--username", "alice", "--email", "alice@example.com"],
            ["login", "alice"],
        ],
    )
    def test_password_option_is_rejected(self, initialized_db, args):
        result = runner.invoke(app, [*args, "--password", "secure_pass"])

        assert result.exit_code == 2
        assert "Welcome" not in result.output

    def test_prompted_password_is_not_echoed(self, initialized_db):
        result = _register()

        assert result.exit_code == 0
        assert "secure_pass" not in result.output


class TestShellCommand:
    def test_signup_then_login(self, initialized_db):
        result = runner.invoke(
            app,
            ["shell"],
            input=(
                "signup\nalice\nalice@example.com\nsecure_pass\n"
                "login\nalice\nsecure_pass\n"
            ),
        )

        assert result.exit_code == 0
        assert "Welcome to the Login/Signup System" in result.output
        assert "Welcome, alice! Registration successful." in result.output
        assert "Welcome back, alice!" in result.output

    def test_reprompts_invalid_fields(self, initialized_db):
        result = runner.invoke(
            app,
            ["shell"],
            input="signup\nbad name\nalice\nnope\nalice@example.com\nshort\n"
            "secure_pass\nexit\n",
        )

        assert result.exit_code == 0
        assert "Username can only contain letters" in result.output
        assert "Please enter a valid email address" in result.output
        assert "Password must be 8-255 characters" in result.output
        assert "User registered successfully!" in result.output
        assert "Goodbye!" in result.output

    def test_unknown_option_and_failed_login_keep_looping(self, initialized_db):
        result = runner.invoke(
            app,
            ["shell"],
            input="dance\nlogin\nnobody\nsecure_pass\nexit\n",
        )

        assert result.exit_code == 0
        assert "Invalid option. Please try again." in result.output
        assert "Invalid username/email or password." in result.output
        assert "Goodbye!" in result.output


class TestBenchmarkCommand:
    def test_benchmark_reports_timings(self):
        result = runner.invoke(app, ["benchmark", "--rounds", "4", "--samples", "1"])

        assert result.exit_code == 0
        assert "bcrypt cost 4" in result.output
        assert "verify (avg)" in result.output

    def test_benchmark_rejects_invalid_rounds(self):
        result = runner.invoke(app, ["benchmark", "--rounds", "3"])

        assert result.exit_code != 0
