"""Tests for the user-api command line tools."""

import pytest
from typer.testing import CliRunner

from src.user_api import cli
from src.user_api.core.services import DbSessionService
from src.user_api.entities.core.user import UserRepository

runner = CliRunner()


@pytest.fixture
def database_service(monkeypatch):
    """One in-memory database shared by every command in a test."""
    service = DbSessionService()
    monkeypatch.setattr(cli, "DbSessionService", lambda: service)
    try:
        yield service
    finally:
        service.dispose()


@pytest.fixture
def stored_user(database_service):
    result = runner.invoke(cli.app, ["init-db"])
    assert result.exit_code == 0, result.output

    with database_service.session_scope() as session:
        created = UserRepository(session).create(
            {"name": "Ada", "email": "ada@example.com", "password": "x" * 60, "age": 36}
        )
    assert created.ok
    return created.value


class TestInitDb:
    def test_creates_tables(self, database_service):
        result = runner.invoke(cli.app, ["init-db"])

        assert result.exit_code == 0
        assert "Database ready" in result.output

    def test_drop_requires_confirmation(self, stored_user, database_service):
        result = runner.invoke(cli.app, ["init-db", "--drop"], input="n\n")

        assert result.exit_code != 0
        with database_service.session_scope() as session:
            assert UserRepository(session).find_by_id(stored_user.id).ok

    def test_drop_recreates_empty_tables(self, stored_user, database_service):
        result = runner.invoke(cli.app, ["init-db", "--drop"], input="y\n")

        assert result.exit_code == 0
        with database_service.session_scope() as session:
            assert UserRepository(session).list(1, 10).value.total == 0


class TestUsersCommands:
    def test_list_empty(self, database_service):
        runner.invoke(cli.app, ["init-db"])

        result = runner.invoke(cli.app, ["users", "list"])

        assert result.exit_code == 0
        assert "No users found" in result.output

    def test_list_shows_users(self, stored_user):
        result = runner.invoke(cli.app, ["users", "list"])

        assert result.exit_code == 0
        assert "Ada" in result.output

    def test_list_without_tables_fails(self, database_service):
        result = runner.invoke(cli.app, ["users", "list"])

        assert result.exit_code == 1
        assert "Database error occurred while listing users" in result.output

    def test_show(self, stored_user):
        result = runner.invoke(cli.app, ["users", "show", stored_user.id])

        assert result.exit_code == 0
        assert "ada@example.com" in result.output
        assert "password" not in result.output

    def test_show_missing(self, stored_user):
        result = runner.invoke(cli.app, ["users", "show", "missing"])

        assert result.exit_code == 1
        assert "User with ID missing not found" in result.output
