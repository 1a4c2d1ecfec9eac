"""Tests for the management CLI dispatch and the schema helpers."""

from contextlib import contextmanager
from types import SimpleNamespace

import manage
import pytest
from marketplace.utils.db import drop_db, setup_db
from sqlalchemy import Column, Integer, MetaData, Table, create_engine, inspect


class TestCommandDispatch:
    def test_create_admin_arguments(self, monkeypatch):
        calls = []
        monkeypatch.setattr(manage, "create_admin", lambda *args: calls.append(args))
        monkeypatch.setattr(
            "sys.argv",
            ["manage.py", "create-admin", "--name", "Root", "--email", "root@welw.ao", "--password", "admin-secret"],
        )

        manage.main()

        assert calls == [("Root", "root@welw.ao", "admin-secret")]

    @pytest.mark.parametrize(
        "command, target",
        [("setup-db", "setup_databases"), ("drop-db", "drop_databases")],
    )
    def test_schema_commands(self, monkeypatch, command, target):
        calls = []
        monkeypatch.setattr(manage, target, lambda: calls.append(command))
        monkeypatch.setattr("sys.argv", ["manage.py", command])

        manage.main()

        assert calls == [command]

    def test_a_command_is_required(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["manage.py"])
        with pytest.raises(SystemExit):
            manage.main()


def _sql_domain(database_uri):
    """A stand-in domain with one SQL provider whose metadata holds a single table."""
    metadata = MetaData()
    Table("orders", metadata, Column("id", Integer, primary_key=True))
    provider = SimpleNamespace(
        name="default",
        conn_info={"provider": "sqlite", "database_uri": database_uri},
        _metadata=metadata,
    )

    @contextmanager
    def domain_context():
        yield

    return SimpleNamespace(
        providers={"default": provider},
        registry=SimpleNamespace(aggregates={}, entities={}),
        domain_context=domain_context,
    )


class TestSchemaHelpers:
    def test_memory_provider_is_left_alone(self):
        from marketplace.domain import marketplace

        assert setup_db(marketplace) == []
        assert drop_db(marketplace) == []

    def test_setup_and_drop_on_sqlite(self, tmp_path):
        database_uri = f"sqlite:///{tmp_path / 'welwexpress.db'}"
        domain = _sql_domain(database_uri)
        engine = create_engine(database_uri)

        assert setup_db(domain) == ["default"]
        assert "orders" in inspect(engine).get_table_names()

        assert drop_db(domain) == ["default"]
        assert "orders" not in inspect(engine).get_table_names()
