"""Unit tests for the schemaport CLI."""

import json
import logging
import textwrap

import pytest

from schemaport.cli.__main__ import NO_CHANGES, main

USERS_YAML = textwrap.dedent(
    """
    tables:
      - name: users
        columns:
          - {name: id, type: integer, autoincrement: true}
          - {name: email, type: string, length: 255, nullable: true}
        primary_key: [id]
    """
)

USERS_WITH_NAME_YAML = USERS_YAML + "      - {name: full_name, type: string, length: 50, nullable: true}\n"

RESERVED_YAML = textwrap.dedent(
    """
    tables:
      - name: orders
        columns:
          - {name: id, type: integer}
          - {name: groups, type: integer}
    """
)


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


@pytest.mark.unit
class TestPlatformsCommand:
    """Tests for the platforms command."""

    def test_lists_platforms(self, capsys):
        """Registered platforms are printed one per line."""
        assert main(["platforms"]) == 0
        assert capsys.readouterr().out.splitlines() == ["mysql", "oracle", "postgresql"]


@pytest.mark.unit
class TestCreateSqlCommand:
    """Tests for the create-sql command."""

    def test_statements_terminated(self, tmp_path, capsys):
        """Each statement is printed with a terminating semicolon."""
        schema = _write(tmp_path, "schema.yml", USERS_YAML)

        assert main(["create-sql", schema, "--platform", "postgresql"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "CREATE TABLE users (id INT GENERATED BY DEFAULT AS IDENTITY NOT NULL, "
            "email VARCHAR(255) DEFAULT NULL, PRIMARY KEY(id));"
        ]

    def test_default_platform_from_settings(self, tmp_path, capsys, monkeypatch):
        """Without --platform the configured platform is used."""
        from schemaport.config import get_settings

        monkeypatch.setenv("SCHEMAPORT_PLATFORM", "mysql")
        get_settings.cache_clear()
        schema = _write(tmp_path, "schema.yml", USERS_YAML)

        assert main(["create-sql", schema]) == 0
        assert "AUTO_INCREMENT" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        """Errors are reported on stderr with exit code 2."""
        assert main(["create-sql", str(tmp_path / "missing.yml"), "--platform", "oracle"]) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Schema file not found" in captured.err

    def test_failure_logged_with_command(self, tmp_path, caplog):
        """Failures are logged with the command bound to the record."""
        caplog.set_level(logging.ERROR, logger="schemaport")

        main(["create-sql", str(tmp_path / "missing.yml"), "--platform", "oracle"])

        log_data = json.loads(caplog.records[-1].message)
        assert log_data["event"] == "cli.failed"
        assert log_data["command"] == "create-sql"
        assert "not found" in log_data["error"]

    def test_unknown_platform(self, tmp_path, capsys):
        """Unknown platforms are errors."""
        schema = _write(tmp_path, "schema.yml", USERS_YAML)
        assert main(["create-sql", schema, "--platform", "sybase"]) == 2
        assert "sybase" in capsys.readouterr().err


@pytest.mark.unit
class TestDiffSqlCommand:
    """Tests for the diff-sql command."""

    def test_no_changes(self, tmp_path, capsys):
        """Identical documents print the no-changes marker."""
        old = _write(tmp_path, "old.yml", USERS_YAML)
        new = _write(tmp_path, "new.yml", USERS_YAML)

        assert main(["diff-sql", old, new, "--platform", "oracle"]) == 0
        assert capsys.readouterr().out.strip() == NO_CHANGES

    def test_added_column(self, tmp_path, capsys):
        """Differences print the migrating statements."""
        old = _write(tmp_path, "old.yml", USERS_YAML)
        new = _write(tmp_path, "new.yml", USERS_WITH_NAME_YAML)

        assert main(["diff-sql", old, new, "--platform", "oracle"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "ALTER TABLE users ADD (full_name VARCHAR2(50) DEFAULT NULL NULL);"
        ]


@pytest.mark.unit
class TestReservedWordsCommand:
    """Tests for the reserved-words command."""

    def test_violations_exit_one(self, tmp_path, capsys):
        """Violations are printed and exit with 1."""
        schema = _write(tmp_path, "schema.yml", RESERVED_YAML)

        assert main(["reserved-words", schema, "--list", "mysql"]) == 1
        assert capsys.readouterr().out.splitlines() == [
            "Column 'groups' in table 'orders' is a reserved keyword in: mysql"
        ]

    def test_clean_schema(self, tmp_path, capsys):
        """No violations exit with 0."""
        schema = _write(tmp_path, "schema.yml", RESERVED_YAML)

        assert main(["reserved-words", schema, "--list", "oracle", "postgresql"]) == 0
        assert capsys.readouterr().out == ""

    def test_requires_command(self):
        """A command is required."""
        with pytest.raises(SystemExit):
            main([])
