"""CLI tests for the diff and action subcommands."""

import json
import sys

import pytest

from schemaguard import cli


OLD = """
type Query {
  user(id: ID!): User
}

type User {
  id: ID!
  email: String
}
"""

DANGEROUS = """
type Query {
  user(id: ID!, locale: String): User
}

type User {
  id: ID!
  email: String
}
"""

BREAKING = """
type Query {
  user(id: ID!): User
}

type User {
  id: ID!
}
"""

ACTION_ENV = (
    "INPUT_BASE_REF",
    "INPUT_SCHEMA",
    "INPUT_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "GITHUB_OUTPUT",
    "GITHUB_WORKSPACE",
)


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["schemaguard"] + args)
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    return excinfo.value.code


@pytest.fixture
def clean_env(monkeypatch):
    for name in ACTION_ENV:
        monkeypatch.delenv(name, raising=False)


def test_diff_no_changes_exits_zero(write_schema, monkeypatch, capsys):
    old_path = write_schema("old.graphql", OLD)
    code = _run_cli(["diff", str(old_path), str(old_path)], monkeypatch)
    out = capsys.readouterr().out
    assert code == 0
    assert "GraphQL Schema Change Detection" in out
    assert "No breaking or dangerous changes detected!" in out
    # captured stdout is not a terminal
    assert "\x1b[" not in out


def test_diff_dangerous_only_exits_zero(write_schema, monkeypatch, capsys):
    old_path = write_schema("old.graphql", OLD)
    new_path = write_schema("new.graphql", DANGEROUS)
    code = _run_cli(["diff", str(old_path), str(new_path)], monkeypatch)
    out = capsys.readouterr().out
    assert code == 0
    assert "Dangerous Changes (1):" in out
    assert "Breaking Changes" not in out
    assert "Type: OPTIONAL_ARG_ADDED" in out


def test_diff_breaking_exits_one(write_schema, monkeypatch, capsys):
    old_path = write_schema("old.graphql", OLD)
    new_path = write_schema("new.graphql", BREAKING)
    code = _run_cli(["diff", str(old_path), str(new_path)], monkeypatch)
    out = capsys.readouterr().out
    assert code == 1
    assert "Breaking Changes (1):" in out
    assert "1. `User.email` removed from schema" in out
    assert "Resource: User.email" in out
    assert "Location: 7:3" in out
    assert f"Comparing: {old_path} → {new_path}" in out


def test_diff_json_format(write_schema, monkeypatch, capsys):
    old_path = write_schema("old.graphql", OLD)
    new_path = write_schema("new.graphql", BREAKING)
    code = _run_cli(["diff", str(old_path), str(new_path), "--format", "json"], monkeypatch)
    data = json.loads(capsys.readouterr().out)
    assert code == 1
    assert data["dangerousChanges"] == []
    assert data["breakingChanges"][0]["resourceName"] == "User.email"


def test_diff_quiet_prints_nothing(write_schema, monkeypatch, capsys):
    old_path = write_schema("old.graphql", OLD)
    new_path = write_schema("new.graphql", BREAKING)
    code = _run_cli(["diff", "--quiet", str(old_path), str(new_path)], monkeypatch)
    assert code == 1
    assert capsys.readouterr().out == ""


def test_diff_missing_file(tmp_path, write_schema, monkeypatch, capsys):
    new_path = write_schema("new.graphql", OLD)
    missing = tmp_path / "missing.graphql"
    code = _run_cli(["diff", str(missing), str(new_path)], monkeypatch)
    err = capsys.readouterr().err
    assert code == 1
    assert "Error reading from schema file" in err
    assert str(missing) in err


def test_diff_invalid_sdl(write_schema, monkeypatch, capsys):
    old_path = write_schema("old.graphql", "type Query {")
    new_path = write_schema("new.graphql", OLD)
    code = _run_cli(["diff", str(old_path), str(new_path)], monkeypatch)
    err = capsys.readouterr().err
    assert code == 1
    assert "Error analyzing schemas:" in err
    assert "Syntax Error" in err


def test_no_command_prints_help(monkeypatch, capsys):
    code = _run_cli([], monkeypatch)
    assert code == 1
    assert "usage: schemaguard" in capsys.readouterr().out


def test_action_missing_inputs(clean_env, monkeypatch, capsys):
    code = _run_cli(["action"], monkeypatch)
    out = capsys.readouterr().out
    assert code == 1
    assert out.startswith("::error::Input required and not supplied: base_ref, schema_path, repository")


def test_action_invalid_repository(clean_env, monkeypatch, capsys):
    code = _run_cli(
        ["action", "--base-ref", "main", "--schema", "schema.graphql", "--repository", "nope"],
        monkeypatch,
    )
    out = capsys.readouterr().out
    assert code == 1
    assert out.startswith("::error::Invalid action settings")


def test_action_runs_with_flags(clean_env, tmp_path, monkeypatch, capsys):
    (tmp_path / "schema.graphql").write_text(BREAKING, encoding="utf-8")
    monkeypatch.setenv("GITHUB_WORKSPACE", str(tmp_path))
    requested = []

    class FakeSource:
        def __init__(self, repository, token=None, api_url=None):
            requested.append((repository, token, api_url))

        def fetch(self, path, ref):
            return OLD

    monkeypatch.setattr("schemaguard.action.GitHubContentSource", FakeSource)
    code = _run_cli(
        [
            "action",
            "--base-ref", "main",
            "--schema", "schema.graphql",
            "--repository", "acme/api",
            "--token", "t0ken",
        ],
        monkeypatch,
    )
    out = capsys.readouterr().out
    assert code == 1
    assert requested == [("acme/api", "t0ken", "https://api.github.com")]
    assert "Found 1 breaking change\n" in out
    assert "::error::Found 1 breaking change in GraphQL schema" in out
