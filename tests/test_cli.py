"""Tests for the command-line interface."""

import json

import yaml
from typer.testing import CliRunner

from gapi_client.cli import app
from gapi_client.transport import RequestsTransport

runner = CliRunner()


def test_apis():
    result = runner.invoke(app, ["apis"])

    assert result.exit_code == 0
    assert "tasks: v1" in result.output
    assert "taskqueue: v1beta2" in result.output


def test_operations():
    result = runner.invoke(app, ["operations", "taskqueue"])

    assert result.exit_code == 0
    assert "taskqueue.tasks.lease\tPOST" in result.output
    assert "[project, taskqueue, numTasks, leaseSecs]" in result.output


def test_operations_unknown_api():
    result = runner.invoke(app, ["operations", "calendar"])

    assert result.exit_code == 1


def test_build():
    result = runner.invoke(app, ["build", "tasks", "tasks.delete", "-p", "tasklist=abc", "-p", "task=123"])

    assert result.exit_code == 0
    request = yaml.safe_load(result.output)
    assert request == {
        "method": "DELETE",
        "url": "https://www.googleapis.com/tasks/v1/lists/abc/tasks/123",
        "query": {},
        "body": None,
    }


def test_build_with_resource(tmp_path):
    resource = tmp_path / "task.yaml"
    resource.write_text("title: x\n")

    result = runner.invoke(
        app, ["build", "tasks", "tasks.insert", "-p", "tasklist=abc", "--resource", str(resource)]
    )

    assert result.exit_code == 0
    request = yaml.safe_load(result.output)
    assert request["method"] == "POST"
    assert request["body"] == {"title": "x"}


def test_build_root_url_from_environment():
    result = runner.invoke(
        app,
        ["build", "tasks", "tasklists.list"],
        env={"GAPI_ROOT_URL": "http://localhost:9000"},
    )

    assert result.exit_code == 0
    assert yaml.safe_load(result.output)["url"] == "http://localhost:9000/tasks/v1/users/@me/lists"


def test_build_missing_parameter():
    result = runner.invoke(app, ["build", "taskqueue", "tasks.lease", "-p", "project=p", "-p", "taskqueue=q"])

    assert result.exit_code == 1
    assert "numTasks, leaseSecs" in result.output


def test_build_invalid_parameter_syntax():
    result = runner.invoke(app, ["build", "tasks", "tasks.delete", "-p", "tasklist"])

    assert result.exit_code == 1
    assert "expected name=value" in result.output


def test_call(monkeypatch):
    seen = []

    def fake_dispatch(self, request, options):
        seen.append((request, options))
        return {"items": []}

    monkeypatch.setattr(RequestsTransport, "dispatch", fake_dispatch)

    result = runner.invoke(
        app, ["call", "tasks", "tasklists.list", "-p", "maxResults=5"], env={"GAPI_ACCESS_TOKEN": "token"}
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {"items": []}
    request, options = seen[0]
    assert request.query == {"maxResults": "5"}
    assert options.access_token == "token"


def test_call_with_config(monkeypatch, tmp_path):
    seen = []

    def fake_dispatch(self, request, options):
        seen.append(options)
        return None

    monkeypatch.setattr(RequestsTransport, "dispatch", fake_dispatch)
    config = tmp_path / "client.yaml"
    config.write_text("api_key: from-file\ntimeout: 3\n")

    result = runner.invoke(app, ["call", "appstate", "states.list", "--config", str(config)])

    assert result.exit_code == 0
    assert seen[0].api_key == "from-file"
    assert seen[0].timeout == 3


def test_convert(tmp_path):
    document = tmp_path / "widgets.yaml"
    document.write_text(
        yaml.safe_dump(
            {
                "name": "widgets",
                "version": "v1",
                "rootUrl": "https://widgets.example.com/",
                "servicePath": "widgets/v1/",
                "resources": {
                    "widgets": {"methods": {"list": {"path": "widgets", "httpMethod": "GET"}}}
                },
            }
        )
    )

    result = runner.invoke(app, ["convert", str(document)])

    assert result.exit_code == 0
    table = yaml.safe_load((tmp_path / "widgets.endpoints.yaml").read_text())
    assert table["endpoints"][0]["url_template"] == "https://widgets.example.com/widgets/v1/widgets"


def test_convert_missing_file(tmp_path):
    result = runner.invoke(app, ["convert", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
