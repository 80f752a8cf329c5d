"""Tests for typed per-operation parameter structs."""

import pytest

from gapi_client import InvalidParameterError, MissingParameterError, load_api
from gapi_client.parameters import model_name, params_model, parse_params, to_bag

TASKS = load_api("tasks", "v1")
TASKQUEUE = load_api("taskqueue", "v1beta2")


def test_model_name():
    assert model_name(TASKS.endpoints["tasks.tasks.delete"]) == "TasksTasksDeleteParams"


def test_model_name_keeps_camel_case():
    endpoint = load_api("doubleclicksearch", "v2").endpoints["doubleclicksearch.savedColumns.list"]

    assert model_name(endpoint) == "DoubleclicksearchSavedColumnsListParams"


def test_required_fields_are_required():
    model = params_model(TASKS.endpoints["tasks.tasks.delete"])

    assert model.model_fields["tasklist"].is_required()
    assert model.model_fields["task"].is_required()
    assert not model.model_fields["fields"].is_required()
    assert "resource" not in model.model_fields


def test_body_operations_have_resource_field():
    model = params_model(TASKS.endpoints["tasks.tasks.insert"])

    assert "resource" in model.model_fields
    assert not model.model_fields["resource"].is_required()


def test_parse_reports_all_missing_fields():
    model = params_model(TASKQUEUE.endpoints["taskqueue.tasks.lease"])

    with pytest.raises(MissingParameterError) as excinfo:
        parse_params(model, {"project": "p"})

    assert excinfo.value.missing == ["taskqueue", "numTasks", "leaseSecs"]


def test_parse_converts_types():
    model = params_model(TASKQUEUE.endpoints["taskqueue.tasks.lease"])
    params = parse_params(
        model, {"project": "p", "taskqueue": "q", "numTasks": "5", "leaseSecs": 30, "groupByTag": "true"}
    )

    assert params.numTasks == 5
    assert params.groupByTag is True


def test_parse_rejects_invalid_types():
    model = params_model(TASKQUEUE.endpoints["taskqueue.tasks.lease"])

    with pytest.raises(InvalidParameterError):
        parse_params(model, {"project": "p", "taskqueue": "q", "numTasks": "many", "leaseSecs": 30})


def test_numbers_are_accepted_for_string_fields():
    model = params_model(TASKS.endpoints["tasks.tasks.get"])
    params = parse_params(model, {"tasklist": 12, "task": 34})

    assert params.tasklist == "12"


def test_extra_fields_pass_through():
    model = params_model(TASKS.endpoints["tasks.tasks.get"])
    params = parse_params(model, {"tasklist": "l", "task": "t", "customQuery": "x"})

    assert to_bag(params) == {"tasklist": "l", "task": "t", "customQuery": "x"}


def test_to_bag_copies_mappings():
    original = {"tasklist": "l"}
    bag = to_bag(original)
    bag["task"] = "t"

    assert original == {"tasklist": "l"}
    assert to_bag(None) == {}


def test_typed_struct_dispatch(service_factory, transport):
    service = service_factory("tasks")
    params = service.tasks.insert.parse(tasklist="abc", resource={"title": "x"}, parent="p1")

    handle = service.tasks.insert(params)
    assert handle.result(timeout=5) == {"kind": "ok"}

    request = transport.calls[0][0]
    assert request.url == "https://www.googleapis.com/tasks/v1/lists/abc/tasks"
    assert request.body == {"title": "x"}
    assert request.query == {"parent": "p1"}


def test_operation_parse_missing(service_factory):
    service = service_factory("tasks")

    with pytest.raises(MissingParameterError) as excinfo:
        service.tasks.move.parse(parent="p1")

    assert excinfo.value.missing == ["tasklist", "task"]
