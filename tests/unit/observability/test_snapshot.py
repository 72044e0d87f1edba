"""Unit tests for request/response snapshots."""

from __future__ import annotations

import copy
import json
import pickle
from types import SimpleNamespace
from typing import Any

import pytest

from reqlog.host import LifecycleResponse, LifecycleServer
from reqlog.observability.logging import (
    RequestSnapshot,
    ResponseSnapshot,
    as_request_value,
    as_response_value,
    json_default,
)

REQUEST_FIELDS = {"id", "method", "url", "headers", "remote_address", "remote_port"}


def make_request(**extra: Any) -> Any:
    server = LifecycleServer()
    return server.request(
        "get",
        "/users?page=2",
        headers={"host": "example.com", "authorization": "Bearer t0k3n"},
        request_id="req-1",
        remote_address="10.0.0.7",
        remote_port=53211,
        raw={"socket": object(), "secret": "internal"},
        **extra,
    )


# ---------------------------------------------------------------------------
# Request snapshots
# ---------------------------------------------------------------------------


class TestRequestSnapshot:
    def test_fields(self) -> None:
        snap = as_request_value(make_request())
        assert set(snap) == REQUEST_FIELDS
        assert snap["id"] == "req-1"
        assert snap.method == "GET"
        assert snap.url == "/users?page=2"
        assert snap.headers["host"] == "example.com"
        assert snap.remote_address == "10.0.0.7"
        assert snap.remote_port == 53211

    def test_extra_raw_attributes_not_exposed(self) -> None:
        raw = SimpleNamespace(
            id="r", method="POST", url="/", headers={}, raw="raw-handle",
            payload={"password": "x"}, server=object(), internals=[1, 2, 3],
        )
        snap = as_request_value(raw)
        assert set(snap.keys()) == REQUEST_FIELDS
        assert "payload" not in snap
        with pytest.raises(AttributeError):
            snap.payload  # noqa: B018

    def test_missing_connection_fields_default_to_none(self) -> None:
        raw = SimpleNamespace(id="r", method="GET", url="/", headers=None)
        snap = as_request_value(raw)
        assert snap.remote_address is None
        assert snap.remote_port is None
        assert dict(snap.headers) == {}
        assert snap.raw_handle() is None

    def test_raw_only_via_accessor(self) -> None:
        request = make_request()
        snap = as_request_value(request)
        assert snap.raw_handle() is request.raw
        assert request.raw not in list(snap.values())
        assert "raw" not in snap
        assert "_raw" not in snap
        with pytest.raises(AttributeError):
            snap.raw  # noqa: B018

    def test_no_instance_dict(self) -> None:
        snap = as_request_value(make_request())
        with pytest.raises(TypeError):
            vars(snap)

    def test_plain_dict_and_json_exclude_raw(self) -> None:
        snap = as_request_value(make_request())
        as_dict = dict(snap)
        assert set(as_dict) == REQUEST_FIELDS
        rendered = json.loads(json.dumps(snap, default=json_default))
        assert set(rendered) == REQUEST_FIELDS
        assert "internal" not in json.dumps(snap, default=json_default)

    def test_copies_drop_raw_handle(self) -> None:
        snap = as_request_value(make_request())
        for clone in (copy.copy(snap), copy.deepcopy(snap), pickle.loads(pickle.dumps(snap))):
            assert clone == snap
            assert clone.raw_handle() is None

    def test_read_only(self) -> None:
        snap = as_request_value(make_request())
        with pytest.raises(AttributeError):
            snap.method = "POST"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            del snap.method
        with pytest.raises(TypeError):
            snap["method"] = "POST"  # type: ignore[index]
        with pytest.raises(TypeError):
            snap.headers["x"] = "y"  # type: ignore[index]

    def test_headers_are_copied(self) -> None:
        request = make_request()
        snap = as_request_value(request)
        request.headers["late"] = "1"
        assert "late" not in snap.headers

    def test_fresh_instance_per_call(self) -> None:
        request = make_request()
        assert as_request_value(request) is not as_request_value(request)

    def test_repr_omits_raw(self) -> None:
        text = repr(as_request_value(make_request()))
        assert text.startswith("RequestSnapshot(id='req-1'")
        assert "internal" not in text

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(TypeError, match="nope"):
            RequestSnapshot(nope=1)

    def test_missing_key(self) -> None:
        with pytest.raises(KeyError):
            as_request_value(make_request())["payload"]

    def test_defaults(self) -> None:
        snap = RequestSnapshot()
        assert snap.to_dict() == {
            "id": "",
            "method": "",
            "url": "",
            "headers": {},
            "remote_address": None,
            "remote_port": None,
        }


# ---------------------------------------------------------------------------
# Response snapshots
# ---------------------------------------------------------------------------


class TestResponseSnapshot:
    def test_fields(self) -> None:
        response = LifecycleResponse(201, [("content-type", "application/json")])
        snap = as_response_value(response)
        assert set(snap) == {"status_code", "header"}
        assert snap.status_code == 201
        assert snap.header == "HTTP/1.1 201 Created\r\ncontent-type: application/json\r\n\r\n"
        assert snap.raw_handle() is response

    def test_duck_typed_response(self) -> None:
        snap = as_response_value(SimpleNamespace(status_code=204))
        assert snap.to_dict() == {"status_code": 204, "header": ""}

    def test_equality_ignores_raw(self) -> None:
        a = ResponseSnapshot(raw=object(), status_code=200, header="h")
        b = ResponseSnapshot(raw=object(), status_code=200, header="h")
        assert a == b
        assert a == {"status_code": 200, "header": "h"}

    def test_len(self) -> None:
        assert len(ResponseSnapshot()) == 2
