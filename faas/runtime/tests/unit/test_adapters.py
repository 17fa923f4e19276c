import base64
import json
import logging
from types import SimpleNamespace
from unittest.mock import MagicMock

import azure.functions as func
import pytest

from faas.runtime.adapters import (
    AdapterFactory,
    AwsLambdaAdapter,
    AzureAdapter,
    AzureContextAdapter,
    LambdaContextAdapter,
    adapter_factory,
)
from faas.runtime.adapters.base import decode_body
from faas.runtime.core.exceptions import UnsupportedPlatformError


class TestAdapterFactory:
    def test_default_factory_knows_azure_and_aws(self):
        assert adapter_factory.platforms() == ["aws", "azure"]

    @pytest.mark.parametrize("platform", ["gcp", "", "AZURE"])
    def test_unsupported_platform_raises(self, platform):
        with pytest.raises(UnsupportedPlatformError, match="Unsupported platform"):
            adapter_factory.create_context(platform, object())
        with pytest.raises(UnsupportedPlatformError, match="Unsupported platform"):
            adapter_factory.create_request(platform, {})

    def test_register_adds_platform(self):
        factory = AdapterFactory()
        adapter = MagicMock()
        adapter.create_request.return_value = "neutral-request"

        factory.register("custom", adapter)

        assert factory.create_request("custom", {"raw": 1}) == "neutral-request"
        adapter.create_request.assert_called_once_with({"raw": 1})


class TestAzureRequestAdapter:
    def test_maps_python_worker_request(self):
        native = func.HttpRequest(
            method="POST",
            url="http://localhost:7071/api/orders",
            headers={"content-type": "application/json"},
            params={"record_id": "42"},
            route_params={"tenant": "acme"},
            body=json.dumps({"name": "widget"}).encode("utf-8"),
        )

        request = adapter_factory.create_request("azure", native)

        assert request.method == "POST"
        assert request.path == "http://localhost:7071/api/orders"
        assert request.body == {"name": "widget"}
        assert request.query == {"record_id": "42"}
        assert request.path_parameters == {"tenant": "acme"}
        assert request.headers["content-type"] == "application/json"

    def test_empty_python_worker_body_is_none(self):
        native = func.HttpRequest(method="GET", url="/api/x", body=b"")

        request = AzureAdapter().create_request(native)

        assert request.body is None
        assert request.query == {}
        assert request.path_parameters == {}

    def test_maps_node_style_mapping(self):
        native = {
            "body": {"a": 1},
            "query": {"q": "x"},
            "headers": {"x-id": "1"},
            "params": {"id": "9"},
            "method": "PUT",
            "url": "/api/items/9",
        }

        request = AzureAdapter().create_request(native)

        assert request.body == {"a": 1}
        assert request.query == {"q": "x"}
        assert request.headers == {"x-id": "1"}
        assert request.path_parameters == {"id": "9"}
        assert request.method == "PUT"
        assert request.path == "/api/items/9"

    def test_missing_mappings_default_to_empty(self):
        request = AzureAdapter().create_request({"method": "GET", "url": "/x"})

        assert request.query == {}
        assert request.headers == {}
        assert request.path_parameters == {}
        assert request.body is None

    def test_non_string_values_pass_through(self):
        request = adapter_factory.create_request(
            "azure", {"headers": {"content-length": 12}, "params": {"id": 5}}
        )

        assert request.headers == {"content-length": 12}
        assert request.path_parameters == {"id": 5}

    def test_none_mappings_default_to_empty(self):
        request = AzureAdapter().create_request(
            {"query": None, "headers": None, "params": None, "method": "GET"}
        )

        assert request.query == {}
        assert request.headers == {}
        assert request.path_parameters == {}


class TestAzureContextAdapter:
    def test_logs_to_sink_with_invocation_id(self, caplog):
        context = AzureContextAdapter(SimpleNamespace(invocation_id="inv-1"))

        with caplog.at_level(logging.DEBUG, logger="faas.adapters.azure"):
            context.log("hello")
            context.log_warning("careful")
            context.log_error(RuntimeError("broken"))

        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert levels == [
            (logging.INFO, "hello"),
            (logging.WARNING, "careful"),
            (logging.ERROR, "broken"),
        ]
        assert all(r.invocation_id == "inv-1" for r in caplog.records)

    def test_forwards_to_node_style_log_channels(self):
        native_log = MagicMock()
        context = AzureContextAdapter(SimpleNamespace(log=native_log))

        context.log("info line")
        context.log_error("error line")
        context.log_warning("warn line")

        native_log.assert_called_once_with("info line")
        native_log.error.assert_called_once_with("error line")
        native_log.warn.assert_called_once_with("warn line")


class TestAwsLambdaAdapter:
    def test_maps_proxy_event(self):
        event = {
            "resource": "/items/{id}",
            "path": "/items/9",
            "httpMethod": "PATCH",
            "headers": {"Content-Type": "application/json"},
            "queryStringParameters": {"verbose": "1"},
            "pathParameters": {"id": "9"},
            "requestContext": {"requestId": "req-1", "identity": {"sourceIp": "1.2.3.4"}},
            "body": '{"title": "new"}',
            "isBase64Encoded": False,
        }

        request = AwsLambdaAdapter().create_request(event)

        assert request.method == "PATCH"
        assert request.path == "/items/9"
        assert request.body == {"title": "new"}
        assert request.query == {"verbose": "1"}
        assert request.path_parameters == {"id": "9"}
        assert request.headers == {"Content-Type": "application/json"}

    def test_null_maps_become_empty(self):
        event = {
            "httpMethod": "GET",
            "path": "/",
            "headers": None,
            "queryStringParameters": None,
            "pathParameters": None,
            "body": None,
        }

        request = adapter_factory.create_request("aws", event)

        assert request.query == {}
        assert request.headers == {}
        assert request.path_parameters == {}
        assert request.body is None

    def test_base64_body_is_decoded(self):
        event = {
            "httpMethod": "POST",
            "path": "/upload",
            "body": base64.b64encode(b"plain text").decode("ascii"),
            "isBase64Encoded": True,
        }

        request = AwsLambdaAdapter().create_request(event)

        assert request.body == "plain text"

    def test_context_tags_aws_request_id(self, caplog):
        context = LambdaContextAdapter(SimpleNamespace(aws_request_id="abc"))

        with caplog.at_level(logging.INFO, logger="faas.adapters.aws"):
            context.log("hi")

        assert caplog.records[0].aws_request_id == "abc"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        (b"", None),
        ("", None),
        (b'{"a": 1}', {"a": 1}),
        ("not json", "not json"),
        (b"\xff\xfe", b"\xff\xfe"),
        ({"already": "parsed"}, {"already": "parsed"}),
    ],
)
def test_decode_body(raw, expected):
    assert decode_body(raw) == expected
