import json

import httpx
import pytest
import respx

from faas.runtime.services.pod_service import (
    FieldFilter,
    FilterCondition,
    PodAuth,
    PodCriteriaBuilder,
    PodCriteriaService,
    PodService,
    PodUrlData,
)


class TestPodCriteriaBuilder:
    def test_build_full_criteria(self):
        criteria = (
            PodCriteriaBuilder()
            .add_filter("status", "$eq", "open")
            .add_filter("status", "$neq", "archived")
            .add_field("id")
            .add_field("id")
            .add_field("title")
            .set_sort("created", "desc")
            .set_pagination(20, 2)
            .build()
        )

        assert criteria == {
            "filters": {"status": [["$eq", "open"], ["$neq", "archived"]]},
            "fields": ["id", "title"],
            "sort": {"created": "desc"},
            "paginate": {"items": 20, "page": 2},
        }

    def test_build_returns_a_copy(self):
        builder = PodCriteriaBuilder().add_filter("a", "$eq", 1)
        built = builder.build()
        built["filters"]["a"].append(["$eq", 2])

        assert builder.build() == {"filters": {"a": [["$eq", 1]]}}

    def test_add_multiple_filters_and_reset(self):
        builder = PodCriteriaBuilder().add_multiple_filters(
            "name",
            [FilterCondition(operator="$text", value="acme"), FilterCondition(operator="$neq", value="")],
        )

        assert builder.build()["filters"]["name"] == [["$text", "acme"], ["$neq", ""]]
        assert builder.reset().build() == {}

    def test_to_json_is_compact(self):
        assert PodCriteriaBuilder().set_fields(["a"]).to_json() == '{"fields":["a"]}'


class TestPodCriteriaService:
    def test_create_simple_criteria(self):
        criteria = PodCriteriaService().create_simple_criteria(
            filters=[FieldFilter(field="id", operator="$eq", value=7)],
            fields=["id"],
            sort=("id", "asc"),
            pagination=(10, 1),
        )

        assert criteria == {
            "filters": {"id": [["$eq", 7]]},
            "fields": ["id"],
            "sort": {"id": "asc"},
            "paginate": {"items": 10, "page": 1},
        }

    @pytest.mark.parametrize(
        "payload",
        [
            "not json",
            '{"filters": {"a": "x"}}',
            '{"filters": {"a": [["$eq"]]}}',
            '{"filters": {"a": [["$like", 1]]}}',
            '{"sort": {"a": "up"}}',
        ],
    )
    def test_parse_criteria_rejects_invalid(self, payload):
        assert PodCriteriaService().parse_criteria(payload) is None

    def test_parse_criteria_accepts_valid(self):
        payload = '{"filters": {"a": [["$eq", 1]]}, "sort": {"a": "asc"}}'

        assert PodCriteriaService().parse_criteria(payload) == json.loads(payload)


class TestPodService:
    def test_base_url_and_bearer_auth(self):
        service = PodService(
            "pod-1", PodUrlData(namespace="acme"), PodAuth(type="bearerToken", value="t0k")
        )

        assert service.base_url == "https://service.acme.coreb.app"
        assert service.default_request_headers == {"Authorization": "Bearer t0k"}
        assert service.default_request_params == {}

    def test_query_key_auth_and_custom_domain(self):
        service = PodService(
            "pod-1",
            PodUrlData(namespace="acme", domain="example.org"),
            PodAuth(type="queryKey", value="k"),
        )

        assert service.base_url == "https://service.acme.example.org"
        assert service.default_request_params == {"key": "k"}

    def test_affected_record_criteria(self):
        service = PodService("p", PodUrlData(namespace="n"), PodAuth(type="queryKey", value="k"))

        criteria = service.get_affected_record_criteria(
            [FieldFilter(field="id", operator="$eq", value=3)]
        )

        assert criteria == '({"filters":{"id":[["$eq",3]]}})'

    def test_push_data_file(self):
        service = PodService("p", PodUrlData(namespace="n"), PodAuth(type="queryKey", value="k"))

        field = service.get_push_data_file("a,b", "export.csv")

        assert field.filename == "export.csv"
        assert field.value == b"a,b"
        assert field.content_type == "text/csv"

    @pytest.mark.asyncio
    @respx.mock
    async def test_push_posts_multipart_with_record_id(self):
        route = respx.post(host="service.acme.coreb.app", path="/v1/external/pod/pod-9").mock(
            return_value=httpx.Response(200, json={"pushed": True})
        )
        service = PodService(
            "pod-9",
            PodUrlData(namespace="acme"),
            PodAuth(type="queryKey", value="secret"),
        )

        response = await service.push(
            "(rec)", {"note": "hi", "file": service.get_push_data_file("x", "a.txt")}
        )

        request = route.calls.last.request
        assert response.data == {"pushed": True}
        assert dict(request.url.params) == {"key": "secret", "$record_id": "(rec)"}
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'filename="a.txt"' in request.content
