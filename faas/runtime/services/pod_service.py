"""
Record store ("pod") client.

Builds filter/sort/paginate criteria and pushes multipart data to a pod,
keyed by the affected record.
"""

import copy
import json
import logging
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel

from faas.runtime.config import config
from faas.runtime.services.http_service import (
    FormDataField,
    HttpRequestConfig,
    HttpResponse,
    HttpService,
    get_file_mime_type,
)

logger = logging.getLogger("faas.pod_service")

FilterOperator = Literal["$eq", "$neq", "$text"]
SortOrder = Literal["asc", "desc"]
FilterValue = Union[str, int, float, bool]

VALID_OPERATORS = ("$eq", "$neq", "$text")
VALID_SORT_ORDERS = ("asc", "desc")


class FilterCondition(BaseModel):
    operator: FilterOperator
    value: FilterValue


class FieldFilter(BaseModel):
    field: str
    operator: FilterOperator
    value: Any


class PodAuth(BaseModel):
    type: Literal["queryKey", "bearerToken"]
    value: str


class PodUrlData(BaseModel):
    namespace: str
    domain: Optional[str] = None


class PodCriteriaBuilder:
    def __init__(self):
        self.criteria: Dict[str, Any] = {}

    def add_filter(self, field: str, operator: str, value: FilterValue) -> "PodCriteriaBuilder":
        filters = self.criteria.setdefault("filters", {})
        filters.setdefault(field, []).append([operator, value])
        return self

    def add_multiple_filters(
        self, field: str, conditions: List[FilterCondition]
    ) -> "PodCriteriaBuilder":
        for condition in conditions:
            self.add_filter(field, condition.operator, condition.value)
        return self

    def set_fields(self, fields: List[str]) -> "PodCriteriaBuilder":
        self.criteria["fields"] = list(fields)
        return self

    def add_field(self, field: str) -> "PodCriteriaBuilder":
        fields = self.criteria.setdefault("fields", [])
        if field not in fields:
            fields.append(field)
        return self

    def set_sort(self, field: str, order: str) -> "PodCriteriaBuilder":
        self.criteria.setdefault("sort", {})[field] = order
        return self

    def add_sort(self, field: str, order: str) -> "PodCriteriaBuilder":
        return self.set_sort(field, order)

    def set_pagination(self, items: int, page: int) -> "PodCriteriaBuilder":
        self.criteria["paginate"] = {"items": items, "page": page}
        return self

    def reset(self) -> "PodCriteriaBuilder":
        self.criteria = {}
        return self

    def build(self) -> Dict[str, Any]:
        return copy.deepcopy(self.criteria)

    def to_json(self) -> str:
        return json.dumps(self.criteria, separators=(",", ":"))


class PodCriteriaService:
    def create_criteria(self) -> PodCriteriaBuilder:
        return PodCriteriaBuilder()

    def create_simple_criteria(
        self,
        filters: Optional[List[FieldFilter]] = None,
        fields: Optional[List[str]] = None,
        sort: Optional[Tuple[str, str]] = None,
        pagination: Optional[Tuple[int, int]] = None,
    ) -> Dict[str, Any]:
        builder = PodCriteriaBuilder()
        for item in filters or []:
            builder.add_filter(item.field, item.operator, item.value)
        if fields:
            builder.set_fields(fields)
        if sort:
            builder.set_sort(*sort)
        if pagination:
            builder.set_pagination(*pagination)
        return builder.build()

    @staticmethod
    def is_valid_operator(operator: Any) -> bool:
        return operator in VALID_OPERATORS

    @staticmethod
    def is_valid_sort_order(order: Any) -> bool:
        return order in VALID_SORT_ORDERS

    def parse_criteria(self, criteria_json: str) -> Optional[Dict[str, Any]]:
        """Parse a JSON criteria string; None when it is malformed."""
        try:
            parsed = json.loads(criteria_json)
        except (TypeError, json.JSONDecodeError):
            return None
        if not isinstance(parsed, dict):
            return None

        for conditions in (parsed.get("filters") or {}).values():
            if not isinstance(conditions, list):
                return None
            for condition in conditions:
                if not isinstance(condition, list) or len(condition) != 2:
                    return None
                if not self.is_valid_operator(condition[0]):
                    return None

        for order in (parsed.get("sort") or {}).values():
            if not self.is_valid_sort_order(order):
                return None

        return parsed


class PodService:
    def __init__(
        self,
        pod_id: str,
        url: PodUrlData,
        auth: PodAuth,
        http_service: Optional[HttpService] = None,
    ):
        self.id = pod_id
        domain = url.domain or config.RECORD_STORE_DOMAIN
        self.base_url = f"https://service.{url.namespace}.{domain}"

        self.default_request_params: Dict[str, str] = {}
        self.default_request_headers: Dict[str, str] = {}
        if auth.type == "queryKey":
            self.default_request_params["key"] = auth.value
        elif auth.type == "bearerToken":
            self.default_request_headers["Authorization"] = f"Bearer {auth.value}"

        self.http_service = http_service or HttpService(self.base_url)

    def get_affected_record_criteria(self, filters: List[FieldFilter]) -> str:
        builder = PodCriteriaService().create_criteria()
        for item in filters:
            builder.add_filter(item.field, item.operator, item.value)
        return f"({builder.to_json()})"

    def get_push_data_file(self, content: Union[str, bytes], filename: str) -> FormDataField:
        _, dot, extension = filename.rpartition(".")
        data = content.encode("utf-8") if isinstance(content, str) else content
        return FormDataField(
            value=data,
            filename=filename,
            content_type=get_file_mime_type(extension if dot else ""),
        )

    async def push(self, affected_record: str, data: Dict[str, Any]) -> HttpResponse:
        params = dict(self.default_request_params)
        params["$record_id"] = affected_record
        logger.info(f"Pushing {len(data)} field(s) to pod {self.id}")
        return await self.http_service.post(
            f"/v1/external/pod/{self.id}",
            data,
            HttpRequestConfig(
                params=params,
                headers=dict(self.default_request_headers),
                content_type="form-data",
            ),
        )
