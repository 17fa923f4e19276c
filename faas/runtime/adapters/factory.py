"""
Adapter factory.

Keeps a registry of platform adapters keyed by platform identifier. Adding a
platform is a registration, not a new branch.
"""

import logging
from typing import Any, Dict, List, Optional

from faas.runtime.adapters.aws import AwsLambdaAdapter
from faas.runtime.adapters.azure import AzureAdapter
from faas.runtime.adapters.base import PlatformAdapter
from faas.runtime.core.context import Context
from faas.runtime.core.exceptions import UnsupportedPlatformError
from faas.runtime.models.http import Request

logger = logging.getLogger("faas.adapters.factory")


class AdapterFactory:
    def __init__(self, adapters: Optional[Dict[str, PlatformAdapter]] = None):
        self._adapters: Dict[str, PlatformAdapter] = dict(adapters or {})

    def register(self, platform: str, adapter: PlatformAdapter) -> None:
        if platform in self._adapters:
            logger.info(f"Replacing adapter for platform {platform}")
        self._adapters[platform] = adapter

    def platforms(self) -> List[str]:
        return sorted(self._adapters)

    def get_adapter(self, platform: str) -> PlatformAdapter:
        adapter = self._adapters.get(platform)
        if adapter is None:
            raise UnsupportedPlatformError(platform)
        return adapter

    def create_context(self, platform: str, native_context: Any) -> Context:
        return self.get_adapter(platform).create_context(native_context)

    def create_request(self, platform: str, native_request: Any) -> Request:
        return self.get_adapter(platform).create_request(native_request)


def create_default_factory() -> AdapterFactory:
    return AdapterFactory({"azure": AzureAdapter(), "aws": AwsLambdaAdapter()})


adapter_factory = create_default_factory()
