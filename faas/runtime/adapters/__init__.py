"""
Platform adapter package.

Translates runtime-native invocation objects into the neutral contract.
"""

from .aws import AwsLambdaAdapter, LambdaContextAdapter
from .azure import AzureAdapter, AzureContextAdapter
from .base import PlatformAdapter
from .factory import AdapterFactory, adapter_factory, create_default_factory

__all__ = [
    "AdapterFactory",
    "AwsLambdaAdapter",
    "AzureAdapter",
    "AzureContextAdapter",
    "LambdaContextAdapter",
    "PlatformAdapter",
    "adapter_factory",
    "create_default_factory",
]
