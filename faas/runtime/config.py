"""
Runtime configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from pydantic import Field
from faas.common.core.config import BaseAppConfig


class RuntimeConfig(BaseAppConfig):
    """
    Configuration for the processor runtime.
    """

    # Processor selection
    DEPLOY_PROCESSOR: str = Field(default="", description="Name of the processor to run")
    PROCESSOR_PACKAGE: str = Field(
        default="processor", description="Package holding <name>/src/main processor modules"
    )

    # Outbound collaborators
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0, description="Default outbound HTTP timeout (seconds)"
    )
    RECORD_STORE_DOMAIN: str = Field(default="coreb.app", description="Record store base domain")


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = RuntimeConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
