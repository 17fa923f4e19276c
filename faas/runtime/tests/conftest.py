import os
from pathlib import Path

import pytest

# Config is loaded at import time, so set the environment at the top level.
os.environ.setdefault("PROCESSOR_PACKAGE", "faas.runtime.tests.fixtures.processor")
os.environ.setdefault("DEPLOY_PROCESSOR", "echo")
os.environ["LOGGING_CONFIG_PATH"] = str(Path(__file__).parent / "missing-logging.yml")

from faas.runtime.core.context import Context  # noqa: E402

FIXTURE_PACKAGE = "faas.runtime.tests.fixtures.processor"


class RecordingContext(Context):
    """Context that keeps every line it is given, per channel."""

    def __init__(self):
        self.infos = []
        self.errors = []
        self.warnings = []

    def log(self, message):
        self.infos.append(message)

    def log_error(self, error):
        self.errors.append(str(error))

    def log_warning(self, message):
        self.warnings.append(message)


@pytest.fixture
def recording_context():
    return RecordingContext()
