import os

import structlog

from nanoserde.conf import CONFIG_YAML_ENV_VAR, UNITTESTS_SETTINGS_FILEPATH
from nanoserde.utils.logging import LoggingOutput, setup_logging

os.environ[CONFIG_YAML_ENV_VAR] = os.environ.get('NANOSERDE_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)

setup_logging(logging_output=LoggingOutput.NULL)
# capture_logs() only sees loggers that are not cached
structlog.configure(cache_logger_on_first_use=False)
