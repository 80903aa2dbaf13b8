import os
import sys

import structlog

from nibblecodec.conf import UNITTESTS_SETTINGS_FILEPATH

os.environ['NIBBLECODEC_CONFIG_YAML'] = os.environ.get('NIBBLECODEC_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)

# keep log lines out of stdout, doctests compare everything written there
structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))
