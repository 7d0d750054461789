"""
stackctl Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Default Server Configuration
DEFAULT_SCHEME = "https://"
DEFAULT_TIMEOUT = 30
API_KEY_HEADER = "X-API-Key"

# Environment variable names (process env or .env file)
ENV_SERVER_URL = "STACKCTL_SERVER_URL"
ENV_TOKEN = "STACKCTL_TOKEN"
ENV_SKIP_TLS_VERIFY = "STACKCTL_SKIP_TLS_VERIFY"
ENV_TIMEOUT = "STACKCTL_TIMEOUT"
ENV_EDGE_MARKERS = "STACKCTL_EDGE_MARKERS"
ENV_READ_ONLY = "STACKCTL_READ_ONLY"
ENV_LOG_DIR = "STACKCTL_LOG_DIR"

TRUTHY_VALUES = {"1", "true", "yes", "on"}
FALSY_VALUES = {"0", "false", "no", "off", ""}

# Regular stack REST surface
REGULAR_STACKS_PATH = "/api/stacks"
REGULAR_STACK_PATH = "/api/stacks/{stack_id}"
REGULAR_STACK_FILE_PATH = "/api/stacks/{stack_id}/file"

# Edge stack REST surface
EDGE_STACKS_PATH = "/api/edge_stacks"
EDGE_STACK_PATH = "/api/edge_stacks/{stack_id}"
EDGE_STACK_FILE_PATH = "/api/edge_stacks/{stack_id}/file"
EDGE_STACK_CREATE_PATH = "/api/edge_stacks/create/string"
EDGE_DEPLOYMENT_TYPE_COMPOSE = 0

# Free-text hints the server returns when a regular-stack call hits an edge stack.
# v1: observed in stack update and inspect responses.
EDGE_STACK_MARKERS_VERSION = 1
EDGE_STACK_MARKERS = ("edgestackupdate", "edge stack")

# Local files
CONFIG_DIR_NAME = ".stackctl"
ENV_FILE_NAME = ".env"
LOG_DIR_NAME = "logs"

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"
RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
