"""Constants used across agentstamp.

Internal policy values that are not user-configurable.
"""

# Checkpoint tool
DEFAULT_TOOL_BINARY = "git-ai"
DEFAULT_MIN_TOOL_VERSION = "1.0.23"
VERSION_ARGS = ("version",)
CHECKPOINT_ARGS = ("checkpoint", "agent-v1", "--hook-input", "stdin")

# Bounded waits on the external tool (seconds)
PROBE_TIMEOUT_S = 5.0
CHECKPOINT_TIMEOUT_S = 30.0

# Stack rendering
DEFAULT_MAX_STACK_FRAMES = 50
NO_RELEVANT_FRAMES = "  (no relevant frames detected)"
UNKNOWN_SOURCE = "Unknown Source"

# Attribution
GENERIC_AGENT_NAME = "Unknown AI Assistant (generic pattern)"
GENERIC_TYPE_FRAGMENTS = ("completion", "inlay", "inline", "suggestion")

# Environment
CONFIG_PATH_ENV = "AGENTSTAMP_CONFIG"
TOOL_BINARY_ENV = "AGENTSTAMP_TOOL_BINARY"
LOG_LEVEL_ENV = "AGENTSTAMP_LOG_LEVEL"
DEFAULT_CONFIG_PATH = "~/.agentstamp/agentstamp.yml"
