"""agentstamp logging configuration.

agentstamp uses the shared InstruktAI logging standard (`instrukt_ai_logging`).
Logs are written to the canonical per-app location
(`$XDG_STATE_HOME/instrukt-ai/agentstamp/agentstamp.log`).
Example log query: `instrukt-ai-logs agentstamp --since 10m`.
"""

from __future__ import annotations

import os
from typing import Optional

from instrukt_ai_logging import configure_logging

from agentstamp.constants import LOG_LEVEL_ENV


def setup_logging(level: Optional[str] = None) -> None:
    """Configure agentstamp logging.

    Args:
        level: Optional override for `AGENTSTAMP_LOG_LEVEL`.
    """
    if level:
        os.environ[LOG_LEVEL_ENV] = level.upper()

    configure_logging("agentstamp")
