"""
Configuration for the SendSafely action.

Configuration Priority (highest to lowest)
------------------------------------------

1. SENDSAFELY_* / LOG_* environment variables
2. config/config.yaml (with ${VAR} and ${VAR:-default} expansion)
3. Dataclass defaults

See Also
--------

- config.config: Configuration class and loading logic
"""

from config.config import (
    NodeConfig,
    get_config,
    load_config,
    reset_config,
    set_config,
)

__all__ = [
    # Config functions
    "load_config",
    "get_config",
    "set_config",
    "reset_config",
    # Config classes
    "NodeConfig",
]
