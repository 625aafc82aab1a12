"""Configuration management for playfit.

Configuration is layered with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (PLAYFIT_*)
3. Policy file (YAML)
4. Default values (lowest priority)

- EnvReader: Testable environment variable reading with DI support
- ConfigBuilder: Layered config construction with explicit precedence
- load_config: Builds the validated PlayfitConfig once at startup
"""

from playfit.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from playfit.config.env import EnvReader
from playfit.config.loader import (
    ConfigError,
    load_config,
    load_policy_file,
)
from playfit.config.models import (
    LoggingConfig,
    PlayfitConfig,
    PolicyConfig,
    ToolPathsConfig,
)

__all__ = [
    # Models
    "LoggingConfig",
    "PlayfitConfig",
    "PolicyConfig",
    "ToolPathsConfig",
    # Loader
    "ConfigError",
    "load_config",
    "load_policy_file",
    # Builder
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
]
