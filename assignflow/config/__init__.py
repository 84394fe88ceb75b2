"""Configuration module for assignflow.

Available Configurations:
- LifecycleConfig: Daily cutoff, business timezone and sweep cadence
"""

from assignflow.config.lifecycle_config import (
    DEFAULT_LIFECYCLE_CONFIG,
    TEST_LIFECYCLE_CONFIG,
    LifecycleConfig,
)

__all__ = [
    "LifecycleConfig",
    "DEFAULT_LIFECYCLE_CONFIG",
    "TEST_LIFECYCLE_CONFIG",
]
