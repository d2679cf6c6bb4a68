"""
config.py — Runtime settings for trio_loader, read from the environment.

Every setting has a default, so nothing needs to be exported to run the demo.
"""

import os
from dataclasses import dataclass

DEFAULT_IMAGE_URL = "https://picsum.photos/200"
DEFAULT_TIMEOUT_S = 10.0
DEFAULT_TITLE_DELAY_S = 2.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class LoaderConfig:
    image_url: str = DEFAULT_IMAGE_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    title_delay_s: float = DEFAULT_TITLE_DELAY_S
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ=None):
        """Build a config from TRIO_LOADER_* variables (os.environ by default)."""
        env = os.environ if environ is None else environ
        return cls(
            image_url=env.get("TRIO_LOADER_IMAGE_URL", DEFAULT_IMAGE_URL).strip(),
            timeout_s=float(env.get("TRIO_LOADER_TIMEOUT_S", DEFAULT_TIMEOUT_S)),
            title_delay_s=float(env.get("TRIO_LOADER_TITLE_DELAY_S", DEFAULT_TITLE_DELAY_S)),
            log_level=env.get("TRIO_LOADER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
