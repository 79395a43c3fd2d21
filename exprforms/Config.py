import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "EXPRFORMS_"


@dataclass(frozen=True)
class Config:
    """
    Front-end settings. The core parser and renderers take no settings;
    the input length bound is enforced by the caller.

    Raises ValueError on a bound below 1 or an unknown logging level, also
    when a field is changed through `dataclasses.replace`.
    """
    max_chars: int = 1000            # longest accepted expression, in characters
    log_level: str = "WARNING"
    show_tree: bool = False          # also print the parse-tree outline

    def __post_init__(self):
        if self.max_chars < 1:
            raise ValueError(f"max_chars must be at least 1, got {self.max_chars}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        env = os.environ if environ is None else environ
        config = cls()

        max_chars = env.get(ENV_PREFIX + "MAX_CHARS")
        if max_chars:
            try:
                limit = int(max_chars)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}MAX_CHARS must be an integer, got {max_chars!r}") from None
            if limit < 1:
                raise ValueError(f"{ENV_PREFIX}MAX_CHARS must be at least 1, got {limit}")
            config = replace(config, max_chars=limit)

        log_level = env.get(ENV_PREFIX + "LOG_LEVEL")
        if log_level:
            if not isinstance(logging.getLevelName(log_level.upper()), int):
                raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be a logging level name, got {log_level!r}")
            config = replace(config, log_level=log_level.upper())
        return config
