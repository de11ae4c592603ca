from journal.configs.settings import (
    CONFIG_MAP,
    DEFAULT_ERROR_MESSAGE,
    LimiterConfig,
    PasswordConfig,
    engine_kwargs,
    settings,
)

__all__ = [
    "CONFIG_MAP",
    "DEFAULT_ERROR_MESSAGE",
    "LimiterConfig",
    "PasswordConfig",
    "engine_kwargs",
    "settings",
]
