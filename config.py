import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================================
# DOMAIN CONSTANTS
# ============================================================================

# We operate within a 31-bit integer space (positive integers for a 32-bit signed int).
MAX_INT: int = 2**31 - 1

# Power of two, so `x & MAX_INT` is the same as `x % MODULUS`.
MODULUS: int = MAX_INT + 1

# Witness set that makes Miller-Rabin exact below 3.3 * 10**24 (covers every 64-bit value).
MILLER_RABIN_BASES: tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

# Range that generated primes are drawn from. Large primes spread neighbouring IDs further apart.
GENERATED_PRIME_MIN: int = 2**30
GENERATED_PRIME_MAX: int = MAX_INT
MAX_PRIME_SEARCH_ATTEMPTS: int = 10_000

# Logging
LOGGER_NAME: str = "optimus"
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
LOG_MAX_BYTES: int = 10_485_760
LOG_BACKUP_COUNT: int = 5

# ============================================================================
# SETTINGS
# ============================================================================

class Settings(BaseSettings):
    """
    Environment driven settings.

    Every field is read from an ``OPTIMUS_`` prefixed variable (or a local .env file),
    e.g. ``OPTIMUS_PRIME=1580030173``. The three secret parameters are optional so the
    library can be imported without them; only the default engine needs them.
    """
    model_config = SettingsConfigDict(
        env_prefix="OPTIMUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    prime: Optional[int] = Field(None, ge=0, lt=2**64)
    mod_inverse: Optional[int] = Field(None, ge=0, le=MAX_INT)
    random: Optional[int] = Field(None, ge=0, le=MAX_INT)

    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("log_level")
    def validate_log_level(cls, value):
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def has_parameters(self) -> bool:
        """True when at least prime and random are configured."""
        return self.prime is not None and self.random is not None


@lru_cache()
def get_settings() -> Settings:
    """Returns a cached Settings instance. Call get_settings.cache_clear() after changing the environment."""
    return Settings()
