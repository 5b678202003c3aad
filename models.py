import secrets
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

import config
from config import MAX_INT, MODULUS, Settings
from mymath import is_prime, random_prime
from obfuscation import Optimus, calc_mod_inverse


class OptimusParameters(BaseModel):
    """
    The secret triple behind an Optimus instance.

    Unlike the Optimus constructor, this model checks the whole triple: prime must be
    an odd prime, random must fit the 31-bit domain and mod_inverse must really be the
    inverse of prime. Leave mod_inverse out to have it calculated.
    Use it when loading or storing parameters; the values are hidden from repr().
    """
    model_config = ConfigDict(frozen=True)

    prime: int = Field(..., ge=0, lt=2**64, repr=False)
    mod_inverse: Optional[int] = Field(None, ge=0, le=MAX_INT, repr=False, validate_default=True)
    random: int = Field(..., ge=0, le=MAX_INT, repr=False)

    @field_validator('prime')
    def validate_prime(cls, v):
        if not is_prime(v):
            raise ValueError("prime must be a prime number")
        if v % 2 == 0:
            raise ValueError("prime must be odd to have an inverse modulo 2**31")
        return v

    @field_validator('mod_inverse')
    def validate_mod_inverse(cls, v, info: ValidationInfo):
        prime = info.data.get('prime')
        if prime is None:
            # prime already failed validation
            return v
        if v is None:
            return calc_mod_inverse(prime)
        if (prime * v) % MODULUS != 1:
            raise ValueError("mod_inverse is not the modular inverse of prime")
        return v

    @classmethod
    def generate(cls) -> "OptimusParameters":
        """Creates a fresh random triple. Store all three values; they are needed to decode."""
        prime = random_prime(config.GENERATED_PRIME_MIN, config.GENERATED_PRIME_MAX)
        return cls(prime=prime, random=secrets.randbelow(MODULUS))

    @classmethod
    def from_optimus(cls, optimus: Optimus) -> "OptimusParameters":
        return cls(prime=optimus.prime, mod_inverse=optimus.mod_inverse, random=optimus.random)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "OptimusParameters":
        settings = settings or config.get_settings()
        return cls(prime=settings.prime, mod_inverse=settings.mod_inverse, random=settings.random)

    def build(self) -> Optimus:
        """Returns an Optimus instance for these parameters."""
        return Optimus(self.prime, self.mod_inverse, self.random)
