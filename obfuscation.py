"""
Integer obfuscation to prevent sequential scraping of database IDs.

This uses a prime multiplication and XOR to permute integers within a 31-bit space
(Knuth's multiplicative hashing). It is not cryptographically secure but is more than
sufficient to make database IDs appear random and non-sequential.

Keep prime, mod_inverse and random secret and stored together: an encoded ID can only
be decoded with the exact triple that produced it.
"""
import operator
from functools import lru_cache

from pydantic import ValidationError

from config import MAX_INT, MODULUS, get_settings
from core_logic import logger, NotPrimeError, ConfigurationError
from mymath import is_prime, mod_inverse


def calc_mod_inverse(prime: int) -> int:
    """
    Returns the modular inverse of a prime, i.e. x with (prime * x) & MAX_INT == 1.

    The prime is checked again here, so this is safe to call on untrusted input.
    2 is prime but even, so it has no inverse modulo 2**31 and raises NoModInverseError.
    Non-integers raise TypeError.
    """
    prime = operator.index(prime)
    if not is_prime(prime):
        logger.warning("Rejected mod inverse request for a non-prime argument")
        raise NotPrimeError(prime)
    return mod_inverse(prime, MODULUS)


class Optimus:
    """
    Encodes and decodes integers in [0, MAX_INT].

    Instances are immutable and hold no resources, so one instance can be shared freely.
    """

    __slots__ = ("_prime", "_mod_inverse", "_random")

    def __init__(self, prime: int, mod_inverse: int, random: int):
        # Only integers are accepted; floats and strings raise TypeError here, not in encode.
        prime, mod_inverse, random = operator.index(prime), operator.index(mod_inverse), operator.index(random)
        # mod_inverse is trusted as given. A wrong value makes decode return garbage.
        if not is_prime(prime):
            logger.warning("Rejected Optimus parameters: argument provided is not prime")
            raise NotPrimeError(prime)
        object.__setattr__(self, "_prime", prime)
        object.__setattr__(self, "_mod_inverse", mod_inverse)
        object.__setattr__(self, "_random", random)
        logger.debug("Optimus instance created")

    @classmethod
    def calculated(cls, prime: int, random: int) -> "Optimus":
        """Builds an instance, calculating mod_inverse from prime."""
        return cls(prime, calc_mod_inverse(prime), random)

    @property
    def prime(self) -> int:
        return self._prime

    @property
    def mod_inverse(self) -> int:
        return self._mod_inverse

    @property
    def random(self) -> int:
        return self._random

    def encode(self, n: int) -> int:
        """Scrambles n. Callers must keep n within [0, MAX_INT]."""
        return ((n * self._prime) & MAX_INT) ^ self._random

    def decode(self, n: int) -> int:
        """Reverses encode. Only correct with the same parameters that encoded n."""
        return ((n ^ self._random) * self._mod_inverse) & MAX_INT

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if not isinstance(other, Optimus):
            return NotImplemented
        return (self._prime, self._mod_inverse, self._random) == (other._prime, other._mod_inverse, other._random)

    def __hash__(self):
        return hash((self._prime, self._mod_inverse, self._random))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (type(self), (self._prime, self._mod_inverse, self._random))

    def __repr__(self):
        # Never print the secrets.
        return f"{type(self).__name__}(prime=***, mod_inverse=***, random=***)"


# --- DEFAULT INSTANCE ---

@lru_cache()
def get_optimus() -> Optimus:
    """
    Returns a cached, singleton Optimus built from Settings.

    The mod inverse is calculated when OPTIMUS_MOD_INVERSE is not set and checked
    against the prime when it is. Out of range values and a wrong inverse raise
    ConfigurationError.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise ConfigurationError(f"Invalid Optimus settings: {fields}") from None
    if not settings.has_parameters:
        raise ConfigurationError("OPTIMUS_PRIME and OPTIMUS_RANDOM must be set")
    if settings.mod_inverse is None:
        return Optimus.calculated(settings.prime, settings.random)
    optimus = Optimus(settings.prime, settings.mod_inverse, settings.random)
    if (optimus.prime * optimus.mod_inverse) % MODULUS != 1:
        raise ConfigurationError("OPTIMUS_MOD_INVERSE is not the modular inverse of OPTIMUS_PRIME")
    return optimus


def obfuscate(n: int) -> int:
    """Scrambles a sequential integer ID to make it appear random."""
    if not 0 <= n <= MAX_INT:
        raise ValueError("Input ID is out of the valid obfuscation range.")
    return get_optimus().encode(n)


def deobfuscate(n: int) -> int:
    """Reverses the scrambling to retrieve the original sequential ID."""
    if not 0 <= n <= MAX_INT:
        raise ValueError("Input ID is out of the valid obfuscation range.")
    return get_optimus().decode(n)
