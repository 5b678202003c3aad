"""
Number theory helpers: Miller-Rabin primality and modular inverses.
"""
import operator
import secrets
from typing import Tuple

from config import MILLER_RABIN_BASES, MAX_PRIME_SEARCH_ATTEMPTS
from core_logic import NoModInverseError


def is_prime(n: int) -> bool:
    """
    Miller-Rabin primality test.

    With the fixed witness set from config the answer is exact for every
    n < 3.3 * 10**24, which includes every unsigned 64-bit value.
    Non-integers raise TypeError.
    """
    n = operator.index(n)
    if n < 2:
        return False
    for p in MILLER_RABIN_BASES:
        if n % p == 0:
            return n == p

    # n - 1 = d * 2**s with d odd
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for a in MILLER_RABIN_BASES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """Returns (g, x, y) such that a*x + b*y == g == gcd(a, b)."""
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
        old_y, y = y, old_y - q * y
    return old_r, old_x, old_y


def mod_inverse(a: int, m: int) -> int:
    """
    Returns x in [0, m) with (a * x) % m == 1.
    Raises NoModInverseError when a and m are not coprime.
    """
    g, x, _ = extended_gcd(a % m, m)
    if g != 1:
        raise NoModInverseError(a)
    return x % m


def random_prime(lower: int, upper: int, max_attempts: int = MAX_PRIME_SEARCH_ATTEMPTS) -> int:
    """Picks a random odd prime in [lower, upper] using the secrets module."""
    lower = max(lower, 3)
    if upper < lower:
        raise ValueError("Empty range for prime search")
    for _ in range(max_attempts):
        candidate = (lower + secrets.randbelow(upper - lower + 1)) | 1
        if candidate <= upper and is_prime(candidate):
            return candidate
    raise ValueError(f"No prime found in [{lower}, {upper}] after {max_attempts} attempts")
