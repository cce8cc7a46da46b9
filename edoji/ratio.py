# edoji/ratio.py
from __future__ import annotations
import math
from typing import Tuple

def ratio_to_cents(ratio: float) -> float:
    if ratio == 0:
        return -math.inf
    if ratio < 0:
        return math.nan
    return 1200.0 * math.log2(ratio)

def cents_to_ratio(cents: float) -> float:
    return 2.0 ** (cents / 1200.0)

def gcd(a: int, b: int) -> int:
    """Euclid on absolute values; gcd(0, 0) is reported as 1."""
    x, y = abs(int(a)), abs(int(b))
    if x == 0:
        return y or 1
    if y == 0:
        return x
    while y:
        x, y = y, x % y
    return x

def max_prime_factor(n: int) -> int:
    n = abs(int(n))
    if n <= 1:
        return 1
    max_p = 1
    while n % 2 == 0:
        max_p = 2
        n //= 2
    p = 3
    while p * p <= n:
        while n % p == 0:
            max_p = p
            n //= p
        p += 2
    if n > 1:
        max_p = n
    return max_p

def odd_part(n: int) -> int:
    n = abs(int(n))
    if n == 0:
        return 1
    while n % 2 == 0:
        n //= 2
    return n

def tenney_height(n: int, d: int) -> float:
    return math.log2(abs(n)) + math.log2(abs(d))

def approximate_fraction(x: float, max_den: int = 512) -> Tuple[int, int]:
    """Best rational approximation of x by continued-fraction convergents.

    Stops when a convergent is within 1e-12 of x, after 64 terms, or when the
    next denominator would exceed max_den (the previous convergent is kept).
    """
    if not math.isfinite(x):
        raise ValueError(f"Cannot approximate non-finite value {x!r}")
    max_den = max(1, int(max_den))
    h1, k1, h0, k0 = 1, 0, 0, 1
    a = math.floor(x)
    x1 = x
    h, k = a * h1 + h0, a * k1 + k0
    it = 0
    while k <= max_den and abs(x - h / k) > 1e-12 and it < 64:
        rem = x1 - a
        if rem == 0:
            break
        x1 = 1.0 / rem
        a = math.floor(x1)
        h0, k0, h1, k1 = h1, k1, h, k
        h, k = a * h1 + h0, a * k1 + k0
        it += 1
    if k > max_den:
        h, k = h1, k1
    return int(h), int(k)

def cents_to_nearest_simple_fraction(cents: float) -> Tuple[int, int]:
    # local import: period.py depends on this module
    from edoji.period import normalize_into_band
    n0, d0 = approximate_fraction(cents_to_ratio(cents), 512)
    g = gcd(n0, d0)
    return normalize_into_band(n0 // g, d0 // g)

def cents_to_fraction(cents: float) -> Tuple[int, int]:
    """Nearest simple fraction for a cents value of any size, whole octaves kept."""
    if not math.isfinite(cents):
        raise ValueError(f"Cannot approximate non-finite cents {cents!r}")
    octaves = math.floor(cents / 1200.0)
    n, d = approximate_fraction(cents_to_ratio(cents - 1200.0 * octaves), 512)
    if octaves >= 0:
        n *= 2 ** octaves
    else:
        d *= 2 ** -octaves
    g = gcd(n, d)
    return n // g, d // g

def format_fraction(n: int, d: int) -> str:
    return f"{n}/{d}"
