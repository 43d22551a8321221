"""Source of randomness for synthetic analytics data.

Everything the service generates goes through the narrow ``RandomSource``
interface so tests can swap in a seeded generator. Each request gets its own
``PseudoRandomSource`` instance; nothing is shared between calls.
"""

import random
import string
from typing import Protocol

TOKEN_ALPHABET = string.ascii_letters + string.digits

_URL_WORDS = [
    "acme",
    "blog",
    "cloud",
    "data",
    "docs",
    "example",
    "garden",
    "launch",
    "market",
    "news",
    "pixel",
    "shop",
    "studio",
    "travel",
    "week",
]

_URL_TLDS = ["com", "net", "org", "io", "dev", "info"]

_URL_PATHS = ["", "about", "blog", "pricing", "docs", "features", "signup"]


class RandomSource(Protocol):
    """Capability for producing random values."""

    def randint(self, low: int, high: int) -> int:
        """Return a uniformly distributed integer in ``[low, high]``."""
        ...

    def token(self, length: int) -> str:
        """Return a random alphanumeric string of ``length`` characters."""
        ...

    def url(self) -> str:
        """Return a random, plausible-looking URL."""
        ...


class PseudoRandomSource:
    """``RandomSource`` backed by a private ``random.Random`` instance.

    Passing ``seed`` makes the output reproducible; without it the generator
    is seeded from OS entropy.
    """

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        if low > high:
            raise ValueError(f"low ({low}) must not exceed high ({high})")
        return self._rng.randint(low, high)

    def token(self, length: int) -> str:
        if length < 0:
            raise ValueError("length must be non-negative")
        return "".join(self._rng.choices(TOKEN_ALPHABET, k=length))

    def url(self) -> str:
        scheme = self._rng.choice(["https", "http"])
        subdomain = self._rng.choice(["www.", ""])
        host = "-".join(self._rng.sample(_URL_WORDS, k=self._rng.randint(1, 2)))
        tld = self._rng.choice(_URL_TLDS)
        path = self._rng.choice(_URL_PATHS)
        return f"{scheme}://{subdomain}{host}.{tld}/{path}"
