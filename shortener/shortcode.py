"""Short code generation utilities."""

import random
import string
import hashlib
from typing import Optional


STRATEGIES = ("random", "hash")


class ShortCodeGenerator:
    """Generate candidate short codes for URLs.

    The generator never checks the store: a candidate may already be taken,
    and it is up to the store to detect the collision and ask for another one.
    """

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, default_length: int = 7, alphabet: Optional[str] = None, strategy: str = "random"):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            alphabet: Characters to draw codes from (base62 if not specified)
            strategy: "random" draws every candidate at random, "hash" derives
                it from the URL salted with the attempt number

        Raises:
            ValueError: If the length or alphabet cannot produce distinct codes,
                or the strategy is unknown
        """
        alphabet = alphabet or self.BASE62_CHARS
        if default_length < 1:
            raise ValueError(f"Code length must be positive (given: {default_length})")
        if len(set(alphabet)) < 2:
            raise ValueError(f"Alphabet must have at least 2 distinct characters (given: {alphabet!r})")
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown code strategy {strategy!r} (expected one of {', '.join(STRATEGIES)})")

        self.default_length = default_length
        self.alphabet = alphabet
        self.strategy = strategy
        self._random = random.SystemRandom()

    def generate(self, original_url: str = "", attempt: int = 1) -> str:
        """Generate the candidate code for one create attempt.

        Args:
            original_url: The URL being shortened
            attempt: 1-based attempt number within one create call
        """
        if self.strategy == "hash":
            return self.generate_from_url(original_url, salt=str(attempt))
        return self.generate_random()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self._random.choices(self.alphabet, k=length))

    def generate_from_url(self, url: str, salt: str = "", length: Optional[int] = None) -> str:
        """Generate short code from a hash of the URL and a salt.

        The same URL and salt always give the same code, so callers pass a
        different salt (e.g. the attempt number) to get a new candidate.

        Args:
            url: The URL to hash
            salt: Disambiguating salt mixed into the hash
            length: Length of the code (uses default if not specified)

        Returns:
            Short code based on URL hash
        """
        length = length or self.default_length

        url_hash = hashlib.sha256(f"{url}{salt}".encode()).hexdigest()
        code = self._int_to_base(int(url_hash, 16))

        # Pad short encodings so every code has the requested length
        return code[:length].rjust(length, self.alphabet[0])

    def keyspace_size(self, length: Optional[int] = None) -> int:
        """Number of distinct codes of the given length."""
        length = length or self.default_length
        return len(self.alphabet) ** length

    def _int_to_base(self, num: int) -> str:
        """Convert integer to a string in the generator's alphabet."""
        if num == 0:
            return self.alphabet[0]

        result = []
        base = len(self.alphabet)

        while num > 0:
            num, remainder = divmod(num, base)
            result.append(self.alphabet[remainder])

        return ''.join(reversed(result))
