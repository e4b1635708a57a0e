import os
from typing import List

DIGEST_LEN = 20


def random_bytes(n: int) -> bytes:
    """Return n cryptographically random bytes."""
    return os.urandom(n)


def random_digests(count: int, length: int = DIGEST_LEN) -> List[bytes]:
    """Generate a list of count independent random digests."""
    if count < 0:
        raise ValueError("Count must be non-negative")
    if length <= 0:
        raise ValueError("Digest length must be positive")

    pool = random_bytes(count * length)
    return [pool[i : i + length] for i in range(0, count * length, length)]
