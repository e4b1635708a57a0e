from .cipher import CipherContext
from .rand import DIGEST_LEN, random_bytes, random_digests

__all__ = [
    "CipherContext",
    "DIGEST_LEN",
    "random_bytes",
    "random_digests",
]
