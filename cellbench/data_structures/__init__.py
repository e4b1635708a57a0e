from .digest_map import DigestMap
from .digest_set import DigestSet

__all__ = ["DigestMap", "DigestSet"]
