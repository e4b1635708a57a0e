"""
Mathematical Foundation:
- False positive rate: eps = (1 - e^(-k*n/m))^k
- Bit count: m = 2^(floor(log2(n)) + 5), i.e. more than 16 and at most 32 bits
  per element
- Hash functions: k = 4, taken directly from the digest
- For k = 4 and m/n = 32: eps ~= (1 - e^(-1/8))^4 ~= 0.00019;
  at m/n just over 16 the bound grows to about 0.0024
"""

import math
import mmap
import struct
from typing import Union

DIGEST_LEN = 20
NUM_HASHES = 4
BITS_PER_ELEMENT_SHIFT = 5

# four 32-bit words from the front of the digest
WORDS_STRUCT = struct.Struct("<4I")


class DigestSet:
    """
    Bloom filter over fixed-length digests, backed by anonymous mmap storage.

    Digests are already uniformly random, so the k bit positions are read
    straight out of the key instead of being hashed again.
    """

    def __init__(self, max_elements: int):
        """
        Initialize a digest set sized for max_elements entries.

        Args:
            max_elements: Expected number of elements (n)
        """
        if max_elements <= 0:
            raise ValueError("max_elements must be positive")

        self.capacity = max_elements
        self._calculate_parameters()
        self._initialize_storage()
        self._closed = False
        self.inserted_count = 0

    def _calculate_parameters(self):
        """Calculate m (bits) and k (hash functions)."""
        log2_capacity = self.capacity.bit_length() - 1
        self.num_bits = 1 << (log2_capacity + BITS_PER_ELEMENT_SHIFT)
        self.mask = self.num_bits - 1
        self.num_bytes = self.num_bits // 8
        self.num_hashes = NUM_HASHES

        self.actual_false_positive_rate = math.pow(
            1 - math.exp(-self.num_hashes * self.capacity / self.num_bits),
            self.num_hashes,
        )
        self.bits_per_element = self.num_bits / self.capacity

    def _initialize_storage(self):
        """Initialize memory-mapped storage for the bit array."""
        self._mmap = mmap.mmap(-1, self.num_bytes)
        self._memory_view = memoryview(self._mmap)

    @property
    def theoretical_false_positive_rate(self) -> float:
        """False positive bound once max_elements entries have been added."""
        return self.actual_false_positive_rate

    def _get_bit_positions(self, key: Union[bytes, bytearray]) -> tuple:
        """
        Derive k bit positions from the first 4*k bytes of the digest.

        Args:
            key: A DIGEST_LEN-byte digest

        Returns:
            Tuple of k bit positions
        """
        if len(key) != DIGEST_LEN:
            raise ValueError(f"key must be {DIGEST_LEN} bytes, got {len(key)}")
        mask = self.mask
        return tuple(word & mask for word in WORDS_STRUCT.unpack_from(key))

    def _set_bit(self, bit_index: int):
        """Set a bit at the given index to 1."""
        if self._closed:
            raise ValueError("Cannot operate on closed DigestSet")

        self._memory_view[bit_index >> 3] |= 1 << (bit_index & 7)

    def _get_bit(self, bit_index: int) -> bool:
        """Get the value of a bit at the given index."""
        if self._closed:
            raise ValueError("Cannot operate on closed DigestSet")

        return bool((self._memory_view[bit_index >> 3] >> (bit_index & 7)) & 1)

    def add(self, key: Union[bytes, bytearray]):
        """
        Add a digest to the set.

        Args:
            key: The digest to add
        """
        for position in self._get_bit_positions(key):
            self._set_bit(position)

        self.inserted_count += 1

    def contains(self, key: Union[bytes, bytearray]) -> bool:
        """
        Test if a digest might be in the set.

        Returns:
            False if definitely not in set, True if probably in set
        """
        for position in self._get_bit_positions(key):
            if not self._get_bit(position):
                return False

        return True

    def __contains__(self, key: Union[bytes, bytearray]) -> bool:
        """Support 'in' operator."""
        return self.contains(key)

    def close(self):
        """Release the bit array."""
        if self._closed:
            return

        self._closed = True

        # release the memoryview before closing the map it points into
        if hasattr(self, "_memory_view"):
            self._memory_view.release()
            del self._memory_view

        if hasattr(self, "_mmap") and self._mmap:
            self._mmap.close()
            self._mmap = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
