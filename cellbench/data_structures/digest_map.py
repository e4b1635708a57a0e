# In-memory hash map keyed by fixed-length (20-byte) digests.
# Uses open addressing with linear probing over an anonymous mmap of packed
# slots; values live in a parallel list indexed by slot.

import mmap
import struct
from typing import Any, Tuple

import mmh3

DIGEST_LEN = 20
SLOT_SIZE = 32  # bytes
MAX_LOAD = 0.5
MIN_SLOTS_POWER = 3

# slot format: flag(1), pad(3), fingerprint(8), key_bytes(20)
SLOT_STRUCT = struct.Struct("<B 3x Q 20s")

FLAG_EMPTY = 0
FLAG_OCCUPIED = 1
FLAG_TOMBSTONE = 2


def digest_hash(key: bytes, seed: int = 0) -> int:
    """64-bit MurmurHash3 of a digest."""
    return mmh3.hash64(key, seed=seed, signed=False)[0]


class DigestMap:
    def __init__(self, num_slots_power: int = 4, seed: int = 0):
        """
        num_slots_power: start with 2**num_slots_power slots (must be >= 3)
        seed: hash seed
        """
        if num_slots_power < MIN_SLOTS_POWER:
            raise ValueError(f"num_slots_power must be >= {MIN_SLOTS_POWER}")
        self.seed = seed
        self.slot_size = SLOT_SIZE
        self._closed = False
        self._allocate(1 << num_slots_power)

    def _allocate(self, num_slots: int):
        self.num_slots = num_slots
        self.capacity_mask = num_slots - 1
        self.mm = mmap.mmap(-1, num_slots * self.slot_size)
        self.values = [None] * num_slots
        self.count = 0
        self.tombstones = 0

    def _slot_offset(self, idx: int) -> int:
        return (idx & self.capacity_mask) * self.slot_size

    def _read_slot(self, idx: int) -> Tuple[int, int, bytes]:
        return SLOT_STRUCT.unpack_from(self.mm, self._slot_offset(idx))

    def _write_slot(self, idx: int, flag: int, fingerprint: int, key: bytes):
        SLOT_STRUCT.pack_into(self.mm, self._slot_offset(idx), flag, fingerprint, key)

    def _check_key(self, key: bytes) -> bytes:
        if self._closed:
            raise ValueError("Cannot operate on closed DigestMap")
        if len(key) != DIGEST_LEN:
            raise ValueError(f"key must be {DIGEST_LEN} bytes, got {len(key)}")
        return bytes(key)

    def _find(self, kb: bytes, fp: int) -> int:
        """Return the slot holding kb, or -1."""
        start = idx = fp & self.capacity_mask
        while True:
            flag, slot_fp, slot_kb = self._read_slot(idx)
            if flag == FLAG_EMPTY:
                return -1
            if flag == FLAG_OCCUPIED and slot_fp == fp and slot_kb == kb:
                return idx
            idx = (idx + 1) & self.capacity_mask
            if idx == start:
                # table full and no match
                return -1

    def _grow(self):
        old_mm, old_values, old_slots = self.mm, self.values, self.num_slots
        self._allocate(old_slots * 2)
        for idx in range(old_slots):
            flag, fp, kb = SLOT_STRUCT.unpack_from(old_mm, idx * self.slot_size)
            if flag == FLAG_OCCUPIED:
                self._insert_new(kb, fp, old_values[idx])
        old_mm.close()

    def _insert_new(self, kb: bytes, fp: int, value: Any):
        start = idx = fp & self.capacity_mask
        while True:
            flag, _, _ = self._read_slot(idx)
            if flag != FLAG_OCCUPIED:
                if flag == FLAG_TOMBSTONE:
                    self.tombstones -= 1
                self._write_slot(idx, FLAG_OCCUPIED, fp, kb)
                self.values[idx] = value
                self.count += 1
                return
            idx = (idx + 1) & self.capacity_mask
            if idx == start:
                raise RuntimeError("Hash table is full; need resize")

    def get(self, key: bytes, default: Any = None) -> Any:
        kb = self._check_key(key)
        idx = self._find(kb, digest_hash(kb, self.seed))
        if idx < 0:
            return default
        return self.values[idx]

    def set(self, key: bytes, value: Any) -> Any:
        """
        Map key to value. Return the previous value, or None if key was new.
        """
        kb = self._check_key(key)
        fp = digest_hash(kb, self.seed)
        idx = self._find(kb, fp)
        if idx >= 0:
            old = self.values[idx]
            self.values[idx] = value
            return old

        if self.count + self.tombstones + 1 > self.num_slots * MAX_LOAD:
            self._grow()
        self._insert_new(kb, fp, value)
        return None

    def remove(self, key: bytes) -> Any:
        """Remove key. Return its value, or None if it was absent."""
        kb = self._check_key(key)
        fp = digest_hash(kb, self.seed)
        idx = self._find(kb, fp)
        if idx < 0:
            return None
        old = self.values[idx]
        # keep the fingerprint and key so probe chains stay intact
        self._write_slot(idx, FLAG_TOMBSTONE, fp, kb)
        self.values[idx] = None
        self.count -= 1
        self.tombstones += 1
        return old

    def __contains__(self, key: bytes) -> bool:
        kb = self._check_key(key)
        return self._find(kb, digest_hash(kb, self.seed)) >= 0

    def __len__(self) -> int:
        return self.count

    def close(self):
        if self._closed:
            return
        self._closed = True
        self.mm.close()
        self.values = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
