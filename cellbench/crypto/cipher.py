"""
AES-128 in counter mode with a zero IV.

A CipherContext keeps one running keystream: successive encrypt/crypt_inplace
calls continue where the previous call stopped, so a stream can be processed
in pieces of any size.
"""

from typing import Optional

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .rand import random_bytes


class CipherContext:
    """Stream cipher context over AES-128-CTR."""

    KEY_LEN = 16
    IV_LEN = 16

    def __init__(self, key: Optional[bytes] = None):
        """
        Create a cipher context.

        Args:
            key: Optional 16-byte key. Call generate_key() or set_key() later
                 if omitted.
        """
        self._key: Optional[bytes] = None
        self._ctx = None
        self._closed = False
        if key is not None:
            self.set_key(key)

    @property
    def key(self) -> Optional[bytes]:
        return self._key

    def generate_key(self) -> bytes:
        """Pick a fresh random key."""
        self.set_key(random_bytes(self.KEY_LEN))
        return self._key

    def set_key(self, key: bytes):
        if self._closed:
            raise ValueError("Cannot operate on closed CipherContext")
        if len(key) != self.KEY_LEN:
            raise ValueError(f"Key must be {self.KEY_LEN} bytes, got {len(key)}")
        self._key = bytes(key)
        self._ctx = None

    def _make_cipher(self) -> Cipher:
        if self._closed:
            raise ValueError("Cannot operate on closed CipherContext")
        if self._key is None:
            raise ValueError("No key set; call generate_key() or set_key() first")
        return Cipher(algorithms.AES(self._key), modes.CTR(b"\x00" * self.IV_LEN))

    def init_encrypt(self):
        """Start a new keystream for encryption."""
        self._ctx = self._make_cipher().encryptor()

    def init_decrypt(self):
        """Start a new keystream for decryption."""
        self._ctx = self._make_cipher().decryptor()

    def _require_ctx(self):
        if self._closed:
            raise ValueError("Cannot operate on closed CipherContext")
        if self._ctx is None:
            raise ValueError("Cipher not initialized; call init_encrypt() first")
        return self._ctx

    def encrypt(self, src, dst, length: Optional[int] = None):
        """
        Encrypt length bytes of src into dst.

        Args:
            src: Bytes-like input
            dst: Writable buffer of at least length bytes
            length: Number of bytes to process (defaults to len(src))
        """
        ctx = self._require_ctx()
        if length is None:
            length = len(src)
        if length > len(src) or length > len(dst):
            raise ValueError(f"Buffers too small for {length} bytes")
        dst[:length] = ctx.update(memoryview(src)[:length])

    # CTR mode: decryption applies the same keystream.
    decrypt = encrypt

    def crypt_inplace(self, buf):
        """Encrypt a writable buffer in place."""
        ctx = self._require_ctx()
        buf[:] = ctx.update(buf)

    def close(self):
        """Release the cipher state."""
        if self._closed:
            return
        self._closed = True
        if self._ctx is not None:
            self._ctx.finalize()
            self._ctx = None
        self._key = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @classmethod
    def for_encryption(cls) -> "CipherContext":
        """Create a context with a fresh key, ready to encrypt."""
        ctx = cls()
        ctx.generate_key()
        ctx.init_encrypt()
        return ctx
