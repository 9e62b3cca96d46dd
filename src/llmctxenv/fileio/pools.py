"""Reusable scratch objects for hashing and copying.

Each pool hands out objects of one fixed shape. A caller holds an object
exclusively between ``acquire()`` and ``release()``; ``lease()`` wraps the
pair so the object goes back on every exit path.
"""

from __future__ import annotations

import hashlib
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import ClassVar, Generic, TypeVar

from ..core import defaults as D

T = TypeVar("T")

DIGEST_SIZE = hashlib.sha256().digest_size
HEX_SIZE = DIGEST_SIZE * 2


class BufferPool(Generic[T]):
    """Thread-safe free list of reusable objects."""

    def __init__(self, factory: Callable[[], T], reset: Callable[[T], None] | None = None):
        """Initialize the pool.

        Args:
            factory: Creates a new object when the pool is empty.
            reset: Optional hook run on every checkout.
        """
        self._factory = factory
        self._reset = reset
        self._free: list[T] = []
        self._lock = threading.Lock()
        self.created = 0

    @property
    def available(self) -> int:
        """Number of idle objects in the pool."""
        with self._lock:
            return len(self._free)

    def acquire(self) -> T:
        """Check out an object, creating one if none is idle."""
        obj: T | None = None
        with self._lock:
            if self._free:
                obj = self._free.pop()
            else:
                self.created += 1
        if obj is None:
            obj = self._factory()
        if self._reset is not None:
            self._reset(obj)
        return obj

    def release(self, obj: T) -> None:
        """Return an object. The caller must not use it afterwards."""
        with self._lock:
            self._free.append(obj)

    @contextmanager
    def lease(self) -> Iterator[T]:
        """Check out an object for the duration of a ``with`` block."""
        obj = self.acquire()
        try:
            yield obj
        finally:
            self.release(obj)


class HashState:
    """Incremental SHA-256 state that can be reset and reused."""

    __slots__ = ("_hash",)

    def __init__(self) -> None:
        self._hash = hashlib.sha256()

    def reset(self) -> None:
        """Return to the empty-input state."""
        self._hash = hashlib.sha256()

    def update(self, data: bytes | bytearray | memoryview) -> None:
        self._hash.update(data)

    def digest_into(self, out: bytearray) -> None:
        """Write the digest into ``out``, which must be DIGEST_SIZE bytes."""
        memoryview(out)[:] = self._hash.digest()


class BufferPools:
    """The four pools used by hashing and copying."""

    _shared: ClassVar[BufferPools | None] = None
    _shared_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, copy_buffer_size: int = D.COPY_BUFFER_SIZE):
        if copy_buffer_size <= 0:
            raise ValueError(f"copy buffer size must be positive: {copy_buffer_size}")
        self.copy_buffer_size = copy_buffer_size
        self.hash_states: BufferPool[HashState] = BufferPool(HashState, reset=HashState.reset)
        self.digests: BufferPool[bytearray] = BufferPool(lambda: bytearray(DIGEST_SIZE))
        self.hex_buffers: BufferPool[bytearray] = BufferPool(lambda: bytearray(HEX_SIZE))
        self.copy_buffers: BufferPool[bytearray] = BufferPool(
            lambda: bytearray(copy_buffer_size)
        )

    @classmethod
    def shared(cls) -> BufferPools:
        """Get the process-wide pools, creating them on first use."""
        if cls._shared is None:
            with cls._shared_lock:
                if cls._shared is None:
                    cls._shared = cls()
        return cls._shared
