from collections import namedtuple

import numpy as np

from pairheap import config
from pairheap.logger import init_logger

logger = init_logger(__name__)


class Handle(namedtuple("Handle", "index generation")):
    """
    Opaque, stable name for one element stored in a heap.
    The generation is bumped each time a slot is released, so a handle kept past the
    removal of its element never names the element that later reuses the slot.
    Handle.UNDEF is the reserved "no such handle" value.
    """

    __slots__ = ()

    def __repr__(self):
        if self.index < 0:
            return "Handle(UNDEF)"
        return "Handle(%d:%d)" % (self.index, self.generation)


Handle.UNDEF = Handle(-1, -1)


class Arena:
    """
    Dense slotted storage with O(1) put/take and handle-stable addressing.
    Values sit in a preallocated list; liveness and generation stamps are kept in numpy arrays
    alongside it. Released slots are reused most-recent-first; storage never shrinks.
    """

    def __init__(self, capacity=None):
        """
        Initialise an empty arena.
        :param capacity: number of slots to preallocate (default config.ARENA_INITIAL_CAPACITY)
        """
        if capacity is None:
            capacity = config.ARENA_INITIAL_CAPACITY
        assert capacity > 0, "Arena capacity must be positive"
        self._values = [None for _ in range(capacity)]
        self._live = np.zeros(capacity, dtype=bool)
        self._generations = np.zeros(capacity, dtype=np.int64)
        self._free = []
        self._used = 0  # high-water mark of slots ever handed out
        self._count = 0

    def __len__(self):
        """
        The number of live values.
        :return: count of values put and not yet taken
        """
        return self._count

    def __contains__(self, handle):
        return self.index(handle) is not None

    def capacity(self):
        """
        Number of slots currently allocated (live, free or never used)
        :return: slot count
        """
        return len(self._values)

    def _grow(self):
        capacity = len(self._values)
        self._values.extend(None for _ in range(capacity))
        self._live = np.concatenate((self._live, np.zeros(capacity, dtype=bool)))
        self._generations = np.concatenate((self._generations, np.zeros(capacity, dtype=np.int64)))
        logger.debug(f"Arena grown from {capacity} to {2 * capacity} slots")

    def put(self, value):
        """
        Store a value in a free slot
        :param value: anything
        :return: the Handle naming the slot
        """
        if self._free:
            index = self._free.pop()
        else:
            if self._used == len(self._values):
                self._grow()
            index = self._used
            self._used += 1
        self._values[index] = value
        self._live[index] = True
        self._count += 1
        return Handle(index, int(self._generations[index]))

    def index(self, handle):
        """
        Resolve a handle to its slot index.
        :param handle: a Handle
        :return: the index, or None if the handle is the sentinel, out of range, or stale
        """
        index = handle.index
        if index < 0 or index >= self._used:
            return None
        if not self._live[index] or self._generations[index] != handle.generation:
            return None
        return index

    def handle(self, index):
        """
        The current handle of a live slot
        :param index: slot index
        :return: Handle
        """
        assert self._live[index], "No live value at index " + str(index)
        return Handle(index, int(self._generations[index]))

    def get(self, handle):
        """
        Retrieve the value named by a handle
        :param handle: a Handle
        :return: the value, or None if the handle does not name a live value
        """
        index = self.index(handle)
        if index is None:
            return None
        return self._values[index]

    def get_unchecked(self, index):
        """Raw read of a slot; no bounds or liveness check."""
        return self._values[index]

    def set_unchecked(self, index, value):
        """Raw overwrite of a live slot; no bounds or liveness check."""
        self._values[index] = value

    def take(self, handle):
        """
        Remove the value named by a handle; the slot becomes reusable and the handle stale.
        :param handle: a live Handle
        :return: the removed value
        """
        index = self.index(handle)
        assert index is not None, "Cannot take a value for a stale handle " + repr(handle)
        return self.take_unchecked(index)

    def take_unchecked(self, index):
        value = self._values[index]
        self._values[index] = None
        self._live[index] = False
        self._generations[index] += 1
        self._free.append(index)
        self._count -= 1
        return value

    def live_indices(self):
        """
        Indices of all live slots, in storage order
        :return: numpy array of ints
        """
        return np.flatnonzero(self._live[: self._used])

    def values(self):
        for index in self.live_indices():
            yield self._values[index]

    def items(self):
        for index in self.live_indices():
            yield Handle(int(index), int(self._generations[index])), self._values[index]

    def copy(self, copy_value=None):
        """
        Copy the arena, keeping every slot index and generation.
        :param copy_value: optional function applied to each live value (default: share values)
        :return: new Arena
        """
        other = Arena.__new__(Arena)
        other._values = list(self._values)
        if copy_value is not None:
            for index in self.live_indices():
                other._values[index] = copy_value(self._values[index])
        other._live = self._live.copy()
        other._generations = self._generations.copy()
        other._free = list(self._free)
        other._used = self._used
        other._count = self._count
        return other
