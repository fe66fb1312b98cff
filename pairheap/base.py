from abc import ABC, abstractmethod

from pairheap import config
from pairheap.arena import Handle
from pairheap.errors import DecreaseKeyOutOfOrder
from pairheap.logger import init_logger

logger = init_logger(__name__)


class ElemRef:
    """
    Mutable reference to the payload stored under a handle.
    Reading or assigning ``ref.value`` goes through the heap, so the reference stays correct
    while the element moves around the heap topology.
    """

    __slots__ = ("_heap", "handle")

    def __init__(self, heap, handle):
        self._heap = heap
        self.handle = handle

    @property
    def value(self):
        return self._heap[self.handle]

    @value.setter
    def value(self, elem):
        self._heap[self.handle] = elem

    def __repr__(self):
        return "ElemRef(%r, %r)" % (self.handle, self.value)


class PairingHeap(ABC):
    """
    Addressable pairing heap: a min-priority queue where insert returns a Handle that stays
    valid until its element is extracted.

    Subclasses decide how nodes record their neighbourhood (list of children, or sibling
    rings); this class holds everything that only needs keys, elements and root links:
    the public API, the min anchor, the pairing passes and the value iterators.
    Handles are local to one heap instance.
    """

    def __init__(self, items=(), two_pass=None, check=None):
        """
        Initialise a heap.
        :param items: optional iterable of (elem, key) pairs to insert
        :param two_pass: meld pairing-pass winners into one tree on extract-min (default config.TWO_PASS)
        :param check: validate all invariants after every mutation (default config.CHECK_INVARIANTS)
        """
        self._two_pass = config.TWO_PASS if two_pass is None else two_pass
        self._check = config.CHECK_INVARIANTS if check is None else check
        self._min = None  # index of the minimum root, None when empty
        self._version = 0
        for elem, key in items:
            self.insert(elem, key)

    # Layout-specific primitives, all in terms of arena indices

    @abstractmethod
    def __len__(self):
        pass

    @abstractmethod
    def _put(self, elem, key):
        """Allocate a detached node; return its Handle."""

    @abstractmethod
    def _lookup(self, handle):
        """Arena index for a live handle, else None."""

    @abstractmethod
    def _handle_at(self, index):
        pass

    @abstractmethod
    def _live_indices(self):
        pass

    @abstractmethod
    def _key_at(self, index):
        pass

    @abstractmethod
    def _set_key(self, index, key):
        pass

    @abstractmethod
    def _elem_at(self, index):
        pass

    @abstractmethod
    def _set_elem(self, index, elem):
        pass

    @abstractmethod
    def _is_root(self, index):
        pass

    @abstractmethod
    def _insert_root(self, index):
        """Publish a detached node into the root set and run min-update."""

    @abstractmethod
    def _cut(self, index):
        """Detach a child from its parent and publish it as a root."""

    @abstractmethod
    def _link(self, upper, lower):
        """Attach the detached root ``lower`` as a child of ``upper``."""

    @abstractmethod
    def _remove_min(self):
        """Unlink the minimum, pair the remaining roots, release its storage and return its element."""

    @abstractmethod
    def validate(self):
        """Assert every structural invariant of the heap; O(n)."""

    @abstractmethod
    def copy(self):
        pass

    def __copy__(self):
        return self.copy()

    # Shared machinery

    def _update_min(self, index):
        if self._min is None or self._key_at(index) < self._key_at(self._min):
            self._min = index

    def _union(self, fst, snd):
        """Link the root with the larger key under the other; ties go to fst. Return the winner."""
        assert fst != snd, "cannot union a root with itself"
        if self._key_at(snd) < self._key_at(fst):
            fst, snd = snd, fst
        self._link(fst, snd)
        return fst

    def _pair(self, roots):
        """
        Pairing passes over a list of detached roots.
        First pass unions adjacent pairs left to right; an odd leftover passes through.
        With two_pass, the winners are then melded right to left into a single tree.
        :param roots: list of detached root indices
        :return: list of resulting root indices (not yet published)
        """
        winners = [self._union(roots[i], roots[i + 1]) for i in range(0, len(roots) - 1, 2)]
        if len(roots) % 2:
            winners.append(roots[-1])
        if self._two_pass and winners:
            tree = winners.pop()
            while winners:
                tree = self._union(winners.pop(), tree)
            winners.append(tree)
        return winners

    def _mutated(self):
        self._version += 1
        if self._check:
            self.validate()

    # Public API

    def __repr__(self):
        return "%s(%d elements)" % (type(self).__name__, len(self))

    def __contains__(self, handle):
        return self._lookup(handle) is not None

    def is_empty(self):
        return len(self) == 0

    def insert(self, elem, key):
        """
        Insert an element with its key (priority); O(1).
        :param elem: payload
        :param key: priority, totally ordered with the other keys in this heap
        :return: Handle that addresses the element until it is extracted
        """
        handle = self._put(elem, key)
        self._insert_root(handle.index)
        self._mutated()
        return handle

    push = insert

    def decrease_key(self, handle, new_key):
        """
        Lower the key of a stored element; amortised O(1).
        :param handle: live Handle from this heap
        :param new_key: strictly smaller than the current key
        :raises DecreaseKeyOutOfOrder: if new_key is not lower than the current key; heap unchanged
        """
        index = self._lookup(handle)
        assert index is not None, "decrease_key on a stale handle " + repr(handle)
        key = self._key_at(index)
        if new_key >= key:
            raise DecreaseKeyOutOfOrder(handle, key, new_key)
        self._set_key(index, new_key)
        if self._is_root(index):
            self._update_min(index)
        else:
            self._cut(index)
        self._mutated()

    def extract_min(self):
        """
        Remove the element with the minimum key
        :return: its payload, or None if the heap is empty
        """
        if self._min is None:
            return None
        return self.pop_unchecked()

    pop = extract_min

    def pop_unchecked(self):
        """Remove and return the minimum element of a heap that must not be empty."""
        assert self._min is not None, "Cannot extract from an empty heap"
        elem = self._remove_min()
        self._mutated()
        return elem

    def peek(self):
        """
        Element with the minimum key; does not change the heap
        :return: the element, or None if the heap is empty
        """
        if self._min is None:
            return None
        return self._elem_at(self._min)

    def peek_unchecked(self):
        return self._elem_at(self._min)

    def peek_key(self):
        if self._min is None:
            return None
        return self._key_at(self._min)

    def peek_handle(self):
        """
        Handle of the minimum element
        :return: Handle, or Handle.UNDEF if the heap is empty
        """
        if self._min is None:
            return Handle.UNDEF
        return self._handle_at(self._min)

    def peek_mut(self):
        if self._min is None:
            return None
        return ElemRef(self, self._handle_at(self._min))

    def get(self, handle):
        """
        Element addressed by a handle
        :param handle: Handle
        :return: the element, or None if the handle is not live in this heap
        """
        index = self._lookup(handle)
        if index is None:
            return None
        return self._elem_at(index)

    def get_unchecked(self, handle):
        """Element addressed by a handle that must be live; no check is made."""
        return self._elem_at(handle.index)

    def get_mut(self, handle):
        """
        Mutable reference to the element addressed by a handle
        :param handle: Handle
        :return: ElemRef, or None if the handle is not live in this heap
        """
        if self._lookup(handle) is None:
            return None
        return ElemRef(self, handle)

    def key(self, handle):
        index = self._lookup(handle)
        if index is None:
            return None
        return self._key_at(index)

    def __getitem__(self, handle):
        index = self._lookup(handle)
        if index is None:
            raise KeyError("no node found for given handle " + repr(handle))
        return self._elem_at(index)

    def __setitem__(self, handle, elem):
        index = self._lookup(handle)
        if index is None:
            raise KeyError("no node found for given handle " + repr(handle))
        self._set_elem(index, elem)

    # Iterators

    def _iter_live(self):
        version = self._version
        for index in self._live_indices():
            if self._version != version:
                raise RuntimeError("heap mutated during iteration")
            yield int(index)

    def values(self):
        """
        Every stored element, in unspecified order.
        The heap must not be mutated while the iterator is in use.
        """
        for index in self._iter_live():
            yield self._elem_at(index)

    def values_mut(self):
        """Like values, but yields an ElemRef per element so payloads can be replaced in place."""
        for index in self._iter_live():
            yield ElemRef(self, self._handle_at(index))

    def items(self):
        """(handle, element) pairs, in unspecified order."""
        for index in self._iter_live():
            yield self._handle_at(index), self._elem_at(index)

    def drain_min(self):
        """
        Extract every element in non-decreasing key order; the heap is empty once exhausted.
        :return: generator of elements
        """
        logger.debug(f"Draining {len(self)} elements from {type(self).__name__}")
        while len(self):
            yield self.pop_unchecked()
