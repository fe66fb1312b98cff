"""
Addressable pairing heaps.

insert() returns a Handle that can later be used to read or replace the element, or to
decrease its key in amortised O(1). Two layouts implement the same interface:
ListPairingHeap (child lists plus a root list) and RingPairingHeap (sibling rings).
"""
from pairheap import config
from pairheap.arena import Arena, Handle
from pairheap.base import ElemRef, PairingHeap
from pairheap.errors import DecreaseKeyOutOfOrder, PairingHeapError
from pairheap.listheap import ListPairingHeap, Position
from pairheap.ringheap import RingPairingHeap

LAYOUTS = {
    "list": ListPairingHeap,
    "ring": RingPairingHeap,
}


def new_heap(layout=None, **options):
    """
    Create an empty (or pre-filled) heap.
    :param layout: "list" or "ring" (default config.DEFAULT_LAYOUT)
    :param options: passed on to the heap constructor (items, two_pass, check, capacity)
    :return: PairingHeap
    """
    if layout is None:
        layout = config.DEFAULT_LAYOUT
    try:
        cls = LAYOUTS[layout]
    except KeyError:
        raise ValueError(f"Unknown heap layout {layout!r}; expected one of {sorted(LAYOUTS)}")
    return cls(**options)
