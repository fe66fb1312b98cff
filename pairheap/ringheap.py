from pairheap.arena import Arena
from pairheap.base import PairingHeap
from pairheap.logger import init_logger

logger = init_logger(__name__)


class _Node:
    """
    Topology record of one element. left/right close a circular doubly linked ring of
    siblings; child is any one member of the node's child ring. A detached node is a
    ring of one.
    """

    __slots__ = ("key", "parent", "child", "left", "right")

    def __init__(self, key):
        self.key = key
        self.parent = None
        self.child = None
        self.left = None
        self.right = None

    def copy(self):
        node = _Node(self.key)
        node.parent = self.parent
        node.child = self.child
        node.left = self.left
        node.right = self.right
        return node


class RingPairingHeap(PairingHeap):
    """
    Pairing heap where siblings form rings. The roots are the ring through the minimum,
    so there is no root container at all, and cutting or linking a node splices rings in O(1)
    without touching the parent's storage.
    Topology and elements live in two arenas that are always updated together, so a node and
    its element share one handle.
    """

    def __init__(self, items=(), two_pass=None, check=None, capacity=None):
        self._nodes = Arena(capacity)
        self._elems = Arena(capacity)
        super().__init__(items, two_pass, check)

    def __len__(self):
        return len(self._elems)

    def _node(self, index):
        return self._nodes.get_unchecked(index)

    def _put(self, elem, key):
        handle = self._nodes.put(_Node(key))
        node = self._node(handle.index)
        node.left = node.right = handle.index
        elem_handle = self._elems.put(elem)
        assert handle == elem_handle, "node and element arenas out of step"
        return handle

    def _lookup(self, handle):
        return self._elems.index(handle)

    def _handle_at(self, index):
        return self._elems.handle(index)

    def _live_indices(self):
        return self._elems.live_indices()

    def _key_at(self, index):
        return self._node(index).key

    def _set_key(self, index, key):
        self._node(index).key = key

    def _elem_at(self, index):
        return self._elems.get_unchecked(index)

    def _set_elem(self, index, elem):
        self._elems.set_unchecked(index, elem)

    def _is_root(self, index):
        return self._node(index).parent is None

    # Ring primitives

    def _siblings(self, index):
        """Yield the ring through index, starting with index itself."""
        current = index
        while True:
            yield current
            current = self._node(current).right
            if current == index:
                return

    def _splice(self, anchor, index):
        """Insert the detached node index into anchor's ring, right of anchor."""
        node = self._node(index)
        anchor_node = self._node(anchor)
        node.left = anchor
        node.right = anchor_node.right
        self._node(anchor_node.right).left = index
        anchor_node.right = index

    def _unlink(self, index):
        """Take a node out of its ring, leaving it detached with no parent."""
        node = self._node(index)
        parent = node.parent
        if node.right == index:
            if parent is not None:
                self._node(parent).child = None
        else:
            self._node(node.left).right = node.right
            self._node(node.right).left = node.left
            if parent is not None and self._node(parent).child == index:
                self._node(parent).child = node.right
        node.left = node.right = index
        node.parent = None

    def _detach_ring(self, index):
        """Break up the ring through index into detached nodes; return them in ring order."""
        members = list(self._siblings(index))
        for member in members:
            node = self._node(member)
            node.left = node.right = member
            node.parent = None
        return members

    # Heap primitives

    def _insert_root(self, index):
        node = self._node(index)
        node.parent = None
        if self._min is None:
            node.left = node.right = index
            self._min = index
        else:
            self._splice(self._min, index)
            self._update_min(index)

    def _cut(self, index):
        assert self._node(index).parent is not None, "cannot cut a root"
        self._unlink(index)
        self._insert_root(index)

    def _link(self, upper, lower):
        assert upper != lower, "cannot link to self"
        lower_node = self._node(lower)
        assert lower_node.parent is None and lower_node.right == lower, "lower must be a detached root"
        upper_node = self._node(upper)
        lower_node.parent = upper
        if upper_node.child is None:
            upper_node.child = lower
        else:
            self._splice(upper_node.child, lower)

    def _release_children(self, index):
        node = self._node(index)
        if node.child is None:
            return []
        children = self._detach_ring(node.child)
        node.child = None
        return children

    def _remove_min(self):
        index = self._min
        children = self._release_children(index)
        roots = self._detach_ring(index)[1:]
        self._min = None
        for root in self._pair(roots + children):
            self._insert_root(root)
        self._nodes.take_unchecked(index)
        return self._elems.take_unchecked(index)

    def copy(self):
        """
        Copy the heap; handles from this heap address the same elements in the copy.
        Elements themselves are shared, not copied.
        """
        other = RingPairingHeap.__new__(RingPairingHeap)
        other._two_pass = self._two_pass
        other._check = self._check
        other._min = self._min
        other._version = 0
        other._nodes = self._nodes.copy(_Node.copy)
        other._elems = self._elems.copy()
        return other

    def _check_ring(self, index, parent):
        members = list(self._siblings(index))
        for member in members:
            node = self._node(member)
            assert self._node(node.right).left == member, "ring broken right of node %d" % member
            assert self._node(node.left).right == member, "ring broken left of node %d" % member
            assert node.parent == parent, "node %d has parent %r, expected %r" % (member, node.parent, parent)
        return members

    def validate(self):
        assert len(self._nodes) == len(self._elems), "node and element arenas out of step"
        if self._min is None:
            assert len(self) == 0, "empty min anchor on a heap of %d elements" % len(self)
            return
        min_key = self._key_at(self._min)
        roots = self._check_ring(self._min, None)
        for root in roots:
            assert not self._key_at(root) < min_key, "min anchor is not minimal"
        seen = set()
        stack = list(roots)
        while stack:
            index = stack.pop()
            assert index not in seen, "node %d appears twice in the topology" % index
            seen.add(index)
            node = self._node(index)
            if node.child is not None:
                for child in self._check_ring(node.child, index):
                    assert not self._key_at(child) < node.key, "heap order violated below node %d" % index
                    stack.append(child)
        assert len(seen) == len(self), "%d reachable nodes, %d stored" % (len(seen), len(self))
        logger.debug(f"Validated {len(seen)} nodes in {len(roots)} trees")
