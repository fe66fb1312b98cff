from collections import namedtuple

from pairheap.arena import Arena
from pairheap.base import PairingHeap
from pairheap.logger import init_logger

logger = init_logger(__name__)


class Position(namedtuple("Position", "parent index")):
    """
    Where a node sits in the topology: Root(i) is slot i of the root list, Child(p, i) is slot i
    of node p's child list. A parent of None marks a root.
    """

    __slots__ = ()

    @classmethod
    def root(cls, index):
        return cls(None, index)

    @classmethod
    def child(cls, parent, index):
        return cls(parent, index)

    def is_root(self):
        return self.parent is None

    def __repr__(self):
        if self.parent is None:
            return "Root(%d)" % self.index
        return "Child(%d, %d)" % (self.parent, self.index)


class _Node:
    __slots__ = ("key", "elem", "pos", "children")

    def __init__(self, key, elem):
        self.key = key
        self.elem = elem
        self.pos = None
        self.children = []

    def copy(self):
        node = _Node(self.key, self.elem)
        node.pos = self.pos
        node.children = list(self.children)
        return node


class ListPairingHeap(PairingHeap):
    """
    Pairing heap where each node owns the list of its children and the roots live in a separate
    list. Every node records its Position so that cutting it out of either list is an O(1)
    swap-remove.
    """

    def __init__(self, items=(), two_pass=None, check=None, capacity=None):
        """
        Initialise a heap.
        :param items: optional iterable of (elem, key) pairs to insert
        :param two_pass: see PairingHeap
        :param check: see PairingHeap
        :param capacity: initial arena capacity
        """
        self._roots = []
        self._nodes = Arena(capacity)
        super().__init__(items, two_pass, check)

    def __len__(self):
        return len(self._nodes)

    def _node(self, index):
        return self._nodes.get_unchecked(index)

    def _put(self, elem, key):
        return self._nodes.put(_Node(key, elem))

    def _lookup(self, handle):
        return self._nodes.index(handle)

    def _handle_at(self, index):
        return self._nodes.handle(index)

    def _live_indices(self):
        return self._nodes.live_indices()

    def _key_at(self, index):
        return self._node(index).key

    def _set_key(self, index, key):
        self._node(index).key = key

    def _elem_at(self, index):
        return self._node(index).elem

    def _set_elem(self, index, elem):
        self._node(index).elem = elem

    def _is_root(self, index):
        return self._node(index).pos.is_root()

    def _insert_root(self, index):
        self._node(index).pos = Position.root(len(self._roots))
        self._roots.append(index)
        self._update_min(index)

    def _remove_root(self, index):
        """Swap-remove a root from the root list, re-indexing the root moved into its slot."""
        slot = self._node(index).pos.index
        last = self._roots.pop()
        if last != index:
            self._roots[slot] = last
            self._node(last).pos = Position.root(slot)

    def _cut(self, index):
        parent, slot = self._node(index).pos
        assert parent is not None, "cannot cut a root"
        siblings = self._node(parent).children
        last = siblings.pop()
        if last != index:
            siblings[slot] = last
            self._node(last).pos = Position.child(parent, slot)
        self._insert_root(index)

    def _link(self, upper, lower):
        assert upper != lower, "cannot link to self"
        lower_node = self._node(lower)
        assert lower_node.pos.is_root(), "lower cannot have multiple parents"
        children = self._node(upper).children
        lower_node.pos = Position.child(upper, len(children))
        children.append(lower)

    def _remove_min(self):
        index = self._min
        node = self._node(index)
        self._remove_root(index)
        # The minimum's children join the remaining roots; all of them are paired afresh.
        roots = self._roots + node.children
        for child in node.children:
            self._node(child).pos = Position.root(-1)
        node.children = []
        self._roots = []
        self._min = None
        for root in self._pair(roots):
            self._insert_root(root)
        return self._nodes.take_unchecked(index).elem

    def copy(self):
        """
        Copy the heap; handles from this heap address the same elements in the copy.
        Elements themselves are shared, not copied.
        """
        other = ListPairingHeap.__new__(ListPairingHeap)
        other._two_pass = self._two_pass
        other._check = self._check
        other._min = self._min
        other._version = 0
        other._roots = list(self._roots)
        other._nodes = self._nodes.copy(_Node.copy)
        return other

    def validate(self):
        seen = set()
        stack = []
        for slot, root in enumerate(self._roots):
            node = self._node(root)
            assert node.pos == Position.root(slot), "root %d has position %r" % (root, node.pos)
            stack.append(root)
        while stack:
            index = stack.pop()
            assert index not in seen, "node %d appears twice in the topology" % index
            seen.add(index)
            node = self._node(index)
            for slot, child in enumerate(node.children):
                child_node = self._node(child)
                assert child_node.pos == Position.child(index, slot), \
                    "child %d of %d has position %r" % (child, index, child_node.pos)
                assert not child_node.key < node.key, "heap order violated below node %d" % index
                stack.append(child)
        assert len(seen) == len(self._nodes), "%d reachable nodes, %d stored" % (len(seen), len(self._nodes))
        if self._min is None:
            assert not self._roots, "empty min anchor with %d roots" % len(self._roots)
        else:
            assert self._node(self._min).pos.is_root(), "min anchor is not a root"
            for root in self._roots:
                assert not self._key_at(root) < self._key_at(self._min), "min anchor is not minimal"
        logger.debug(f"Validated {len(seen)} nodes in {len(self._roots)} trees")
