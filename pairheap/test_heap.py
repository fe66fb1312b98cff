import copy
import unittest

import numpy as np

from pairheap import *

CHARS = [('a', 100), ('b', 50), ('c', 150), ('d', -25), ('e', 999), ('f', 42), ('g', 43), ('i', 41),
         ('j', -100), ('k', -77), ('l', 123), ('m', -123), ('n', 0), ('o', -1), ('p', 2), ('q', -3),
         ('r', 4), ('s', -5)]


class HeapTests:
    """Behaviour shared by every layout; mixed into one TestCase per layout and pairing mode."""

    LAYOUT = None
    TWO_PASS = True

    def make(self, items=(), check=True):
        return new_heap(self.LAYOUT, items=items, two_pass=self.TWO_PASS, check=check)

    def setUp(self):
        """Set up for each test"""
        self.rng = np.random.default_rng(1234)
        self.ph = self.make()
        self.handles = {label: self.ph.insert(label, key) for label, key in CHARS}

    def test_TakeMin(self):
        ph = self.make()
        for elem, key in enumerate([6, 10, -42, 1337, -1, 1, 2, 3, 4, 5]):
            ph.insert(elem, key)
        self.assertEqual([ph.extract_min() for _ in range(10)], [2, 4, 5, 6, 7, 8, 9, 0, 1, 3])
        self.assertIsNone(ph.extract_min())
        self.assertEqual(len(ph), 0)

    def test_DecreaseKey1(self):
        ph = self.make()
        a, b, c, d, e, f = [ph.insert(elem, elem * 50) for elem in range(6)]
        self.assertEqual(ph.peek(), 0)
        ph.decrease_key(f, -50)
        self.assertEqual(ph.peek(), 5)
        ph.decrease_key(e, -100)
        self.assertEqual(ph.peek(), 4)
        ph.decrease_key(d, -99)
        self.assertEqual(ph.peek(), 4)
        with self.assertRaises(DecreaseKeyOutOfOrder):
            ph.decrease_key(c, 1000)
        self.assertEqual(ph.peek(), 4)
        ph.decrease_key(b, -1000)
        self.assertEqual(ph.peek(), 1)
        with self.assertRaises(DecreaseKeyOutOfOrder):
            ph.decrease_key(a, 100)
        self.assertEqual(ph.peek(), 1)

    def test_DecreaseKey2(self):
        # equal key is out of order too; nothing changes
        self.ph.extract_min()
        h = self.handles['c']
        with self.assertRaises(DecreaseKeyOutOfOrder) as cm:
            self.ph.decrease_key(h, 150)
        self.assertEqual(cm.exception.handle, h)
        self.assertEqual(cm.exception.current_key, 150)
        self.assertEqual(cm.exception.new_key, 150)
        self.assertTrue(isinstance(cm.exception, ValueError))
        self.assertEqual(self.ph.key(h), 150)
        self.assertEqual(self.ph.peek(), 'j')
        self.assertEqual(len(self.ph), 17)

    def test_DecreaseKey3(self):
        # after an extraction most nodes are children; cut them back out
        self.assertEqual(self.ph.extract_min(), 'm')
        self.ph.decrease_key(self.handles['e'], -500)
        self.assertEqual(self.ph.peek(), 'e')
        self.ph.decrease_key(self.handles['c'], -10)
        self.ph.decrease_key(self.handles['l'], -20)
        self.assertEqual(self.ph.peek_key(), -500)
        self.assertEqual(list(self.ph.drain_min()),
                         ['e', 'j', 'k', 'd', 'l', 'c', 's', 'q', 'o', 'n', 'p', 'r', 'i', 'f', 'g', 'b', 'a'])

    def test_EmptyTake(self):
        ph = self.make()
        self.assertIsNone(ph.extract_min())
        self.assertIsNone(ph.peek())
        self.assertIsNone(ph.peek_key())
        self.assertIsNone(ph.peek_mut())
        self.assertEqual(ph.peek_handle(), Handle.UNDEF)
        self.assertTrue(ph.is_empty())
        self.assertFalse(ph)
        self.assertEqual(list(ph.drain_min()), [])

    def test_DrainMin(self):
        self.assertEqual(list(self.ph.drain_min()),
                         ['m', 'j', 'k', 'd', 's', 'q', 'o', 'n', 'p', 'r', 'i', 'f', 'g', 'b', 'a', 'l', 'c', 'e'])
        self.assertEqual(len(self.ph), 0)
        self.assertIsNone(self.ph.peek())

    def test_DrainMin2(self):
        drain = self.ph.drain_min()
        self.assertEqual(next(drain), 'm')
        self.assertEqual(next(drain), 'j')
        self.assertEqual(len(self.ph), 16)
        self.assertEqual(self.ph.peek(), 'k')
        self.assertEqual(len(list(drain)), 16)
        self.assertEqual(list(drain), [])

    def test_Values(self):
        self.assertEqual(len(list(self.ph.values())), len(self.ph))
        self.assertEqual(sorted(self.ph.values()), sorted(label for label, _ in CHARS))
        for _ in range(5):
            self.ph.extract_min()
        self.assertEqual(len(list(self.ph.values())), 13)
        self.assertEqual(dict(self.ph.items()),
                         {h: label for label, h in self.handles.items() if label not in 'mjkds'})

    def test_ValuesMut(self):
        self.ph.extract_min()
        for ref in self.ph.values_mut():
            ref.value = ref.value.upper()
        self.assertEqual(sorted(self.ph.values()), sorted(label.upper() for label, _ in CHARS if label != 'm'))
        self.assertEqual(self.ph.peek(), 'J')

    def test_MutationDuringIteration(self):
        values = self.ph.values()
        next(values)
        self.ph.insert('t', 7)
        with self.assertRaises(RuntimeError):
            next(values)
        items = self.ph.items()
        next(items)
        self.ph.extract_min()
        with self.assertRaises(RuntimeError):
            list(items)

    def test_Get(self):
        for label, h in self.handles.items():
            self.assertEqual(self.ph.get(h), label)
            self.assertEqual(self.ph[h], label)
            self.assertEqual(self.ph.get_unchecked(h), label)
            self.assertTrue(h in self.ph)
        self.assertEqual(self.ph.peek_handle(), self.handles['m'])
        self.assertEqual(self.ph.peek_unchecked(), 'm')

    def test_StaleHandle(self):
        m = self.handles['m']
        self.assertEqual(self.ph.extract_min(), 'm')
        self.assertIsNone(self.ph.get(m))
        self.assertIsNone(self.ph.get_mut(m))
        self.assertIsNone(self.ph.key(m))
        self.assertFalse(m in self.ph)
        with self.assertRaises(KeyError):
            self.ph[m]
        with self.assertRaises(KeyError):
            self.ph[m] = 'x'
        # the slot is recycled without reviving the old handle
        x = self.ph.insert('x', 1000)
        self.assertEqual(x.index, m.index)
        self.assertIsNone(self.ph.get(m))
        self.assertEqual(self.ph[x], 'x')

    def test_SetItem(self):
        self.ph[self.handles['m']] = 'M'
        self.assertEqual(self.ph.peek(), 'M')
        ref = self.ph.get_mut(self.handles['e'])
        self.ph.extract_min()
        ref.value = 'E'
        self.assertEqual(self.ph[self.handles['e']], 'E')
        self.ph.peek_mut().value = 'J'
        self.assertEqual(list(self.ph.drain_min())[0], 'J')

    def test_InsertExtract(self):
        for key in [0, -7, 12345]:
            ph = self.make()
            ph.insert('only', key)
            self.assertEqual(ph.peek(), 'only')
            self.assertEqual(ph.extract_min(), 'only')
            self.assertTrue(ph.is_empty())

    def test_NoneElements(self):
        ph = self.make([(None, 3), (None, 1), ('x', 2)])
        self.assertEqual(list(ph.drain_min()), [None, 'x', None])

    def test_Copy(self):
        self.ph.extract_min()
        other = copy.copy(self.ph)
        other.decrease_key(self.handles['e'], -1000)
        other[self.handles['a']] = 'A'
        self.assertEqual(other.peek(), 'e')
        self.assertEqual(self.ph.peek(), 'j')
        self.assertEqual(self.ph[self.handles['a']], 'a')
        other.validate()
        self.assertEqual(list(self.ph.drain_min()),
                         ['j', 'k', 'd', 's', 'q', 'o', 'n', 'p', 'r', 'i', 'f', 'g', 'b', 'a', 'l', 'c', 'e'])
        self.assertEqual(len(other), 17)
        self.assertEqual(other.peek(), 'e')

    def test_Random1(self):
        for n in [0, 1, 2, 1000, 100000]:
            keys = self.rng.integers(-n, n + 1, size=n).tolist()
            ph = self.make(((i, key) for i, key in enumerate(keys)), check=False)
            self.assertEqual(len(ph), n)
            drained = list(ph.drain_min())
            self.assertEqual(sorted(drained), list(range(n)))
            expected = [keys[i] for i in np.argsort(keys, kind="stable")]
            self.assertEqual([keys[i] for i in drained], expected)

    def test_Random2(self):
        # random mix of operations checked against a plain dict of live keys
        ph = self.make()
        live = dict()
        elems = dict()
        for step in range(600):
            op = self.rng.random()
            if op < 0.45 or not live:
                key = int(self.rng.integers(-1000, 1000))
                h = ph.insert(step, key)
                live[h] = key
                elems[step] = h
            elif op < 0.75:
                h = list(live)[int(self.rng.integers(len(live)))]
                new_key = live[h] - int(self.rng.integers(0, 50))
                if new_key < live[h]:
                    ph.decrease_key(h, new_key)
                    live[h] = new_key
                else:
                    self.assertRaises(DecreaseKeyOutOfOrder, ph.decrease_key, h, new_key)
                self.assertTrue(ph.peek_key() <= live[h])
            else:
                smallest = min(live.values())
                elem = ph.extract_min()
                h = elems.pop(elem)
                self.assertEqual(live.pop(h), smallest)
                self.assertIsNone(ph.get(h))
            self.assertEqual(len(ph), len(live))
            if live:
                self.assertEqual(ph.peek_key(), min(live.values()))
                for h, key in live.items():
                    self.assertEqual(ph.key(h), key)


class ListHeapTest(HeapTests, unittest.TestCase):
    LAYOUT = "list"


class ListHeapOnePassTest(HeapTests, unittest.TestCase):
    LAYOUT = "list"
    TWO_PASS = False


class RingHeapTest(HeapTests, unittest.TestCase):
    LAYOUT = "ring"


class RingHeapOnePassTest(HeapTests, unittest.TestCase):
    LAYOUT = "ring"
    TWO_PASS = False


class FactoryTest(unittest.TestCase):

    def test_NewHeap(self):
        self.assertTrue(isinstance(new_heap("list"), ListPairingHeap))
        self.assertTrue(isinstance(new_heap("ring"), RingPairingHeap))
        self.assertTrue(isinstance(new_heap(), LAYOUTS[config.DEFAULT_LAYOUT]))
        with self.assertRaises(ValueError):
            new_heap("binary")

    def test_Items(self):
        ph = new_heap("ring", items=CHARS, capacity=2)
        self.assertEqual(len(ph), len(CHARS))
        self.assertEqual(ph.peek(), 'm')
        self.assertEqual(repr(ph), "RingPairingHeap(18 elements)")

    def test_OnePassRoots(self):
        ph = ListPairingHeap(((i, i) for i in range(9)), two_pass=False)
        ph.extract_min()
        # pass one halves the eight remaining roots
        self.assertEqual(len(ph._roots), 4)
        ph = ListPairingHeap(((i, i) for i in range(9)), two_pass=True)
        ph.extract_min()
        self.assertEqual(len(ph._roots), 1)

    def test_Position(self):
        self.assertTrue(Position.root(3).is_root())
        self.assertFalse(Position.child(1, 0).is_root())
        self.assertEqual(repr(Position.child(1, 0)), "Child(1, 0)")


if __name__ == "__main__":
    unittest.main()
