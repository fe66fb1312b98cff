# root layout used by new_heap() when none is named: "list" or "ring"
DEFAULT_LAYOUT = "list"

# meld the winners of the pairing pass right to left into a single tree;
# when off, extract-min leaves them as separate roots
TWO_PASS = True

# slots preallocated by a fresh arena; the arena doubles when full
ARENA_INITIAL_CAPACITY = 16

# run validate() after every mutating heap operation (O(n), for debugging)
CHECK_INVARIANTS = False

# level of the "pairheap" logger
LOG_LEVEL = "WARNING"
