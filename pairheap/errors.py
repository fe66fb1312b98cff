class PairingHeapError(Exception):
    """Base class for errors raised by pairheap."""


class DecreaseKeyOutOfOrder(PairingHeapError, ValueError):
    """
    Raised by decrease_key when the new key is not strictly smaller than the current one.
    The heap is left unchanged.
    """

    def __init__(self, handle, current_key, new_key):
        super().__init__(
            f"new key {new_key!r} is not lower than current key {current_key!r} of {handle}"
        )
        self.handle = handle
        self.current_key = current_key
        self.new_key = new_key
