from collections.abc import Generator

from .coroutine import Coroutine
from .coroutine import CoroutineState
from .coroutine import OwnershipError
from .coroutine import Resumable
from .coroutine import resumable


class PinnedError(RuntimeError):
    """A pinned coroutine cannot be moved once it has been resumed."""


class Pin[Y, R](Resumable[Y, R]):
    """A fixed slot for a coroutine.

    Adapters built on a pin resume the coroutine in place. The coroutine
    may be taken back out with ``unpin`` until it is first resumed; after
    that it stays in the slot for as long as the slot exists, so state the
    coroutine holds about its own locals is never handed elsewhere midway.
    """

    def __init__(self, coroutine: Coroutine[Y, R] | Generator[Y, None, R], /):
        if isinstance(coroutine, Pin):
            raise TypeError("A pin cannot be pinned again.")
        super().__init__()
        coroutine = resumable(coroutine)
        coroutine.claim()
        self.__slot = coroutine
        self.__unpinned = False

    def __repr__(self):
        return f"<{type(self).__name__} {self.__slot!r}>"

    @property
    def started(self) -> bool:
        return self.__slot.started

    @property
    def finished(self) -> bool:
        return self.__slot.finished

    def resume(self) -> CoroutineState[Y, R]:
        if self.__unpinned:
            raise PinnedError(f"{self!r} has been unpinned.")
        return self.__slot.resume()

    def unpin(self) -> Resumable[Y, R]:
        """Move the coroutine out of the slot, if it has never been resumed."""
        if self.__unpinned:
            raise PinnedError(f"{self!r} has already been unpinned.")
        if self.owned:
            raise OwnershipError(f"{self!r} is owned by an adapter.")
        if self.__slot.started:
            raise PinnedError(f"{self!r} has been resumed and cannot move.")
        self.__unpinned = True
        self.__slot.release()
        return self.__slot
