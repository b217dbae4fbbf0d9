from collections.abc import Generator
from collections.abc import Iterator
from typing import Any

from .coroutine import Complete
from .coroutine import OwnershipError
from .coroutine import Resumable
from .coroutine import Yielded
from .coroutine import resumable


class GenIter[Y](Iterator[Y]):
    """An iterator over the values a coroutine yields.

    The coroutine's return value is discarded. ``GenIter`` keeps no record
    of exhaustion: after ``next()`` has raised ``StopIteration`` the caller
    must stop, because another ``next()`` resumes a completed coroutine and
    raises ``ResumedAfterCompletion``. Use ``GenIterReturn`` when the
    return value is needed or exhaustion must be safe.
    """

    def __init__(self, coroutine: Resumable[Y, Any] | Generator[Y, None, Any], /):
        coroutine = resumable(coroutine)
        coroutine.claim()
        self.__coroutine: Resumable[Y, Any] | None = coroutine

    def __repr__(self):
        return f"<{type(self).__name__} {self.__coroutine!r}>"

    def __next__(self) -> Y:
        if self.__coroutine is None:
            raise OwnershipError(f"{self!r} no longer owns a coroutine.")
        match self.__coroutine.resume():
            case Yielded(value):
                return value
            case Complete():
                raise StopIteration

    def into_inner(self) -> Resumable[Y, Any]:
        """Give up the coroutine (or pin) so another adapter can own it."""
        if self.__coroutine is None:
            raise OwnershipError(f"{self!r} no longer owns a coroutine.")
        coroutine, self.__coroutine = self.__coroutine, None
        coroutine.release()
        return coroutine
