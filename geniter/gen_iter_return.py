from collections.abc import Generator
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Self
from weakref import ReferenceType
from weakref import ref

from .coroutine import Complete
from .coroutine import Resumable
from .coroutine import Yielded
from .coroutine import resumable
from .result import Err
from .result import Ok
from .result import Result


class BorrowError(RuntimeError):
    """The adapter is already being iterated by another handle."""


class ConsumedError(RuntimeError):
    """The adapter's return value has already been taken."""


@dataclass(frozen=True)
class Running[Y, R]:
    coroutine: Resumable[Y, R]


@dataclass(frozen=True)
class Finished[R]:
    value: R


class GenIterReturn[Y, R]:
    """Hold a coroutine until it finishes, then hold its return value.

    The adapter is not itself iterable. Iterate through ``borrow()``, which
    hands out a single exclusive handle, so the adapter is still around to
    give up the return value with ``return_or_self()`` afterwards::

        g = GenIterReturn(numbers())
        for n in g.borrow():
            ...
        assert g.is_done()
        value = g.return_or_self().ok()

    Unlike ``GenIter``, advancing after exhaustion is safe: the handle
    reports ``StopIteration`` again without resuming the coroutine.
    """

    __iter__ = None

    def __init__(self, coroutine: Resumable[Y, R] | Generator[Y, None, R], /):
        coroutine = resumable(coroutine)
        coroutine.claim()
        self.__state: Running[Y, R] | Finished[R] = Running(coroutine)
        self.__borrower: ReferenceType[Borrowed[Y, R]] | None = None
        self.__consumed = False

    def __repr__(self):
        match self.__state:
            case Running(coroutine):
                state = f"running {coroutine!r}"
            case Finished():
                state = "finished"
        if self.__consumed:
            state = "consumed"
        return f"<{type(self).__name__} {state}>"

    def __check_consumed(self):
        if self.__consumed:
            raise ConsumedError(f"{self!r} has already returned its value.")

    def __borrowed(self) -> bool:
        return self.__borrower is not None and self.__borrower() is not None

    def is_done(self) -> bool:
        self.__check_consumed()
        return isinstance(self.__state, Finished)

    def borrow(self) -> "Borrowed[Y, R]":
        """Take the exclusive iteration handle."""
        self.__check_consumed()
        return Borrowed(self)

    def return_or_self(self) -> Result[R, Self]:
        """Exchange a finished adapter for its return value.

        Returns ``Ok(value)`` once the coroutine has completed, after which
        the adapter cannot be used again. While it is still running, returns
        ``Err(self)`` so driving can continue.
        """
        self.__check_consumed()
        if self.__borrowed():
            raise BorrowError(f"{self!r} is still borrowed.")
        match self.__state:
            case Finished(value):
                self.__consumed = True
                return Ok(value)
            case Running():
                return Err(self)

    def _acquire(self, handle: "Borrowed[Y, R]") -> None:
        self.__check_consumed()
        if self.__borrowed():
            raise BorrowError(f"{self!r} is already borrowed.")
        self.__borrower = ref(handle)

    def _advance(self, handle: "Borrowed[Y, R]") -> Y:
        if self.__borrower is None or self.__borrower() is not handle:
            raise BorrowError(f"{handle!r} does not hold the borrow of {self!r}.")
        match self.__state:
            case Finished():
                raise StopIteration
            case Running(coroutine):
                match coroutine.resume():
                    case Yielded(value):
                        return value
                    case Complete(value):
                        self.__state = Finished(value)
                        raise StopIteration

    def _release(self, handle: "Borrowed[Y, R]") -> None:
        if self.__borrower is not None and self.__borrower() is handle:
            self.__borrower = None


class Borrowed[Y, R](Iterator[Y]):
    """The exclusive iteration handle of a ``GenIterReturn``.

    The borrow ends when the handle reports exhaustion, when it is closed
    (directly or by leaving a ``with`` block), or when it is discarded.
    """

    def __init__(self, owner: GenIterReturn[Y, R]):
        owner._acquire(self)
        self.__owner: GenIterReturn[Y, R] | None = owner

    def __repr__(self):
        return f"<{type(self).__name__} {self.__owner!r}>"

    def __next__(self) -> Y:
        if self.__owner is None:
            raise StopIteration
        try:
            return self.__owner._advance(self)
        except StopIteration:
            self.close()
            raise

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        if self.__owner is not None:
            self.__owner._release(self)
            self.__owner = None
