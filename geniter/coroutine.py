from abc import ABC
from abc import abstractmethod
from collections.abc import Callable
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from .event import Event
from .id import random_id


class ResumedAfterCompletion(RuntimeError):
    """A coroutine was resumed after it had already completed."""


class OwnershipError(RuntimeError):
    """A coroutine is already owned by another adapter."""


@dataclass(frozen=True)
class Yielded[Y]:
    value: Y


@dataclass(frozen=True)
class Complete[R]:
    value: R


type CoroutineState[Y, R] = Yielded[Y] | Complete[R]


@dataclass(eq=False, kw_only=True, repr=False)
class CoroutineEvent(Event):
    coroutine_id: str

    def _describe(self) -> str:
        return f"coroutine={self.coroutine_id}"


@dataclass(eq=False, kw_only=True, repr=False)
class CoroutineResumed(CoroutineEvent): ...


@dataclass(eq=False, kw_only=True, repr=False)
class CoroutineYielded(CoroutineEvent):
    value: Any = field(repr=False)


@dataclass(eq=False, kw_only=True, repr=False)
class CoroutineCompleted(CoroutineEvent):
    value: Any = field(repr=False)


@dataclass(eq=False, kw_only=True, repr=False)
class CoroutineErrored(CoroutineEvent):
    exception: BaseException = field(repr=False)


class Resumable[Y, R](ABC):
    """Something an adapter can own and resume one step at a time."""

    def __init__(self):
        self.__owned = False

    @property
    def owned(self) -> bool:
        return self.__owned

    def claim(self) -> None:
        if self.__owned:
            raise OwnershipError(f"{self!r} is already owned by another adapter.")
        self.__owned = True

    def release(self) -> None:
        self.__owned = False

    @property
    @abstractmethod
    def started(self) -> bool:
        raise NotImplementedError("Subclasses must implement this method.")

    @property
    @abstractmethod
    def finished(self) -> bool:
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def resume(self) -> CoroutineState[Y, R]:
        raise NotImplementedError("Subclasses must implement this method.")


class Coroutine[Y, R](Resumable[Y, R]):
    """A generator driven one step at a time.

    Each call to ``resume`` runs the generator until its next ``yield``
    (``Yielded``) or its ``return`` (``Complete``). A coroutine is
    one-shot: once it has completed, or raised out of its body, any
    further ``resume`` raises ``ResumedAfterCompletion``.
    """

    __monitor = ContextVar[Callable[[CoroutineEvent], None] | None](
        "Coroutine.monitor", default=None
    )

    def __init__(self, generator: Generator[Y, None, R], /):
        if not isinstance(generator, Generator):
            raise TypeError(f"Expected a generator, got {type(generator).__name__}.")
        super().__init__()
        self.id = random_id()
        self.__generator = generator
        self.__started = False
        self.__running = False
        self.__finished = False

    @classmethod
    def from_function[**A](
        cls,
        fn: Callable[A, Generator[Y, None, R]],
        /,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
    ) -> "Coroutine[Y, R]":
        return cls(fn(*args, **(kwargs or {})))

    @classmethod
    @contextmanager
    def monitor(cls, handler: Callable[[CoroutineEvent], None]):
        """Publish the lifecycle events of coroutines resumed in this context."""
        token = cls.__monitor.set(handler)
        try:
            yield
        finally:
            cls.__monitor.reset(token)

    def __repr__(self):
        if self.__finished:
            state = "finished"
        elif self.__started:
            state = "suspended"
        else:
            state = "created"
        return f"<{type(self).__name__} {self.id} {state}>"

    @property
    def started(self) -> bool:
        return self.__started

    @property
    def finished(self) -> bool:
        return self.__finished

    def __publish(self, event: CoroutineEvent) -> None:
        handler = self.__monitor.get()
        if handler is not None:
            handler(event)

    def resume(self) -> CoroutineState[Y, R]:
        if self.__finished:
            raise ResumedAfterCompletion(f"{self!r} resumed after completion.")
        if self.__running:
            raise ValueError(f"{self!r} is already running.")

        self.__started = True
        self.__publish(CoroutineResumed(coroutine_id=self.id))
        self.__running = True
        try:
            value = self.__generator.send(None)
        except StopIteration as stop:
            self.__finished = True
            self.__publish(CoroutineCompleted(coroutine_id=self.id, value=stop.value))
            return Complete(stop.value)
        except BaseException as exception:
            self.__finished = True
            self.__publish(CoroutineErrored(coroutine_id=self.id, exception=exception))
            raise
        finally:
            self.__running = False

        self.__publish(CoroutineYielded(coroutine_id=self.id, value=value))
        return Yielded(value)


def resumable[Y, R](
    coroutine: Resumable[Y, R] | Generator[Y, None, R], /
) -> Resumable[Y, R]:
    """Accept a coroutine, a pin, or a bare generator to wrap."""
    if isinstance(coroutine, Resumable):
        return coroutine
    return Coroutine(coroutine)
