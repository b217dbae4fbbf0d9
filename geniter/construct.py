"""Build adapters straight from generator functions.

Each adapter comes in two placements. The plain helpers store a movable
``Coroutine``; the ``_static`` helpers put it in a ``Pin`` first, so it
stays in that slot from its first resume on.

Arguments are captured by reference unless ``move=True``, in which case
they are snapshot with ``dill`` when the adapter is built and the
coroutine owns its own copies. A moved argument must be something dill
can serialize; generators, sockets and the like are refused with a
``TypeError`` when the adapter is built.
"""

from collections.abc import Callable
from collections.abc import Generator
from functools import wraps
from typing import Any

import dill

from .coroutine import Coroutine
from .gen_iter import GenIter
from .gen_iter_return import GenIterReturn
from .pin import Pin


def coroutine[Y, R](
    fn: Callable[..., Generator[Y, None, R]],
    /,
    *,
    args: tuple[Any, ...] = (),
    kwargs: dict[str, Any] | None = None,
    move: bool = False,
) -> Coroutine[Y, R]:
    kwargs = kwargs or {}
    if move:
        try:
            args, kwargs = dill.copy(args), dill.copy(kwargs)
        except (TypeError, dill.PicklingError) as error:
            raise TypeError(
                f"move=True cannot snapshot the arguments of {fn!r}: {error}"
            ) from error
    return Coroutine.from_function(fn, args, kwargs)


def gen_iter[Y](
    fn: Callable[..., Generator[Y, None, Any]],
    /,
    *,
    args: tuple[Any, ...] = (),
    kwargs: dict[str, Any] | None = None,
    move: bool = False,
) -> GenIter[Y]:
    return GenIter(coroutine(fn, args=args, kwargs=kwargs, move=move))


def gen_iter_static[Y](
    fn: Callable[..., Generator[Y, None, Any]],
    /,
    *,
    args: tuple[Any, ...] = (),
    kwargs: dict[str, Any] | None = None,
    move: bool = False,
) -> GenIter[Y]:
    return GenIter(Pin(coroutine(fn, args=args, kwargs=kwargs, move=move)))


def gen_iter_return[Y, R](
    fn: Callable[..., Generator[Y, None, R]],
    /,
    *,
    args: tuple[Any, ...] = (),
    kwargs: dict[str, Any] | None = None,
    move: bool = False,
) -> GenIterReturn[Y, R]:
    return GenIterReturn(coroutine(fn, args=args, kwargs=kwargs, move=move))


def gen_iter_return_static[Y, R](
    fn: Callable[..., Generator[Y, None, R]],
    /,
    *,
    args: tuple[Any, ...] = (),
    kwargs: dict[str, Any] | None = None,
    move: bool = False,
) -> GenIterReturn[Y, R]:
    return GenIterReturn(Pin(coroutine(fn, args=args, kwargs=kwargs, move=move)))


def iterator(*, static: bool = False, move: bool = False):
    """Decorate a generator function to return a ``GenIter``."""

    def decorate[**A, Y](
        fn: Callable[A, Generator[Y, None, Any]],
    ) -> Callable[A, GenIter[Y]]:
        build = gen_iter_static if static else gen_iter

        @wraps(fn)
        def wrapper(*args: A.args, **kwargs: A.kwargs) -> GenIter[Y]:
            return build(fn, args=args, kwargs=kwargs, move=move)

        return wrapper

    return decorate


def iterator_return(*, static: bool = False, move: bool = False):
    """Decorate a generator function to return a ``GenIterReturn``."""

    def decorate[**A, Y, R](
        fn: Callable[A, Generator[Y, None, R]],
    ) -> Callable[A, GenIterReturn[Y, R]]:
        build = gen_iter_return_static if static else gen_iter_return

        @wraps(fn)
        def wrapper(*args: A.args, **kwargs: A.kwargs) -> GenIterReturn[Y, R]:
            return build(fn, args=args, kwargs=kwargs, move=move)

        return wrapper

    return decorate
