from .construct import gen_iter as gen_iter
from .construct import gen_iter_return as gen_iter_return
from .construct import gen_iter_return_static as gen_iter_return_static
from .construct import gen_iter_static as gen_iter_static
from .construct import iterator as iterator
from .construct import iterator_return as iterator_return
from .coroutine import Complete as Complete
from .coroutine import Coroutine as Coroutine
from .coroutine import OwnershipError as OwnershipError
from .coroutine import ResumedAfterCompletion as ResumedAfterCompletion
from .coroutine import Yielded as Yielded
from .gen_iter import GenIter as GenIter
from .gen_iter_return import BorrowError as BorrowError
from .gen_iter_return import Borrowed as Borrowed
from .gen_iter_return import ConsumedError as ConsumedError
from .gen_iter_return import GenIterReturn as GenIterReturn
from .pin import Pin as Pin
from .pin import PinnedError as PinnedError
from .result import Err as Err
from .result import Ok as Ok
