import pytest

from .coroutine import Complete
from .coroutine import Coroutine
from .coroutine import CoroutineCompleted
from .coroutine import CoroutineErrored
from .coroutine import CoroutineResumed
from .coroutine import CoroutineYielded
from .coroutine import OwnershipError
from .coroutine import ResumedAfterCompletion
from .coroutine import Yielded
from .coroutine import resumable
from .event import Event


def one_two_done():
    yield 1
    yield 2
    return "done"


def test_resume_steps_through_yields_and_return():
    """Resume reports each yield, then the return value."""
    coroutine = Coroutine(one_two_done())

    assert coroutine.resume() == Yielded(1)
    assert coroutine.resume() == Yielded(2)
    assert coroutine.resume() == Complete("done")
    assert coroutine.finished


def test_resume_after_completion_raises():
    """A completed coroutine cannot be resumed."""
    coroutine = Coroutine(one_two_done())
    while not coroutine.finished:
        coroutine.resume()

    with pytest.raises(ResumedAfterCompletion):
        coroutine.resume()


def test_body_exception_propagates_unchanged():
    """Exceptions from the generator body reach the caller of resume."""

    def fails():
        yield 1
        raise KeyError("boom")

    coroutine = Coroutine(fails())
    assert coroutine.resume() == Yielded(1)

    with pytest.raises(KeyError, match="boom"):
        coroutine.resume()

    with pytest.raises(ResumedAfterCompletion):
        coroutine.resume()


def test_started_and_finished_track_progress():
    coroutine = Coroutine(one_two_done())
    assert not coroutine.started
    assert not coroutine.finished

    coroutine.resume()
    assert coroutine.started
    assert not coroutine.finished


def test_from_function_reads_arguments_lazily():
    """The body does not run until the first resume."""
    calls = []

    def body(values):
        calls.append("started")
        yield from values

    coroutine = Coroutine.from_function(body, ([1],))
    assert calls == []
    assert coroutine.resume() == Yielded(1)
    assert calls == ["started"]


def test_reentrant_resume_is_refused():
    def reenter():
        coroutine.resume()
        yield 1

    coroutine = Coroutine(reenter())

    with pytest.raises(ValueError, match="already running"):
        coroutine.resume()


def test_non_generator_is_rejected():
    with pytest.raises(TypeError):
        Coroutine(iter([1, 2]))  # type: ignore[arg-type]


def test_claim_is_exclusive():
    coroutine = Coroutine(one_two_done())
    coroutine.claim()

    with pytest.raises(OwnershipError):
        coroutine.claim()

    coroutine.release()
    coroutine.claim()
    assert coroutine.owned


def test_resumable_wraps_generators_and_passes_through_coroutines():
    coroutine = Coroutine(one_two_done())
    assert resumable(coroutine) is coroutine
    assert isinstance(resumable(one_two_done()), Coroutine)


def test_monitor_publishes_lifecycle_events():
    """Lifecycle events go to the handler installed by monitor."""
    events = []
    coroutine = Coroutine(one_two_done())

    with Coroutine.monitor(events.append):
        coroutine.resume()
        coroutine.resume()
        coroutine.resume()

    assert [type(event) for event in events] == [
        CoroutineResumed,
        CoroutineYielded,
        CoroutineResumed,
        CoroutineYielded,
        CoroutineResumed,
        CoroutineCompleted,
    ]
    assert all(event.coroutine_id == coroutine.id for event in events)
    assert events[-1].value == "done"


def test_monitor_publishes_errors():
    def fails():
        raise ValueError("nope")
        yield

    events = []
    with Coroutine.monitor(events.append), pytest.raises(ValueError):
        Coroutine(fails()).resume()

    assert isinstance(events[-1], CoroutineErrored)
    assert isinstance(events[-1].exception, ValueError)


def test_no_events_outside_monitor():
    events = []
    with Coroutine.monitor(events.append):
        pass

    Coroutine(one_two_done()).resume()
    assert events == []


def test_event_repr_names_its_coroutine():
    events = []
    coroutine = Coroutine(one_two_done())

    with Coroutine.monitor(events.append):
        coroutine.resume()

    resumed = events[0]
    assert repr(resumed) == (
        f"<CoroutineResumed {resumed.event_id} coroutine={coroutine.id}>"
    )
    plain = Event()
    assert repr(plain) == f"<Event {plain.event_id}>"
