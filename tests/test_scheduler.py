import pytest

from context import FrameContext
from scheduler import FrameScheduler


def test_request_runs_once_on_the_next_frame(scheduler):
    seen = []
    scheduler.request_frame(seen.append)
    context = FrameContext(dark_mode=True)

    assert scheduler.run_frame(context) == 1
    assert seen == [context]
    assert scheduler.run_frame(FrameContext()) == 0
    assert len(seen) == 1


def test_requests_made_during_a_frame_wait_for_the_next_one(scheduler):
    seen = []

    def again(context):
        seen.append(scheduler.frame_count)
        scheduler.request_frame(again)

    scheduler.request_frame(again)
    scheduler.run_frame(FrameContext())
    scheduler.run_frame(FrameContext())

    assert seen == [1, 2]
    assert scheduler.pending == 1


def test_callbacks_run_in_request_order(scheduler):
    order = []
    scheduler.request_frame(lambda context: order.append("a"))
    scheduler.request_frame(lambda context: order.append("b"))

    scheduler.run_frame(FrameContext())

    assert order == ["a", "b"]


def test_cancelled_request_never_runs(scheduler):
    seen = []
    handle = scheduler.request_frame(seen.append)

    scheduler.cancel_frame(handle)

    assert scheduler.pending == 0
    assert scheduler.run_frame(FrameContext()) == 0
    assert seen == []


def test_callback_can_cancel_another_due_in_the_same_frame(scheduler):
    seen = []
    handles = {}
    handles["first"] = scheduler.request_frame(
        lambda context: scheduler.cancel_frame(handles["second"])
    )
    handles["second"] = scheduler.request_frame(seen.append)

    assert scheduler.run_frame(FrameContext()) == 1
    assert seen == []


def test_handles_are_unique_and_unknown_handles_are_ignored():
    scheduler = FrameScheduler()
    handles = {scheduler.request_frame(lambda context: None) for _ in range(5)}

    assert len(handles) == 5
    scheduler.cancel_frame(12345)
    assert scheduler.pending == 5


def test_callbacks_behind_a_failing_one_run_next_frame(scheduler):
    seen = []

    def fail(context):
        raise RuntimeError("callback failed")

    scheduler.request_frame(fail)
    scheduler.request_frame(lambda context: seen.append("late"))

    with pytest.raises(RuntimeError):
        scheduler.run_frame(FrameContext())

    assert seen == []
    assert scheduler.pending == 1
    scheduler.request_frame(lambda context: seen.append("new"))
    assert scheduler.run_frame(FrameContext()) == 2
    assert seen == ["late", "new"]
