# scheduler.py
"""
A request-on-next-frame scheduler, modelled on requestAnimationFrame.

Each request runs once, on the next frame only; animations that want to
keep going must request again from inside their callback. The host calls
run_frame() once per display refresh.
"""
import logging
from typing import Callable, Dict

from context import FrameContext

# --- Data Contracts ---
#
# class FrameScheduler:
#   - request_frame(self, callback: Callable[[FrameContext], None]) -> int:
#     - Outputs: a positive handle, unique for the scheduler's lifetime.
#   - cancel_frame(self, handle: int) -> None:
#     - Side Effects: Drops the pending callback. Unknown or already-run
#       handles are ignored.
#   - run_frame(self, context: FrameContext) -> int:
#     - Side Effects: Runs the callbacks that were pending when the call
#       started, in request order. Callbacks requested while running are
#       deferred to the following frame.
#     - Outputs: number of callbacks run.
#     - Raises: whatever a callback raises. Callbacks not yet run stay
#       pending for the next frame.

FrameCallback = Callable[[FrameContext], None]


class FrameScheduler:
    """
    Owns the callbacks waiting for the next frame.
    """
    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._due: Dict[int, FrameCallback] = {}
        self._next_handle = 1
        self.frame_count = 0

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)
        # A callback may cancel another one due in the same frame.
        self._due.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self, context: FrameContext) -> int:
        """
        Dispatches one frame worth of callbacks.
        """
        # Snapshot first: requests made by the callbacks belong to the next frame.
        self._due = self._pending
        self._pending = {}
        self.frame_count += 1

        ran = 0
        try:
            while self._due:
                handle = next(iter(self._due))
                callback = self._due.pop(handle)
                callback(context)
                ran += 1
        finally:
            if self._due:
                # A callback raised; the ones behind it run next frame, first.
                logging.warning(
                    f"Frame {self.frame_count} aborted; {len(self._due)} callbacks deferred."
                )
                self._pending = {**self._due, **self._pending}
                self._due = {}

        if ran > 1:
            logging.debug(f"Frame {self.frame_count} dispatched {ran} callbacks.")
        return ran
