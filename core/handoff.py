"""Single-slot handoff for one-shot picker callbacks (folder, files, save path)."""

import queue
import threading

_CLOSED = object()


class NoSelection(Exception):
    """The picker was cancelled or its channel closed without a value."""


class SelectionHandoff:
    """Carries exactly one response from a picker callback to a waiting caller.

    respond() may be called from any thread; only the first response or close()
    is delivered, later calls are ignored.
    """

    def __init__(self):
        self._slot = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self._done = False

    def _deliver(self, item):
        with self._lock:
            if self._done:
                return False
            self._done = True
        self._slot.put(item)
        return True

    def respond(self, value):
        return self._deliver(value)

    def close(self):
        return self._deliver(_CLOSED)

    def wait(self, timeout=None):
        """Block until the response arrives.

        Raises:
            NoSelection: On None, an empty list, a closed channel, or timeout.
        """
        try:
            item = self._slot.get(timeout=timeout)
        except queue.Empty:
            raise NoSelection("No selection received")
        if item is _CLOSED or item is None or item == []:
            raise NoSelection("No selection made")
        return item


def request_selection(open_picker, timeout=None):
    """Issue a picker request and wait for its single answer.

    open_picker is called with the handoff; it must eventually call
    handoff.respond(value) or handoff.close().
    """
    handoff = SelectionHandoff()
    try:
        open_picker(handoff)
    except Exception:
        handoff.close()
        raise
    return handoff.wait(timeout)
