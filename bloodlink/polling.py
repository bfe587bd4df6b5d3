# bloodlink/polling.py
"""
Recurring task used by dashboards to re-read the store.

There is no push channel: a consumer that wants to see other actors'
changes re-runs its query every ``interval`` seconds and cancels the task
when it is torn down.
"""
import logging
import threading

logger = logging.getLogger(__name__)


class RecurringTask:
    def __init__(self, callback, interval, name=None):
        if interval < 0:
            raise ValueError("interval must not be negative")
        self.callback = callback
        self.interval = interval
        self.name = name or getattr(callback, '__name__', 'recurring-task')
        self.runs = 0
        self._stopped = threading.Event()
        self._thread = None

    @property
    def cancelled(self):
        return self._stopped.is_set()

    def run(self, max_runs=None):
        """
        Run the callback in the calling thread until cancelled.

        The first run happens immediately, later runs every ``interval``
        seconds. ``max_runs`` of 0 returns without calling the callback.
        Exceptions from the callback propagate and stop the loop.
        """
        while not self._stopped.is_set():
            if max_runs is not None and self.runs >= max_runs:
                break
            self.callback()
            self.runs += 1
            if max_runs is not None and self.runs >= max_runs:
                break
            if self._stopped.wait(self.interval):
                break
        logger.debug(f"{self.name} stopped after {self.runs} run(s)")

    def start(self):
        """Run on a daemon thread; returns immediately"""
        if self._thread is not None:
            raise RuntimeError(f"{self.name} already started")
        self._thread = threading.Thread(target=self.run, name=self.name, daemon=True)
        self._thread.start()
        return self

    def cancel(self, timeout=None):
        """Stop the loop; waits for a started thread to finish"""
        self._stopped.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
