"""
The poll loop. One background thread per Notifier.

Each cycle:
    check control channel -> fetch -> extract -> detect -> deliver -> wait

Design notes:
- Control goes through a queue of Signal values, never a shared flag.
  STOP is only acted on between cycles: an in-flight fetch and the
  deliveries it produces always complete.
- The cursor lives on the worker thread. Nothing else writes it.
- The callback runs on the worker thread, one record at a time,
  oldest first. It is never called concurrently with itself.
- Fetch errors, bad nodes, empty pages and callback exceptions are
  logged and absorbed. Only STOP ends the loop.
"""

import logging
import queue
import threading
import time
from collections.abc import Callable
from enum import Enum
from typing import Protocol

from collectors.base import PageFetcher, TransientFetchError
from collectors.extractor import parse_snapshot
from collectors.vlive import VLiveFetcher, build_feed_url
from config.settings import Config, load_config
from models import Record
from notifier.detector import EmptySnapshot, detect_new

log = logging.getLogger(__name__)


class Signal(Enum):
    START = "start"
    STOP = "stop"


class Callback(Protocol):
    """Implement this in your own listener, or pass a plain function."""

    def on_new(self, record: Record) -> None:
        ...


class StopHandle:
    """
    Returned by Notifier.start(). The only way to stop the loop.

    stop() is idempotent and never raises, even after the worker is gone.
    """

    def __init__(self, signals: queue.Queue, thread: threading.Thread):
        self._signals = signals
        self._thread = thread
        self._lock = threading.Lock()
        self._requested = False

    def stop(self):
        with self._lock:
            if self._requested:
                return
            self._requested = True

        if not self._thread.is_alive():
            log.debug("Notifier already exited, nothing to stop")
            return
        self._signals.put(Signal.STOP)
        log.debug("Stop requested")

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the worker to exit. Returns True if it has."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    @property
    def running(self) -> bool:
        return self._thread.is_alive()


class Notifier:
    """
    Polls the feed and calls back once per newly published record.

    Usage:
        handle = Notifier(my_listener, poll_interval=5).start()
        ...
        handle.stop()

    Or block until interrupted:
        Notifier(my_listener).run()
    """

    def __init__(
        self,
        callback: Callback | Callable[[Record], None],
        poll_interval: float | None = None,
        fetcher: PageFetcher | None = None,
        config: Config | None = None,
    ):
        self._config = config or load_config()

        interval = self._config.poll_interval if poll_interval is None else poll_interval
        if interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {interval}")
        self._interval = interval

        self._deliver = getattr(callback, "on_new", callback)
        if not callable(self._deliver):
            raise TypeError("callback must be callable or define on_new(record)")

        self._owns_fetcher = fetcher is None
        self._fetcher = fetcher or VLiveFetcher(self._config)
        self._url = build_feed_url(self._config)

        self._cursor = 0
        self._signals: queue.Queue = queue.Queue()
        self._thread: threading.Thread | None = None
        self._handle: StopHandle | None = None

    @property
    def cursor(self) -> int:
        """Sequence of the freshest record seen so far. 0 = nothing yet."""
        return self._cursor

    @property
    def poll_interval(self) -> float:
        return self._interval

    @property
    def url(self) -> str:
        return self._url

    @property
    def handle(self) -> StopHandle | None:
        """The stop handle issued by start(), or None before that."""
        return self._handle

    # ── control surface ──

    def start(self) -> StopHandle:
        """Spawn the worker and return its stop handle. Single use."""
        if self._handle is not None:
            raise RuntimeError("Notifier already started")

        self._thread = threading.Thread(target=self._loop, name="vlive-notifier", daemon=True)
        self._handle = StopHandle(self._signals, self._thread)
        self._thread.start()
        self._signals.put(Signal.START)
        return self._handle

    def run(self):
        """
        Start and block until the worker exits. Ctrl-C requests a stop
        and waits for the current cycle to finish.
        """
        handle = self.start()
        try:
            handle.join()
        except KeyboardInterrupt:
            log.info("Interrupted, stopping notifier")
            handle.stop()
            handle.join()

    # ── one cycle ──

    def poll_once(self) -> list[Record]:
        """
        Run a single fetch -> extract -> detect -> deliver cycle.
        Returns the records delivered, oldest first.
        """
        if (
            self._thread is not None
            and self._thread.is_alive()
            and threading.current_thread() is not self._thread
        ):
            raise RuntimeError("poll_once() can't run while the worker is running")

        log.debug(f"Polling {self._url} (cursor={self._cursor})")
        try:
            raw = self._fetcher.fetch(self._url)
        except TransientFetchError as e:
            log.warning(f"Fetch failed, skipping cycle: {e}")
            return []
        except Exception:
            log.exception("Unexpected fetcher error, skipping cycle")
            return []

        snapshot = parse_snapshot(raw)
        try:
            detection = detect_new(snapshot, self._cursor)
        except EmptySnapshot:
            log.warning(f"No records found at {self._url}, skipping cycle")
            return []

        for record in detection.new_records:
            self._notify(record)
        self._cursor = detection.cursor

        if detection.new_records:
            log.info(f"Delivered {len(detection.new_records)} new records (cursor={self._cursor})")
        return detection.new_records

    def _notify(self, record: Record):
        log.debug(f"Delivering {record!r}")
        try:
            self._deliver(record)
        except Exception:
            log.exception(f"Callback failed for {record!r}")

    # ── worker ──

    def _loop(self):
        first = self._signals.get()
        if first is Signal.STOP:
            log.info("Notifier stopped before first cycle")
            return
        if first is not Signal.START:
            log.warning(f"Ignoring unrecognised control signal: {first!r}")

        log.info(f"Notifier started, polling every {self._interval}s")
        try:
            while True:
                if self._check_signals():
                    break
                self.poll_once()
                if self._wait():
                    break
        finally:
            if self._owns_fetcher:
                self._fetcher.close()
            log.info(f"Notifier stopped (cursor={self._cursor})")

    def _accept(self, signal) -> bool:
        """True if signal means stop. Anything else is logged and ignored."""
        if signal is Signal.STOP:
            return True
        if signal is Signal.START:
            log.debug("Ignoring START, already running")
        else:
            log.warning(f"Ignoring unrecognised control signal: {signal!r}")
        return False

    def _check_signals(self) -> bool:
        """Drain the control channel without blocking."""
        while True:
            try:
                signal = self._signals.get_nowait()
            except queue.Empty:
                return False
            if self._accept(signal):
                return True

    def _wait(self) -> bool:
        """
        Sleep out the poll interval on the control channel. Returns True
        if STOP arrived, so the next cycle never starts.
        """
        deadline = time.monotonic() + self._interval
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            try:
                signal = self._signals.get(timeout=remaining)
            except queue.Empty:
                return False
            if self._accept(signal):
                return True
