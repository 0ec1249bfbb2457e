"""
Parameter Debouncing

Interactive callers (a dragged quantile slider) change parameters far more
often than a rebuild is useful. Debouncer coalesces a burst of submissions
into one callback with the last submitted arguments, fired once no new
submission arrived for ``delay`` seconds.

The network pipeline itself stays synchronous; this sits in front of it.

Usage:
    debouncer = Debouncer(lambda tau: service.build(params_for(tau)), delay=0.2)
    for tau in slider_positions:
        debouncer.submit(tau)
"""
import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.2


class Debouncer:
    """Cancellable-timer coalescing buffer."""

    def __init__(self, callback: Callable[..., Any], delay: float = DEFAULT_DEBOUNCE_SECONDS):
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self.callback = callback
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[Tuple[Any, ...], Dict[str, Any]]] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def submit(self, *args: Any, **kwargs: Any) -> None:
        """Replace any pending call and restart the delay."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self.delay, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> bool:
        """Run the pending call now; False if nothing was pending."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            pending, self._pending = self._pending, None
        if pending is None:
            return False
        args, kwargs = pending
        self.callback(*args, **kwargs)
        return True

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer submit superseded this timer
            if generation != self._generation:
                return
            pending, self._pending = self._pending, None
            self._timer = None
        if pending is None:
            return
        args, kwargs = pending
        try:
            self.callback(*args, **kwargs)
        except Exception:
            logger.exception("Debounced callback failed")
