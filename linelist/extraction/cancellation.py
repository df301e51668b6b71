import threading


class CancelToken:
    """Caller-owned flag checked at every suspension point of a submission or poll."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return early with True once cancelled."""
        return self._event.wait(seconds)
