"""Online/offline status tracking with subscriptions."""

from collections.abc import Callable
from types import TracebackType

import requests
from loguru import logger

from formation_catalog.config import FETCH_TIMEOUT_SECONDS

StatusListener = Callable[[bool], None]


class Subscription:
    """Handle returned by ConnectivityMonitor.subscribe().

    Closing it (directly or by leaving a ``with`` block) stops notifications and
    releases the listener.
    """

    def __init__(self, monitor: "ConnectivityMonitor", listener: StatusListener) -> None:
        self._monitor = monitor
        self._listener: StatusListener | None = listener

    @property
    def closed(self) -> bool:
        return self._listener is None

    def close(self) -> None:
        if self._listener is not None:
            self._monitor._detach(self._listener)
            self._listener = None

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class ConnectivityMonitor:
    """Reflect the host's connectivity signal and notify subscribers of changes."""

    def __init__(self, *, online: bool = True) -> None:
        self._online = online
        self._listeners: list[StatusListener] = []

    def is_online(self) -> bool:
        return self._online

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def set_online(self, online: bool) -> None:
        """Record the host's status; listeners are notified on transitions only."""
        if online == self._online:
            return
        self._online = online
        logger.info("Connectivity changed: {}", "online" if online else "offline")
        for listener in list(self._listeners):
            listener(online)

    def subscribe(self, listener: StatusListener) -> Subscription:
        """Call ``listener`` with the current status now and on every change."""
        self._listeners.append(listener)
        listener(self._online)
        return Subscription(self, listener)

    def _detach(self, listener: StatusListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def probe(
        self,
        url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = FETCH_TIMEOUT_SECONDS,
    ) -> bool:
        """Refresh the status by issuing a HEAD request to ``url``.

        Without ``session`` a temporary one is opened and closed again.
        """
        if session is None:
            with requests.Session() as sess:
                return self._probe_with(sess, url, timeout)
        return self._probe_with(session, url, timeout)

    def _probe_with(self, sess: requests.Session, url: str, timeout: float) -> bool:
        try:
            sess.head(url, timeout=timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.debug("Connectivity probe to {} failed: {}", url, e)
            self.set_online(False)
        else:
            self.set_online(True)
        return self._online
