"""Periodic snapshot refresh and view re-derivation."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from ..analytics import DEFAULT_ARBITRAGE_LIMIT, build_view
from ..errors import SourceFetchError
from ..interfaces.data_source import AnalyticsSource
from ..models import CATEGORY_ALL, Category, DashboardView, RefreshError, Snapshot

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 30.0

ViewListener = Callable[[DashboardView], Any]


class RefreshController:
    """Owns the auto-refresh timer and the latest derived view.

    Every refresh pulls a full snapshot and replaces the view atomically; a
    failed refresh leaves the previous view in place and records the failure
    in ``last_error``.

    Manual and periodic refreshes may overlap. Each refresh is numbered and a
    result is only applied if no newer refresh has been applied already.
    Stopping auto refresh cancels the timer task, including a periodic fetch
    still in flight, whose result is then discarded.
    """

    def __init__(
        self,
        source: AnalyticsSource,
        wallet_address: str,
        *,
        interval: float = DEFAULT_REFRESH_INTERVAL,
        category: Category | str = CATEGORY_ALL,
        arbitrage_limit: int = DEFAULT_ARBITRAGE_LIMIT,
        auto_refresh: bool = True,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")

        self._source = source
        self._wallet_address = wallet_address
        self._interval = interval
        self._category = category
        self._arbitrage_limit = arbitrage_limit
        self._auto_refresh = auto_refresh

        self._timer: asyncio.Task[None] | None = None
        self._stopping: set[asyncio.Task[None]] = set()
        self._snapshot: Snapshot | None = None
        self._view: DashboardView | None = None
        self._last_error: RefreshError | None = None
        self._listeners: list[ViewListener] = []

        self._issued_seq = 0
        self._applied_seq = 0

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def view(self) -> DashboardView | None:
        return self._view

    @property
    def last_error(self) -> RefreshError | None:
        return self._last_error

    @property
    def auto_refresh(self) -> bool:
        return self._auto_refresh

    @property
    def is_running(self) -> bool:
        """True while a periodic timer task is scheduled."""
        return self._timer is not None and not self._timer.done()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def category(self) -> Category | str:
        return self._category

    @property
    def arbitrage_limit(self) -> int:
        return self._arbitrage_limit

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """Call ``listener`` with every new view; returns an unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, view: DashboardView) -> None:
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception as e:
                logger.error("View listener failed: %s", e)

    # ------------------------------------------------------------------
    # Timer lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Enable auto refresh and schedule the first tick one interval out."""
        self._auto_refresh = True
        if self.is_running:
            return
        self._timer = asyncio.get_running_loop().create_task(self._run_timer())
        logger.info("Auto refresh started (every %.1f seconds)", self._interval)

    def stop(self) -> None:
        """Disable auto refresh; no pending tick fires after this returns."""
        self._auto_refresh = False
        timer, self._timer = self._timer, None
        if timer is not None and not timer.done():
            timer.cancel()
            self._stopping.add(timer)
            timer.add_done_callback(self._stopping.discard)
            logger.info("Auto refresh stopped")

    def set_auto_refresh(self, enabled: bool) -> None:
        if enabled:
            self.start()
        else:
            self.stop()

    async def aclose(self) -> None:
        """Stop the timer and wait for every cancelled timer task to unwind."""
        self.stop()
        for timer in list(self._stopping):
            with contextlib.suppress(asyncio.CancelledError):
                await timer

    async def __aenter__(self) -> RefreshController:
        if self._auto_refresh:
            self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _run_timer(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            logger.debug("Periodic refresh tick")
            await self.refresh_now()

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def _fetch_snapshot(self) -> Snapshot:
        results = await asyncio.gather(
            self._source.fetch_protocols(),
            self._source.fetch_positions(self._wallet_address),
            self._source.fetch_arbitrage_opportunities(),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

        protocols, positions, opportunities = results
        return Snapshot(
            protocols=tuple(protocols),
            positions=tuple(positions),
            opportunities=tuple(opportunities),
            fetched_at=datetime.now(timezone.utc),
        )

    def _record_error(self, seq: int, message: str, retryable: bool) -> None:
        if seq < self._applied_seq:
            return
        self._last_error = RefreshError(
            message=message,
            occurred_at=datetime.now(timezone.utc),
            retryable=retryable,
        )

    async def refresh_now(self) -> bool:
        """Pull a fresh snapshot and re-derive the view.

        Returns True if the new view was applied. Failures are recorded in
        ``last_error`` and never raised.
        """
        self._issued_seq += 1
        seq = self._issued_seq

        try:
            snapshot = await self._fetch_snapshot()
            view = build_view(
                snapshot,
                category=self._category,
                arbitrage_limit=self._arbitrage_limit,
            )
        except SourceFetchError as e:
            logger.error("Refresh failed: %s", e)
            self._record_error(seq, str(e), e.retryable)
            return False
        except Exception as e:
            logger.exception("Unexpected error during refresh")
            self._record_error(seq, f"{type(e).__name__}: {e}", True)
            return False

        if seq < self._applied_seq:
            logger.debug(
                "Discarding refresh #%d, #%d already applied", seq, self._applied_seq
            )
            return False

        self._applied_seq = seq
        self._snapshot = snapshot
        self._view = view
        self._last_error = None
        logger.info(
            "Refreshed: %d protocols, %d positions, %d arbitrage opportunities",
            len(snapshot.protocols),
            len(snapshot.positions),
            len(snapshot.opportunities),
        )
        self._publish(view)
        return True

    def _rederive(self) -> None:
        if self._snapshot is None:
            return
        self._view = build_view(
            self._snapshot,
            category=self._category,
            arbitrage_limit=self._arbitrage_limit,
        )
        self._publish(self._view)

    def set_category(self, category: Category | str) -> None:
        """Change the protocol category and re-derive from the last snapshot."""
        self._category = category
        self._rederive()

    def set_arbitrage_limit(self, limit: int) -> None:
        self._arbitrage_limit = limit
        self._rederive()
