"""
Reading-time tracking for FeedPulse.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from feedpulse.config import get_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadingTick:
    """Elapsed reading time for the article currently open."""
    article_id: str
    category: str
    seconds: int


TickCallback = Callable[[ReadingTick], None]


@dataclass
class ReadingSession:
    article_id: str
    category: str
    on_tick: TickCallback


class ReadingTimeTracker:
    """
    Tracks reading time for the single article view that is open.

    While a session is active a tick carrying a fixed number of seconds is
    emitted once per period. Starting a session cancels the previous one, and
    stopping drops the partial period in progress.

    When ``start`` is called from a running asyncio loop the tracker schedules
    its own ticks; otherwise the host calls :meth:`tick` from its own timer.
    """
    def __init__(self, tick_seconds: Optional[int] = None):
        """
        Initialize the tracker.

        Args:
            tick_seconds: Length of a tick period, defaults to ``tracking.tick_seconds``
        """
        self.tick_seconds = tick_seconds if tick_seconds is not None else get_config('tracking.tick_seconds', 5)
        self._session: Optional[ReadingSession] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._session is not None

    @property
    def article_id(self) -> Optional[str]:
        return self._session.article_id if self._session else None

    def start(self, article_id: str, category: str, on_tick: TickCallback) -> ReadingSession:
        """
        Start tracking an article view.

        Args:
            article_id: Article being read
            category: Category credited with the reading time
            on_tick: Called with a ReadingTick once per period

        Returns:
            The new session
        """
        self.stop()

        session = ReadingSession(article_id=article_id, category=category, on_tick=on_tick)
        self._session = session

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            self._task = loop.create_task(self._run(session))

        logger.debug(f"Started reading session for {article_id}")
        return session

    def stop(self) -> None:
        """Stop the active session, if any. No partial tick is emitted."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

        if self._session is not None:
            logger.debug(f"Stopped reading session for {self._session.article_id}")
            self._session = None

    def tick(self) -> Optional[ReadingTick]:
        """
        Emit one tick for the active session.

        Returns:
            The emitted tick, or None when no session is active
        """
        session = self._session
        if session is None:
            return None

        tick = ReadingTick(article_id=session.article_id, category=session.category, seconds=self.tick_seconds)
        session.on_tick(tick)
        return tick

    async def _run(self, session: ReadingSession) -> None:
        while True:
            await asyncio.sleep(self.tick_seconds)
            if self._session is not session:
                return
            # A failing callback must not end the session's ticking
            try:
                self.tick()
            except Exception:
                logger.exception(f"Tick callback failed for {session.article_id}")
