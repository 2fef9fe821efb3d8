# Standard library imports
import asyncio
import logging
from typing import Callable, List, Optional, Sequence, Set, Tuple

# Local application imports
from ...domain.interfaces.geocoder import GeocodeCandidate, Geocoder

logger = logging.getLogger(__name__)

ResultsListener = Callable[[Sequence[GeocodeCandidate]], None]


class GeocodeSearch:
    """
    Debounced address search over a Geocoder.

    Each keystroke restarts the debounce timer; a lookup is only issued once
    the query has been stable for `debounce_seconds` and is at least
    `min_query_length` characters long. Lookups already in flight are not
    cancelled, but only the result of the latest query is ever applied.
    Provider failures produce an empty result list and never propagate.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        min_query_length: int = 3,
        debounce_seconds: float = 0.5,
        max_results: int = 8,
    ) -> None:
        self.geocoder = geocoder
        self.min_query_length = min_query_length
        self.debounce_seconds = debounce_seconds
        self.max_results = max_results

        self.query = ""
        self.loading = False
        self._results: List[GeocodeCandidate] = []
        self._listeners: List[ResultsListener] = []

        self._seq = 0
        self._debounce_task: Optional[asyncio.Task] = None
        self._lookup_tasks: Set[asyncio.Task] = set()

    @property
    def results(self) -> Tuple[GeocodeCandidate, ...]:
        return tuple(self._results)

    def subscribe(self, listener: ResultsListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_query(self, text: str) -> None:
        """
        Update the query text.

        Queries shorter than `min_query_length` (after trimming) clear the
        results immediately without contacting the provider.
        """
        self.query = text
        self._cancel_debounce()
        self._seq += 1

        trimmed = text.strip()
        if len(trimmed) < self.min_query_length:
            self.loading = False
            self._set_results([])
            return

        self._debounce_task = asyncio.get_running_loop().create_task(self._debounce(trimmed, self._seq))

    def clear(self) -> None:
        self.set_query("")

    async def wait_idle(self) -> None:
        """Wait for the pending debounce and every lookup in flight to settle"""
        while True:
            pending = set(self._lookup_tasks)
            if self._debounce_task is not None and not self._debounce_task.done():
                pending.add(self._debounce_task)
            if not pending:
                return
            await asyncio.wait(pending)

    async def close(self) -> None:
        self._cancel_debounce()
        tasks = list(self._lookup_tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._lookup_tasks.clear()
        self._listeners.clear()
        self.loading = False

    async def _debounce(self, query: str, request_id: int) -> None:
        await asyncio.sleep(self.debounce_seconds)
        task = asyncio.get_running_loop().create_task(self._lookup(query, request_id))
        self._lookup_tasks.add(task)
        task.add_done_callback(self._lookup_tasks.discard)

    async def _lookup(self, query: str, request_id: int) -> None:
        if request_id == self._seq:
            self.loading = True
        try:
            candidates = await self.geocoder.search(query, self.max_results)
        except Exception as e:
            logger.warning(f"Address search failed for '{query}': {e}")
            candidates = []

        if request_id != self._seq:
            logger.debug(f"Dropping results of superseded search '{query}'")
            return

        self.loading = False
        self._set_results(list(candidates)[:self.max_results])

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    def _set_results(self, results: List[GeocodeCandidate]) -> None:
        self._results = results
        snapshot = self.results
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Search listener failed: {e}", exc_info=True)
