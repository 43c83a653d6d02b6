"""
Ingredient Resolver

Debounced, per-row ingredient search against an inventory source.

Each recipe row has at most one pending search timer. A new keystroke
cancels the row's timer and bumps the row's generation; when a lookup
finishes, its results are applied only if its generation is still the
latest for that row. Late answers to superseded queries are dropped.
"""

import logging
import threading

from services.inventory import InventoryLookupError

logger = logging.getLogger(__name__)


def _idle_state():
    return {'loading': False, 'query': '', 'items': [], 'error': None}


class IngredientResolver:
    """
    Args:
        source: object with ``search(query, limit)`` (LocalInventory,
            RemoteInventory, or any stand-in)
        debounce_seconds: delay between the last keystroke and the lookup
        limit: maximum candidates per search
        on_results: optional ``callback(row_key, state)`` fired whenever a
            row's search state is replaced by a current result
    """

    def __init__(self, source, debounce_seconds=0.2, limit=20, on_results=None):
        self.source = source
        self.debounce_seconds = debounce_seconds
        self.limit = limit
        self.on_results = on_results
        self._lock = threading.Lock()
        self._timers = {}
        self._generations = {}
        self._states = {}
        self._cache = {}

    def state(self, row_key):
        """Latest search state for a row."""
        with self._lock:
            return dict(self._states.get(row_key) or _idle_state())

    @property
    def inventory_index(self):
        """Every record seen so far, keyed for the row hydrator."""
        with self._lock:
            return dict(self._cache)

    def _next_generation(self, row_key):
        generation = self._generations.get(row_key, 0) + 1
        self._generations[row_key] = generation
        timer = self._timers.pop(row_key, None)
        if timer is not None:
            timer.cancel()
        return generation

    def schedule(self, row_key, query):
        """Queue a search for ``query`` after the debounce window."""
        query = (query or '').strip()
        with self._lock:
            generation = self._next_generation(row_key)
            if not query:
                self._states[row_key] = _idle_state()
                state = dict(self._states[row_key])
            else:
                self._states[row_key] = {
                    **(self._states.get(row_key) or _idle_state()),
                    'loading': True,
                    'query': query,
                }
                timer = threading.Timer(self.debounce_seconds, self._run,
                                        args=(row_key, generation, query))
                timer.daemon = True
                self._timers[row_key] = timer
                timer.start()
                return generation
        self._notify(row_key, state)
        return generation

    def search_now(self, row_key, query):
        """Run a search immediately on the calling thread; True if applied."""
        query = (query or '').strip()
        with self._lock:
            generation = self._next_generation(row_key)
        return self._run(row_key, generation, query)

    def cancel(self, row_key):
        """Forget a row: stop its timer and ignore any in-flight result."""
        with self._lock:
            self._next_generation(row_key)
            self._states.pop(row_key, None)

    def close(self):
        with self._lock:
            for row_key in list(self._timers):
                self._next_generation(row_key)

    def _run(self, row_key, generation, query):
        items, error = [], None
        if query:
            try:
                items = self.source.search(query, self.limit)
            except InventoryLookupError as e:
                logger.error(f"Ingredient search for row {row_key} failed: {e}")
                error = str(e)
            except Exception as e:
                # Runs on a timer thread; the row must still leave the loading state
                logger.exception(f"Unexpected error searching {query!r} for row {row_key}")
                error = str(e) or type(e).__name__

        with self._lock:
            if self._generations.get(row_key) != generation:
                logger.debug(f"Dropping stale results for row {row_key} ({query!r})")
                return False
            self._timers.pop(row_key, None)
            for record in items:
                if record.get('key'):
                    self._cache[record['key']] = record
            state = {'loading': False, 'query': query, 'items': items, 'error': error}
            self._states[row_key] = state

        self._notify(row_key, dict(state))
        return True

    def _notify(self, row_key, state):
        if self.on_results is not None:
            self.on_results(row_key, state)
