import threading
import time

from services.inventory import InventoryLookupError, LocalInventory
from services.resolver import IngredientResolver


class FakeSource:
    """Search source returning one record per query; can block or fail."""

    def __init__(self, error=None):
        self.error = error
        self.queries = []
        self.gates = {}

    def search(self, query, limit=20):
        self.queries.append((query, limit))
        gate = self.gates.get(query)
        if gate is not None:
            gate.wait(timeout=2)
        if self.error:
            raise self.error
        return [{'key': f"spirits:{query}", 'name': query.title(), 'priceFields': {}}]


def test_search_now_applies_results():
    source = FakeSource()
    resolver = IngredientResolver(source, limit=5)

    assert resolver.search_now('row-1', ' gin ') is True

    state = resolver.state('row-1')
    assert state['loading'] is False
    assert state['query'] == 'gin'
    assert [item['name'] for item in state['items']] == ['Gin']
    assert source.queries == [('gin', 5)]
    assert 'spirits:gin' in resolver.inventory_index


def test_unknown_row_is_idle():
    resolver = IngredientResolver(FakeSource())
    assert resolver.state('nope') == {'loading': False, 'query': '', 'items': [], 'error': None}


def test_debounced_search_runs_once_for_last_query():
    source = FakeSource()
    done = threading.Event()
    seen = []

    def on_results(row_key, state):
        seen.append((row_key, state['query']))
        done.set()

    resolver = IngredientResolver(source, debounce_seconds=0.05, on_results=on_results)
    resolver.schedule('row-1', 'g')
    resolver.schedule('row-1', 'gi')
    resolver.schedule('row-1', 'gin')
    assert resolver.state('row-1')['loading'] is True

    assert done.wait(timeout=2)
    resolver.close()
    assert source.queries == [('gin', 20)]
    assert seen == [('row-1', 'gin')]
    assert resolver.state('row-1')['items'][0]['name'] == 'Gin'


def test_stale_result_is_dropped():
    source = FakeSource()
    source.gates['vodka'] = threading.Event()
    resolver = IngredientResolver(source)
    applied = {}

    slow = threading.Thread(target=lambda: applied.update(slow=resolver.search_now('row-1', 'vodka')))
    slow.start()
    while not source.queries:
        time.sleep(0.005)

    applied['fast'] = resolver.search_now('row-1', 'rum')
    source.gates['vodka'].set()
    slow.join(timeout=2)

    assert applied == {'fast': True, 'slow': False}
    assert resolver.state('row-1')['query'] == 'rum'
    assert 'spirits:vodka' not in resolver.inventory_index


def test_rows_are_independent():
    resolver = IngredientResolver(FakeSource())
    resolver.search_now('row-1', 'gin')
    resolver.search_now('row-2', 'rum')
    assert resolver.state('row-1')['query'] == 'gin'
    assert resolver.state('row-2')['query'] == 'rum'


def test_empty_query_clears_immediately():
    source = FakeSource()
    seen = []
    resolver = IngredientResolver(source, on_results=lambda row_key, state: seen.append(state))
    resolver.search_now('row-1', 'gin')

    resolver.schedule('row-1', '   ')

    assert resolver.state('row-1')['items'] == []
    assert seen[-1] == {'loading': False, 'query': '', 'items': [], 'error': None}
    assert source.queries == [('gin', 20)]


def test_cancel_forgets_row():
    source = FakeSource()
    resolver = IngredientResolver(source, debounce_seconds=0.05)
    resolver.schedule('row-1', 'gin')
    resolver.cancel('row-1')
    time.sleep(0.15)

    assert source.queries == []
    assert resolver.state('row-1')['loading'] is False


def test_lookup_error_sets_error_state():
    resolver = IngredientResolver(FakeSource(error=InventoryLookupError('timeout')))

    assert resolver.search_now('row-1', 'gin') is True

    state = resolver.state('row-1')
    assert state['items'] == []
    assert state['error'] == 'timeout'


def test_local_inventory_on_timer_thread(app, stocked):
    done = threading.Event()
    resolver = IngredientResolver(LocalInventory(app=app), debounce_seconds=0.01,
                                  on_results=lambda row_key, state: done.set())

    resolver.schedule('row-1', 'sour')

    assert done.wait(timeout=2)
    assert resolver.state('row-1')['items'][0]['key'] == stocked['sour']


def test_app_resolver_uses_search_settings(app, stocked):
    from app import create_resolver

    done = threading.Event()
    resolver = create_resolver(app, on_results=lambda row_key, state: done.set())
    assert resolver.debounce_seconds == app.config['SEARCH_DEBOUNCE_SECONDS']
    assert resolver.limit == app.config['SEARCH_LIMIT']

    resolver.schedule('row-1', 'gin')

    assert done.wait(timeout=2)
    assert resolver.state('row-1')['items'][0]['key'] == stocked['gin']
    assert stocked['gin'] in resolver.inventory_index


def test_unexpected_source_error_ends_loading(caplog):
    done = threading.Event()
    resolver = IngredientResolver(FakeSource(error=RuntimeError('db down')), debounce_seconds=0.01,
                                  on_results=lambda row_key, state: done.set())

    resolver.schedule('row-1', 'gin')

    assert done.wait(timeout=2)
    state = resolver.state('row-1')
    assert state['loading'] is False
    assert state['items'] == []
    assert state['error'] == 'db down'
    assert 'Unexpected error' in caplog.text


def test_unexpected_error_for_stale_query_is_dropped():
    class FailingVodka(FakeSource):
        def search(self, query, limit=20):
            results = super().search(query, limit)
            if query == 'vodka':
                raise RuntimeError('db down')
            return results

    source = FailingVodka()
    source.gates['vodka'] = threading.Event()
    resolver = IngredientResolver(source)
    applied = {}

    slow = threading.Thread(target=lambda: applied.update(slow=resolver.search_now('row-1', 'vodka')))
    slow.start()
    while not source.queries:
        time.sleep(0.005)

    resolver.search_now('row-1', 'rum')
    source.gates['vodka'].set()
    slow.join(timeout=2)

    assert applied['slow'] is False
    assert resolver.state('row-1')['error'] is None
