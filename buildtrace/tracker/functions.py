"""Function spans and coalesced enclosing-scope spans."""

from ..clock import Clock
from ..models import Category, FunctionRecord, ScopeRecord, TimeSpan
from ..storage import EventStore
from .tracker import BOUNDARY_GAP_NS

# Scopes extend this far past their first and last function
SCOPE_PAD_NS = 1


class FunctionRecorder:
    """Records parsed functions and groups runs of them by scope."""

    def __init__(self, store: EventStore, clock: Clock):
        self._store = store
        self._clock = clock

    def record_function(
        self,
        signature: str,
        file_id: str,
        scope_name: str | None = None,
        scope_category: Category = Category.UNKNOWN,
    ) -> FunctionRecord:
        store = self._store

        start = store.last_boundary + BOUNDARY_GAP_NS
        end = max(self._clock.now(), start)
        store.last_boundary = end

        record = FunctionRecord(
            signature=signature, file_id=file_id, span=TimeSpan(start=start, end=end)
        )
        store.functions.append(record)

        if scope_name is None:
            store.last_function_had_scope = False
            return record

        if (
            store.scopes
            and store.last_function_had_scope
            and store.scopes[-1].name == scope_name
        ):
            store.scopes[-1].span.end = end + SCOPE_PAD_NS
        else:
            store.scopes.append(
                ScopeRecord(
                    name=scope_name,
                    category=scope_category,
                    span=TimeSpan(start=start - SCOPE_PAD_NS, end=end + SCOPE_PAD_NS),
                )
            )
        store.last_function_had_scope = True
        return record
