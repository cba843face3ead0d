"""Change tracking for board models and batched re-rendering."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, SupportsIndex

from issuebridge.logging import get_logger

logger = get_logger("boards")

Listener = Callable[[], None]


class Reactive:
    """Object that notifies listeners when a public attribute is written.

    Lists assigned to attributes are wrapped in ReactiveList so in-place
    mutations notify too. Reactive values held by the object forward their
    own changes to its listeners until they are removed or replaced.
    """

    def __init__(self) -> None:
        object.__setattr__(self, "_listeners", [])

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _adopt(self, value: Any) -> Any:
        if isinstance(value, list) and not isinstance(value, ReactiveList):
            value = ReactiveList(value, self._notify, self._adopt, self._release)
        elif isinstance(value, Reactive):
            value.subscribe(self._notify)
        return value

    def _holds(self, value: Any) -> bool:
        for name, attr in vars(self).items():
            if name.startswith("_"):
                continue
            if attr is value or (isinstance(attr, list) and any(v is value for v in attr)):
                return True
        return False

    def _release(self, value: Any) -> None:
        """Stop forwarding changes from a value this object no longer holds."""
        if isinstance(value, ReactiveList):
            value.detach()
            for item in value:
                self._release(item)
        elif isinstance(value, Reactive) and not self._holds(value):
            value.unsubscribe(self._notify)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        previous = vars(self).get(name)
        adopted = self._adopt(value)
        object.__setattr__(self, name, adopted)
        if previous is not None and previous is not adopted:
            self._release(previous)
        self._notify()


def _ignore() -> None:
    pass


def _unchanged(value: Any) -> Any:
    return value


class ReactiveList(list[Any]):
    """List that calls `on_change` after every in-place mutation.

    Items going in pass through `adopt`; items taken out pass through `release`.
    """

    def __init__(
        self,
        items: Iterable[Any],
        on_change: Listener,
        adopt: Callable[[Any], Any],
        release: Callable[[Any], None],
    ) -> None:
        self._on_change = on_change
        self._adopt_item = adopt
        self._release_item = release
        super().__init__(adopt(item) for item in items)

    def detach(self) -> None:
        """Stop reporting changes, e.g. once the owner replaced this list."""
        self._on_change = _ignore
        self._adopt_item = _unchanged
        self._release_item = _unchanged

    def _released(self, items: Iterable[Any]) -> None:
        for item in items:
            self._release_item(item)
        self._on_change()

    def append(self, item: Any) -> None:
        super().append(self._adopt_item(item))
        self._on_change()

    def extend(self, items: Iterable[Any]) -> None:
        super().extend(self._adopt_item(item) for item in items)
        self._on_change()

    def insert(self, index: SupportsIndex, item: Any) -> None:
        super().insert(index, self._adopt_item(item))
        self._on_change()

    def remove(self, item: Any) -> None:
        super().remove(item)
        self._released([item])

    def pop(self, index: SupportsIndex = -1) -> Any:
        item = super().pop(index)
        self._released([item])
        return item

    def clear(self) -> None:
        removed = list(self)
        super().clear()
        self._released(removed)

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            removed = super().__getitem__(index)
            super().__setitem__(index, [self._adopt_item(v) for v in value])
        else:
            removed = [super().__getitem__(index)]
            super().__setitem__(index, self._adopt_item(value))
        self._released(removed)

    def __delitem__(self, index: Any) -> None:
        item = super().__getitem__(index)
        removed = item if isinstance(index, slice) else [item]
        super().__delitem__(index)
        self._released(removed)

    def __iadd__(self, items: Iterable[Any]) -> ReactiveList:  # type: ignore[override]
        self.extend(items)
        return self


class Renderable(Protocol):
    def update(self) -> None: ...


class RenderQueue:
    """Collects components with pending changes and re-renders them on the next tick.

    A component is re-rendered at most once per tick no matter how many
    changes it saw; it reflects the state at flush time.
    """

    def __init__(self) -> None:
        self._dirty: list[Renderable] = []
        self._callbacks: list[Callable[[], None]] = []

    @property
    def pending(self) -> int:
        return len(self._dirty)

    def schedule(self, component: Renderable) -> None:
        if not any(c is component for c in self._dirty):
            self._dirty.append(component)

    def next_tick(self, callback: Callable[[], None] | None = None) -> None:
        """Flush pending renders, then run queued callbacks in order."""
        if callback is not None:
            self._callbacks.append(callback)

        dirty, self._dirty = self._dirty, []
        for component in dirty:
            component.update()
        if dirty:
            logger.debug("Re-rendered %d component(s)", len(dirty))

        callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb()
