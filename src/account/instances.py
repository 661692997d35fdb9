# === MODULE PURPOSE ===
# Collections of strategy, monitor and listener providers held by an account.
# Their contents are opaque here: they are stored, exposed and cloned.

# === KEY CONCEPTS ===
# - NewInstances: factories called once per traded symbol, each call must
#   return a fresh object (strategies keep per-symbol state)
# - Instances: factories or ready-made objects (order listeners may be shared)
# - copy(): new list, same factories/objects

from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")


class NewInstances(Generic[T]):
    """
    Ordered collection of factories producing new objects per symbol.

    Usage:
        strategies = NewInstances()
        strategies.add(lambda symbol, account_id: MovingAverageCross(symbol))

        for strategy in strategies.create("BTCUSDT", "main"):
            ...
    """

    def __init__(self, *items: Any):
        self._items: list[Any] = []
        self.add(*items)

    def add(self, *items: Any) -> "NewInstances[T]":
        for item in items:
            self._check(item)
            self._items.append(item)
        return self

    def _check(self, item: Any) -> None:
        if not callable(item):
            raise TypeError(f"Expected a factory callable, got {item!r}")

    def create(self, symbol: str, account_id: str = "") -> list[T]:
        return [factory(symbol, account_id) for factory in self._items]

    def clear(self) -> None:
        self._items.clear()

    def copy(self) -> "NewInstances[T]":
        out = type(self)()
        out._items = list(self._items)
        return out

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._items)})"


class Instances(NewInstances[T]):
    """
    Like NewInstances, but plain objects are accepted and returned as-is.

    Classes count as objects, not factories: pass `lambda s, a: MyListener()`
    to get a new listener per symbol.
    """

    def _check(self, item: Any) -> None:
        pass

    def create(self, symbol: str, account_id: str = "") -> list[T]:
        out = []
        for item in self._items:
            if callable(item) and not isinstance(item, type):
                out.append(item(symbol, account_id))
            else:
                out.append(item)
        return out
