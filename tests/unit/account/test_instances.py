# Tests for strategy/monitor/listener collections

import pytest

from src.account.instances import Instances, NewInstances


class Strategy:
    def __init__(self, symbol: str):
        self.symbol = symbol


class Listener:
    pass


class TestNewInstances:
    """Tests for NewInstances."""

    def test_create_returns_new_objects(self):
        """Test each create() call builds fresh objects."""
        strategies = NewInstances().add(lambda symbol, account_id: Strategy(symbol))

        first = strategies.create("BTCUSDT", "main")
        second = strategies.create("BTCUSDT", "main")

        assert first[0].symbol == "BTCUSDT"
        assert first[0] is not second[0]

    def test_rejects_non_callable(self):
        """Test only factories are accepted."""
        with pytest.raises(TypeError):
            NewInstances().add(Listener())

    def test_copy_is_structural(self):
        """Test copy has its own list holding the same factories."""
        factory = lambda symbol, account_id: Strategy(symbol)  # noqa: E731
        strategies = NewInstances(factory)
        copy = strategies.copy()
        copy.add(lambda symbol, account_id: Strategy(symbol))

        assert len(strategies) == 1
        assert len(copy) == 2
        assert list(copy)[0] is factory
        assert isinstance(copy, NewInstances)

    def test_clear(self):
        """Test clear removes all factories."""
        strategies = NewInstances(lambda s, a: Strategy(s))
        strategies.clear()
        assert not strategies
        assert strategies.create("BTCUSDT") == []


class TestInstances:
    """Tests for Instances."""

    def test_mixes_objects_and_factories(self):
        """Test ready-made objects are shared, factories are called."""
        shared = Listener()
        listeners = Instances(shared, lambda symbol, account_id: Listener())

        first = listeners.create("BTCUSDT")
        second = listeners.create("ETHUSDT")

        assert first[0] is shared and second[0] is shared
        assert first[1] is not second[1]

    def test_class_is_kept_as_object(self):
        """Test classes are not treated as factories."""
        listeners = Instances(Listener)
        assert listeners.create("BTCUSDT") == [Listener]

    def test_copy_keeps_type(self):
        """Test copy of Instances is an Instances."""
        assert isinstance(Instances(Listener()).copy(), Instances)
