import pytest

from hierlog.event import LoggingEvent
from hierlog.filter import Decision, Filter
from hierlog.priority import Priority


class FixedFilter(Filter):
    def __init__(self, decision, chained_filter=None):
        super().__init__(chained_filter)
        self.decision = decision
        self.calls = 0

    def _decide(self, event):
        self.calls += 1
        return self.decision


@pytest.fixture
def event():
    return LoggingEvent("cat", "msg", "", Priority.INFO, thread_name="t")


@pytest.mark.parametrize("decision", list(Decision))
def test_single_filter_returns_own_decision(decision, event):
    assert FixedFilter(decision).decide(event) is decision


def test_neutral_delegates_to_chain(event):
    chain = FixedFilter(Decision.NEUTRAL, FixedFilter(Decision.DENY))
    assert chain.decide(event) is Decision.DENY


def test_non_neutral_stops_chain(event):
    tail = FixedFilter(Decision.DENY)
    head = FixedFilter(Decision.ACCEPT, tail)
    assert head.decide(event) is Decision.ACCEPT
    assert tail.calls == 0


def test_all_neutral_is_neutral(event):
    head = FixedFilter(Decision.NEUTRAL)
    head.append_chained_filter(FixedFilter(Decision.NEUTRAL))
    head.append_chained_filter(FixedFilter(Decision.NEUTRAL))
    assert head.decide(event) is Decision.NEUTRAL


def test_end_of_chain_single_is_self(event):
    single = FixedFilter(Decision.NEUTRAL)
    end = single.end_of_chain()
    assert end is single
    assert end.decide(event) is Decision.NEUTRAL
    other = FixedFilter(Decision.DENY)
    single.append_chained_filter(other)
    assert single.end_of_chain() is other


def test_append_chained_filter_adds_at_end(event):
    head = FixedFilter(Decision.NEUTRAL)
    middle = FixedFilter(Decision.NEUTRAL)
    last = FixedFilter(Decision.ACCEPT)
    head.append_chained_filter(middle)
    head.append_chained_filter(last)
    assert head.chained_filter is middle
    assert middle.chained_filter is last
    assert head.end_of_chain() is last
    assert head.decide(event) is Decision.ACCEPT
    assert last.calls == 1


def test_filter_is_abstract():
    with pytest.raises(TypeError):
        Filter()