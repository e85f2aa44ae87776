import pytest

from hierlog.appender import StringQueueAppender
from hierlog.category import get_instance
from hierlog.fixedcontext import FixedContextCategory
from hierlog.pattern import PatternLayout
from hierlog.priority import Priority


@pytest.fixture
def setup(request):
    name = f"fc.{request.node.name}"
    delegate = get_instance(name)
    delegate.set_priority(Priority.DEBUG)
    queue = StringQueueAppender(f"fcq-{request.node.name}")
    layout = PatternLayout()
    layout.set_conversion_pattern("%x|%c|%m")
    queue.set_layout(layout)
    delegate.add_appender(queue, owned=False)
    delegate.additivity = False
    yield name, delegate, queue
    delegate.remove_all_appenders()
    delegate.additivity = True
    queue.dispose()


def test_logs_with_fixed_context(setup):
    name, delegate, queue = setup
    fc = FixedContextCategory(name, "ctx")
    fc.info("hello")
    assert queue.pop_message() == f"ctx|{name}|hello"


def test_context_can_change(setup):
    name, delegate, queue = setup
    fc = FixedContextCategory(name, "one")
    fc.context = "two"
    fc.warn("msg %d", 5)
    assert queue.pop_message() == f"two|{name}|msg 5"


def test_chained_priority_follows_delegate(setup):
    name, delegate, queue = setup
    fc = FixedContextCategory(name, "ctx")
    assert fc.get_chained_priority() == Priority.DEBUG
    fc.set_priority(Priority.WARN)
    assert fc.get_chained_priority() == Priority.WARN
    fc.debug("dropped")
    assert queue.queue_size() == 0


def test_shares_parent_with_delegate(setup):
    name, delegate, queue = setup
    fc = FixedContextCategory(name, "ctx")
    assert fc.parent is delegate.parent
    assert fc.delegate is delegate


def test_appender_changes_are_ignored(setup):
    name, delegate, queue = setup
    fc = FixedContextCategory(name, "ctx")
    extra = StringQueueAppender("fc-extra")
    try:
        fc.add_appender(extra)
        assert extra not in fc.get_all_appenders()
        assert fc.get_all_appenders() == {queue}
        fc.remove_all_appenders()
        assert delegate.get_all_appenders() == {queue}
        assert fc.owns_appender(queue) is False
        assert fc.get_appender() is queue
    finally:
        extra.dispose()


def test_additivity_follows_delegate(setup):
    name, delegate, queue = setup
    fc = FixedContextCategory(name, "ctx")
    assert fc.additivity is False
    fc.additivity = True
    assert fc.additivity is False
    delegate.additivity = True
    assert fc.additivity is True
    delegate.additivity = False