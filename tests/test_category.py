import itertools

import pytest

from hierlog import ndc
from hierlog.appender import StringQueueAppender, get_appender
from hierlog.category import (
    Category,
    CategoryStream,
    HierarchyMaintainer,
    exists,
    get_default_maintainer,
    get_instance,
    get_root,
    get_root_priority,
    set_root_priority,
    shutdown_forced,
)
from hierlog.event import LoggingEvent
from hierlog.layout import PassThroughLayout
from hierlog.pattern import PatternLayout
from hierlog.priority import Priority

_counter = itertools.count()


def _queue_appender():
    appender = StringQueueAppender(f"cat-test-queue-{next(_counter)}")
    appender.set_layout(PassThroughLayout())
    return appender


@pytest.fixture
def hierarchy():
    maintainer = HierarchyMaintainer()
    yield maintainer
    maintainer.delete_all_categories()


def test_get_instance_creates_parents(hierarchy):
    cat = hierarchy.get_instance("a.b.c")
    assert cat.name == "a.b.c"
    assert cat.parent.name == "a.b"
    assert cat.parent.parent.name == "a"
    assert cat.parent.parent.parent.name == ""
    assert cat.parent.parent.parent.parent is None


def test_get_instance_returns_same_object(hierarchy):
    assert hierarchy.get_instance("x.y") is hierarchy.get_instance("x.y")
    assert hierarchy.get_existing_instance("x") is hierarchy.get_instance("x.y").parent


def test_get_existing_instance_unknown(hierarchy):
    assert hierarchy.get_existing_instance("nope") is None


def test_root_priority_info_and_children_notset(hierarchy):
    assert hierarchy.get_instance("").priority == Priority.INFO
    assert hierarchy.get_instance("child").priority == Priority.NOTSET


def test_current_categories(hierarchy):
    hierarchy.get_instance("p.q")
    names = {c.name for c in hierarchy.get_current_categories()}
    assert names == {"", "p", "p.q"}


def test_set_priority_notset_on_root_raises(hierarchy):
    root = hierarchy.get_instance("")
    with pytest.raises(ValueError):
        root.set_priority(Priority.NOTSET)
    assert root.priority == Priority.INFO


def test_set_priority_notset_on_child(hierarchy):
    child = hierarchy.get_instance("c")
    child.set_priority(Priority.DEBUG)
    child.set_priority(Priority.NOTSET)
    assert child.priority == Priority.NOTSET


def test_chained_priority(hierarchy):
    leaf = hierarchy.get_instance("a.b")
    assert leaf.get_chained_priority() == Priority.INFO
    hierarchy.get_instance("a").set_priority(Priority.DEBUG)
    assert leaf.get_chained_priority() == Priority.DEBUG


def test_is_priority_enabled(hierarchy):
    cat = hierarchy.get_instance("e")
    assert cat.is_priority_enabled(Priority.INFO)
    assert cat.is_priority_enabled(Priority.ERROR)
    assert not cat.is_priority_enabled(Priority.DEBUG)


def test_logging_formats_arguments(hierarchy):
    cat = hierarchy.get_instance("log")
    appender = _queue_appender()
    cat.add_appender(appender)
    cat.info("value %d", 5)
    cat.warn("plain %s")
    cat.debug("hidden")
    assert appender.pop_message() == "value 5"
    assert appender.pop_message() == "plain %s"
    assert appender.queue_size() == 0


def test_each_level_method(hierarchy):
    cat = hierarchy.get_instance("levels")
    cat.set_priority(Priority.DEBUG)
    appender = _queue_appender()
    appender.set_layout(PatternLayout())
    appender.layout.set_conversion_pattern("%p")
    cat.add_appender(appender)
    for method in (cat.debug, cat.info, cat.notice, cat.warn, cat.error,
                   cat.crit, cat.alert, cat.emerg, cat.fatal):
        method("m")
    messages = [appender.pop_message() for _ in range(9)]
    assert messages == ["DEBUG", "INFO", "NOTICE", "WARN", "ERROR",
                        "CRIT", "ALERT", "FATAL", "FATAL"]


def test_additivity(hierarchy):
    root = hierarchy.get_instance("")
    child = hierarchy.get_instance("kid")
    appender = _queue_appender()
    root.add_appender(appender)
    child.info("up")
    assert appender.pop_message() == "up"
    child.additivity = False
    child.info("blocked")
    assert appender.queue_size() == 0


def test_owned_appender_disposed_on_remove(hierarchy):
    cat = hierarchy.get_instance("own")
    appender = _queue_appender()
    cat.add_appender(appender)
    assert cat.owns_appender(appender)
    cat.remove_appender(appender)
    assert get_appender(appender.name) is None
    assert cat.get_all_appenders() == set()


def test_unowned_appender_survives_remove(hierarchy):
    cat = hierarchy.get_instance("borrow")
    appender = _queue_appender()
    cat.add_appender(appender, owned=False)
    assert not cat.owns_appender(appender)
    cat.remove_all_appenders()
    assert get_appender(appender.name) is appender
    assert cat.get_all_appenders() == set()
    appender.dispose()


def test_add_none_raises(hierarchy):
    with pytest.raises(ValueError):
        hierarchy.get_instance("n").add_appender(None)


def test_add_twice_keeps_one(hierarchy):
    cat = hierarchy.get_instance("twice")
    appender = _queue_appender()
    cat.add_appender(appender)
    cat.add_appender(appender, owned=False)
    assert cat.get_all_appenders() == {appender}
    assert cat.owns_appender(appender)


def test_get_appender(hierarchy):
    cat = hierarchy.get_instance("getter")
    assert cat.get_appender() is None
    appender = _queue_appender()
    cat.add_appender(appender)
    assert cat.get_appender() is appender
    assert cat.get_appender(appender.name) is appender


def test_owns_appender_none(hierarchy):
    assert hierarchy.get_instance("o").owns_appender(None) is False


def test_event_carries_ndc(hierarchy):
    cat = hierarchy.get_instance("ctx")
    appender = _queue_appender()
    layout = PatternLayout()
    layout.set_conversion_pattern("%x|%c|%m")
    appender.set_layout(layout)
    cat.add_appender(appender)
    ndc.clear()
    ndc.push("req")
    try:
        cat.info("hi")
    finally:
        ndc.clear()
    assert appender.pop_message() == "req|ctx|hi"


def test_call_appenders_passes_event(hierarchy):
    cat = hierarchy.get_instance("direct")
    appender = _queue_appender()
    cat.add_appender(appender)
    cat.call_appenders(LoggingEvent("direct", "raw", "", Priority.DEBUG))
    assert appender.pop_message() == "raw"


def test_stream_collects_and_flushes(hierarchy):
    cat = hierarchy.get_instance("stream")
    appender = _queue_appender()
    cat.add_appender(appender)
    with cat.get_stream(Priority.INFO) as stream:
        stream << "a" << 1 << "%"
        assert appender.queue_size() == 0
    assert appender.pop_message() == "a1%"


def test_stream_disabled_priority_discards(hierarchy):
    cat = hierarchy.get_instance("quiet")
    appender = _queue_appender()
    cat.add_appender(appender)
    stream = cat.get_stream(Priority.DEBUG)
    assert stream.priority == Priority.NOTSET
    stream.write("nothing")
    stream.flush()
    assert appender.queue_size() == 0


def test_stream_flush_twice_logs_once(hierarchy):
    cat = hierarchy.get_instance("once")
    appender = _queue_appender()
    cat.add_appender(appender)
    stream = CategoryStream(cat, Priority.ERROR)
    stream.write("x")
    stream.flush()
    stream.flush()
    assert appender.queue_size() == 1


def test_shutdown_runs_handlers_and_removes_appenders(hierarchy):
    cat = hierarchy.get_instance("down")
    appender = _queue_appender()
    cat.add_appender(appender)
    calls = []
    hierarchy.register_shutdown_handler(lambda: calls.append(1))
    hierarchy.shutdown()
    assert calls == [1]
    assert cat.get_all_appenders() == set()
    assert get_appender(appender.name) is None


def test_shutdown_swallows_handler_error(hierarchy):
    calls = []

    def failing():
        raise RuntimeError("boom")

    hierarchy.register_shutdown_handler(failing)
    hierarchy.register_shutdown_handler(lambda: calls.append(1))
    hierarchy.shutdown()
    assert calls == []


def test_delete_all_categories(hierarchy):
    hierarchy.get_instance("a.b")
    hierarchy.delete_all_categories()
    assert hierarchy.get_current_categories() == []


def test_category_standalone():
    root = Category("", None, Priority.WARN)
    child = Category("c", root)
    assert child.get_chained_priority() == Priority.WARN
    assert not child.is_priority_enabled(Priority.INFO)


def test_module_level_functions():
    assert get_root() is get_instance("")
    assert get_default_maintainer().get_instance("") is get_root()
    name = f"cat-test-module-{next(_counter)}"
    assert exists(name) is None
    created = get_instance(name)
    assert exists(name) is created
    saved = get_root_priority()
    try:
        set_root_priority(Priority.ERROR)
        assert get_root_priority() == Priority.ERROR
        assert created.get_chained_priority() == Priority.ERROR
    finally:
        set_root_priority(saved)


def test_shutdown_forced_disposes_loose_appenders():
    loose = _queue_appender()
    shutdown_forced()
    assert get_appender(loose.name) is None