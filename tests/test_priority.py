import pytest

from hierlog.priority import MESSAGE_SIZE, Priority, get_priority_name, get_priority_value


@pytest.mark.parametrize(
    "priority, name",
    [
        (Priority.EMERG, "FATAL"),
        (Priority.FATAL, "FATAL"),
        (Priority.ALERT, "ALERT"),
        (Priority.CRIT, "CRIT"),
        (Priority.ERROR, "ERROR"),
        (Priority.WARN, "WARN"),
        (Priority.NOTICE, "NOTICE"),
        (Priority.INFO, "INFO"),
        (Priority.DEBUG, "DEBUG"),
        (Priority.NOTSET, "NOTSET"),
    ],
)
def test_priority_names(priority, name):
    assert get_priority_name(priority) == name


def test_out_of_range_priorities_are_notset():
    assert get_priority_name(10000) == "NOTSET"
    assert get_priority_name(-1000) == "NOTSET"


def test_fatal_is_emerg():
    assert get_priority_value("FATAL") == Priority.EMERG
    assert get_priority_value("EMERG") == Priority.FATAL
    assert get_priority_name(Priority.FATAL) == get_priority_name(Priority.EMERG) == "FATAL"


@pytest.mark.parametrize(
    "name, value",
    [("FATAL", 0), ("EMERG", 0), ("ALERT", 100), ("INFO", 600), ("NOTSET", 800), ("UNKNOWN", 900)],
)
def test_priority_values(name, value):
    assert get_priority_value(name) == value


def test_numeric_names_are_accepted():
    assert get_priority_value("650") == 650
    assert get_priority_value(" 42") == 42


def test_empty_name_is_zero():
    assert get_priority_value("") == 0


@pytest.mark.parametrize("bad", ["info", "abc", "12abc", " ", "-"])
def test_unknown_names_raise(bad):
    with pytest.raises(ValueError, match="unknown priority name"):
        get_priority_value(bad)


def test_round_trip_for_named_priorities():
    for priority in Priority:
        assert get_priority_value(get_priority_name(priority)) == priority


def test_message_size_fits_every_name():
    longest = max(len(get_priority_name(priority)) for priority in Priority)
    assert longest <= MESSAGE_SIZE
    assert MESSAGE_SIZE == 8