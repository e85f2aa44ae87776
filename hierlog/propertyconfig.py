"""Configuration of categories and appenders from log4j-style property files."""

from __future__ import annotations

import os
import sys
from typing import Iterable

from hierlog.appender import AbortAppender, Appender, OstreamAppender
from hierlog.category import Category, get_instance, get_root
from hierlog.dailyrolling import DailyRollingFileAppender
from hierlog.errors import ConfigureFailure
from hierlog.fileappender import FileAppender, RollingFileAppender
from hierlog.layout import BasicLayout, Layout, SimpleLayout
from hierlog.pattern import PatternLayout
from hierlog.priority import Priority, get_priority_value
from hierlog.properties import Properties
from hierlog.stringutil import split, trim
from hierlog.syslog import RemoteSyslogAppender

__all__ = ["PropertyConfigurator", "configure"]

_ROOT_KEY = "rootCategory"
_APPENDER_PREFIX = "appender."
_CATEGORY_PREFIX = "category."


def _type_name(value: str) -> str:
    """Return the part after the last dot of a class name like 'org.x.FileAppender'."""
    return value.rpartition(".")[2]


class PropertyConfigurator:
    """Reads properties and sets up appenders, layouts and categories from them.

    Appenders created by earlier configurations stay known to this
    configurator unless a later configuration redefines them.
    """

    def __init__(self) -> None:
        self.properties = Properties()
        self._all_appenders: dict[str, Appender] = {}

    def do_configure(self, source: str | os.PathLike[str] | Iterable[str]) -> None:
        """Configure from a file name or from an iterable of lines.

        Raises ConfigureFailure when the file cannot be read or the
        configuration is invalid.
        """
        if isinstance(source, (str, os.PathLike)):
            try:
                with open(source, encoding="utf-8") as stream:
                    self.properties.load(stream)
            except OSError:
                raise ConfigureFailure(f"File {os.fspath(source)} does not exist") from None
        else:
            self.properties.load(source)

        self._instantiate_all_appenders()
        for category_name in self.get_categories():
            self._configure_category(category_name)

    def get_categories(self) -> list[str]:
        """Return 'rootCategory' followed by every configured category, sorted."""
        names = [
            key[len(_CATEGORY_PREFIX):]
            for key in sorted(self.properties)
            if key.startswith(_CATEGORY_PREFIX)
        ]
        return [_ROOT_KEY, *names]

    def _instantiate_all_appenders(self) -> None:
        current = None
        for key in sorted(self.properties):
            if not key.startswith(_APPENDER_PREFIX):
                continue
            parts = split(key, ".")
            if len(parts) < 2:
                raise ConfigureFailure("missing appender name")
            appender_name = parts[1]
            if appender_name == current:
                continue
            if len(parts) == 2:
                current = appender_name
                self._all_appenders[current] = self._instantiate_appender(current)
            else:
                raise ConfigureFailure(f"partial appender definition : {key}")

    def _configure_category(self, category_name: str) -> None:
        key = category_name if category_name == _ROOT_KEY else _CATEGORY_PREFIX + category_name
        if key not in self.properties:
            raise ConfigureFailure(f"Unable to find category: {key}")

        category: Category = get_root() if category_name == _ROOT_KEY else get_instance(category_name)

        tokens = split(self.properties[key], ",")
        priority = int(Priority.NOTSET)
        priority_name = trim(tokens[0])
        try:
            if priority_name != "":
                priority = get_priority_value(priority_name)
        except ValueError as exc:
            raise ConfigureFailure(f"{exc} for category '{category_name}'") from None

        try:
            category.set_priority(priority)
        except ValueError as exc:
            raise ConfigureFailure(f"{exc} for category '{category_name}'") from None

        category.additivity = self.properties.get_bool(f"additivity.{category_name}", True)

        category.remove_all_appenders()
        for token in tokens[1:]:
            appender_name = trim(token)
            appender = self._all_appenders.get(appender_name)
            if appender is None:
                raise ConfigureFailure(
                    f"Appender '{appender_name}' not found for category '{category_name}'"
                )
            # shared between categories, so not owned by any of them
            category.add_appender(appender, owned=False)

    def _instantiate_appender(self, appender_name: str) -> Appender:
        prefix = _APPENDER_PREFIX + appender_name
        if prefix not in self.properties:
            raise ConfigureFailure(f"Appender '{appender_name}' not defined")
        appender_type = _type_name(self.properties[prefix])
        props = self.properties

        appender: Appender
        if appender_type == "ConsoleAppender":
            target = props.get_string(prefix + ".target", "stdout").lower()
            if target == "stdout":
                appender = OstreamAppender(appender_name, sys.stdout)
            elif target == "stderr":
                appender = OstreamAppender(appender_name, sys.stderr)
            else:
                raise ConfigureFailure(f"{appender_name}' has invalid target '{target}'")
        elif appender_type == "FileAppender":
            file_name = props.get_string(prefix + ".fileName", "foobar")
            append = props.get_bool(prefix + ".append", True)
            appender = FileAppender(appender_name, file_name, append)
        elif appender_type == "RollingFileAppender":
            file_name = props.get_string(prefix + ".fileName", "foobar")
            max_file_size = props.get_int(prefix + ".maxFileSize", 10 * 1024 * 1024)
            max_backup_index = props.get_int(prefix + ".maxBackupIndex", 1)
            append = props.get_bool(prefix + ".append", True)
            appender = RollingFileAppender(
                appender_name, file_name, max_file_size, max_backup_index, append
            )
        elif appender_type == "DailyRollingFileAppender":
            file_name = props.get_string(prefix + ".fileName", "foobar")
            max_days_keep = props.get_int(prefix + ".maxDaysKeep", 0)
            append = props.get_bool(prefix + ".append", True)
            appender = DailyRollingFileAppender(appender_name, file_name, max_days_keep, append)
        elif appender_type == "SyslogAppender":
            syslog_name = props.get_string(prefix + ".syslogName", "syslog")
            syslog_host = props.get_string(prefix + ".syslogHost", "localhost")
            # facility numbers are given as syslog facility codes
            facility = props.get_int(prefix + ".facility", -1) * 8
            port_number = props.get_int(prefix + ".portNumber", -1)
            appender = RemoteSyslogAppender(
                appender_name, syslog_name, syslog_host, facility, port_number
            )
        elif appender_type == "AbortAppender":
            appender = AbortAppender(appender_name)
        else:
            raise ConfigureFailure(
                f"Appender '{appender_name}' has unknown type '{appender_type}'"
            )

        try:
            if appender.requires_layout():
                self._set_layout(appender, appender_name)
        except ConfigureFailure:
            appender.dispose()
            raise

        threshold_name = props.get_string(prefix + ".threshold", "")
        if threshold_name != "":
            try:
                appender.threshold = get_priority_value(threshold_name)
            except ValueError as exc:
                appender.dispose()
                raise ConfigureFailure(
                    f"{exc} for threshold of appender '{appender_name}'"
                ) from None

        return appender

    def _set_layout(self, appender: Appender, appender_name: str) -> None:
        key = f"{_APPENDER_PREFIX}{appender_name}.layout"
        if key not in self.properties:
            raise ConfigureFailure(f"Missing layout property for appender '{appender_name}'")
        layout_type = _type_name(self.properties[key])

        layout: Layout
        if layout_type == "BasicLayout":
            layout = BasicLayout()
        elif layout_type == "SimpleLayout":
            layout = SimpleLayout()
        elif layout_type == "PatternLayout":
            pattern_layout = PatternLayout()
            pattern = self.properties.get(key + ".ConversionPattern")
            if pattern is not None:
                pattern_layout.set_conversion_pattern(pattern)
            layout = pattern_layout
        else:
            raise ConfigureFailure(
                f"Unknown layout type '{layout_type}' for appender '{appender_name}'"
            )
        appender.set_layout(layout)


_configurator = PropertyConfigurator()


def configure(init_file_name: str | os.PathLike[str]) -> None:
    """Configure the default hierarchy from the property file *init_file_name*."""
    _configurator.do_configure(init_file_name)