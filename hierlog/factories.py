"""Registries that create appenders and layouts by type name."""

from __future__ import annotations

from typing import Callable, Mapping

from hierlog.appender import Appender, create_abort_appender
from hierlog.dailyrolling import create_daily_roll_file_appender
from hierlog.errors import FactoryParams
from hierlog.fileappender import create_file_appender, create_roll_file_appender
from hierlog.layout import (
    Layout,
    create_basic_layout,
    create_pass_through_layout,
    create_simple_layout,
)
from hierlog.pattern import create_pattern_layout
from hierlog.syslog import create_remote_syslog_appender

__all__ = ["AppendersFactory", "LayoutsFactory"]


def _as_params(params: Mapping[str, str]) -> FactoryParams:
    return params if isinstance(params, FactoryParams) else FactoryParams(params)


class AppendersFactory:
    """Maps appender type names to functions that create them."""

    _instance: AppendersFactory | None = None

    def __init__(self) -> None:
        self._creators: dict[str, Callable[[FactoryParams], Appender]] = {}

    @staticmethod
    def get_instance() -> AppendersFactory:
        """Return the shared factory with the built-in appender types."""
        if AppendersFactory._instance is None:
            factory = AppendersFactory()
            factory.register_creator("file", create_file_appender)
            factory.register_creator("roll file", create_roll_file_appender)
            factory.register_creator("daily roll file", create_daily_roll_file_appender)
            factory.register_creator("remote syslog", create_remote_syslog_appender)
            factory.register_creator("abort", create_abort_appender)
            AppendersFactory._instance = factory
        return AppendersFactory._instance

    def register_creator(self, class_name: str, create_function: Callable[[FactoryParams], Appender]) -> None:
        """Register *create_function*; raises ValueError if the name is taken."""
        if class_name in self._creators:
            raise ValueError(f"Appender creator for type name '{class_name}' already registered")
        self._creators[class_name] = create_function

    def create(self, class_name: str, params: Mapping[str, str]) -> Appender:
        """Create an appender of the named type; raises ValueError if unknown."""
        creator = self._creators.get(class_name)
        if creator is None:
            raise ValueError(f"There is no appender with type name '{class_name}'")
        return creator(_as_params(params))

    def registered(self, class_name: str) -> bool:
        return class_name in self._creators


class LayoutsFactory:
    """Maps layout type names to functions that create them."""

    _instance: LayoutsFactory | None = None

    def __init__(self) -> None:
        self._creators: dict[str, Callable[[FactoryParams], Layout]] = {}

    @staticmethod
    def get_instance() -> LayoutsFactory:
        """Return the shared factory with the built-in layout types."""
        if LayoutsFactory._instance is None:
            factory = LayoutsFactory()
            factory.register_creator("simple", create_simple_layout)
            factory.register_creator("basic", create_basic_layout)
            factory.register_creator("pattern", create_pattern_layout)
            factory.register_creator("pass through", create_pass_through_layout)
            LayoutsFactory._instance = factory
        return LayoutsFactory._instance

    def register_creator(self, class_name: str, create_function: Callable[[FactoryParams], Layout]) -> None:
        """Register *create_function*; raises ValueError if the name is taken."""
        if class_name in self._creators:
            raise ValueError(f"Layout creator for type name '{class_name}' already registered")
        self._creators[class_name] = create_function

    def create(self, class_name: str, params: Mapping[str, str]) -> Layout:
        """Create a layout of the named type; raises ValueError if unknown."""
        creator = self._creators.get(class_name)
        if creator is None:
            raise ValueError(f"There is no layout with type name '{class_name}'")
        return creator(_as_params(params))

    def registered(self, class_name: str) -> bool:
        return class_name in self._creators