from __future__ import annotations

"""
Reusable conversion strategies for `to_document` / `from_document`
"""

import datetime
import functools
import typing as t

from lzs.engine import deserialize
from lzs.types.options import Strategy

ObjT = t.TypeVar('ObjT')

__all__ = [
    'compose_strategy',
    'for_each',
    'revive',
    'iso_datetime_to_document',
    'iso_datetime_from_document',
]


def compose_strategy(*strategies: Strategy) -> Strategy:
    """
    Chains strategies left to right: `compose_strategy(f, g)(v) == g(f(v))`
    """
    def composed(value: t.Any) -> t.Any:
        for strategy in strategies:
            value = strategy(value)
        return value
    return composed


def for_each(strategy: Strategy) -> Strategy:
    """
    Applies `strategy` to every item of a list or tuple, or to the value itself otherwise
    """
    @functools.wraps(strategy)
    def wrapper(value: t.Any) -> t.Any:
        if isinstance(value, (list, tuple)):
            return [strategy(item) for item in value]
        return strategy(value)
    return wrapper


def revive(cls: t.Type[ObjT], factory: t.Optional[t.Callable[[], ObjT]] = None) -> Strategy:
    """Builds `from_document` strategies that turn documents into `cls` instances.

    Lists are revived item by item. `None` is kept as is.

    Args:
        cls: A class with registered fields.
        factory: Creates the empty instance to populate. Defaults to `cls`.
    """
    factory = factory or cls

    def _revive(value: t.Any) -> t.Any:
        if value is None: return None
        return deserialize(factory(), value)

    _revive.__name__ = f'revive_{cls.__name__}'
    return for_each(_revive)


def iso_datetime_to_document(value: t.Optional[t.Union[datetime.datetime, datetime.date]]) -> t.Optional[str]:
    """
    Renders dates and datetimes as ISO 8601 strings
    """
    return None if value is None else value.isoformat()


def iso_datetime_from_document(value: t.Optional[str]) -> t.Optional[datetime.datetime]:
    """
    Parses ISO 8601 strings into datetimes
    """
    return None if value is None else datetime.datetime.fromisoformat(value)
