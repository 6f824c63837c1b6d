"""Identifier generation for scope items, ambiguities, questions and quote items.

Every record produced during one estimation run carries an id so that it can
be joined back to its originating scope item.  The generator is injectable so
tests can produce stable, readable ids.
"""

from __future__ import annotations

import abc
import itertools
import threading
import uuid


class IdGenerator(abc.ABC):
    """Base class for id providers."""

    @abc.abstractmethod
    def new_id(self, prefix: str = "") -> str:
        """Return a new identifier, unique for the lifetime of the generator."""


class UuidGenerator(IdGenerator):
    """Random UUID4 identifiers (the default)."""

    def new_id(self, prefix: str = "") -> str:
        value = str(uuid.uuid4())
        return f"{prefix}-{value}" if prefix else value


class SequentialIdGenerator(IdGenerator):
    """Deterministic ``<prefix>-0001`` style identifiers.

    Parameters
    ----------
    default_prefix:
        Prefix used when :meth:`new_id` is called without one.
    """

    def __init__(self, default_prefix: str = "id") -> None:
        self._default_prefix = default_prefix
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def new_id(self, prefix: str = "") -> str:
        with self._lock:
            n = next(self._counter)
        return f"{prefix or self._default_prefix}-{n:04d}"
