"""Change-notification sinks."""

from __future__ import annotations

import abc
from typing import Any


class ChangeSink(abc.ABC):
    @abc.abstractmethod
    async def attribute_changed(
        self, service: str, attribute: str, old: Any, new: Any, dry_run: bool = False
    ) -> None:
        """Called once per changed attribute, after the change is applied.

        In dry-run mode it is called with ``dry_run=True`` for changes that
        would have been applied.
        """


class NullSink(ChangeSink):
    async def attribute_changed(
        self, service: str, attribute: str, old: Any, new: Any, dry_run: bool = False
    ) -> None:
        return None
