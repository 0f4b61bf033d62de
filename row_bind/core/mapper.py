"""Row mapper - pulls rows from a source and applies a binding plan.

The RowMapper is the entry point: it reads rows from a RowSource, binds
each onto a fresh model, and keeps the ones that pass validation, in
encounter order. Source failures propagate; row-level failures do not.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TypeVar

from row_bind.core.exceptions import RowBindError, SourceReadError
from row_bind.mapping.plan import BindingPlan
from row_bind.mapping.report import BindingReporter
from row_bind.sources.protocol import Row, RowSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RowMapper:
    """Synchronous row-to-model mapper."""

    def __init__(self, source: RowSource) -> None:
        self._source = source

    @property
    def source(self) -> RowSource:
        return self._source

    def map(
        self,
        identifier: str,
        plan: BindingPlan[T],
        *,
        reporter: BindingReporter | None = None,
    ) -> list[T]:
        """Map every row of ``identifier`` and return the accepted models.

        Raises:
            SourceError: If the source cannot be opened or read.
        """
        return list(self.iter_map(identifier, plan, reporter=reporter))

    def iter_map(
        self,
        identifier: str,
        plan: BindingPlan[T],
        *,
        reporter: BindingReporter | None = None,
    ) -> Iterator[T]:
        """Lazily map rows, yielding each accepted model as it is bound."""
        read = accepted = 0
        for row_number, row in enumerate(self._rows(identifier), start=1):
            read += 1
            model = plan.map_row(row, reporter=reporter, row_number=row_number)
            if model is not None:
                accepted += 1
                yield model

        logger.info(
            "Mapped %s to %s: %d rows read, %d accepted, %d rejected",
            identifier,
            plan.model.__name__,
            read,
            accepted,
            read - accepted,
        )

    def _rows(self, identifier: str) -> Iterator[Row]:
        """Iterate source rows, normalizing foreign errors to SourceReadError."""
        try:
            yield from self._source.read_rows(identifier)
        except RowBindError:
            raise
        except Exception as e:
            raise SourceReadError(identifier, str(e)) from e
