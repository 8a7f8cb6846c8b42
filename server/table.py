"""
Sheet Links Live — in-memory link table with header-click sorting

The record list is shared by every viewer; the sort state is not. Each
viewer's (column, order) travels in the header links (?sort=name&order=asc),
so one browser's clicks never reorder another's table.
"""

import logging

from sheet import FIELD_HEADERS

log = logging.getLogger("sheet-links-live.table")

COLUMNS = list(FIELD_HEADERS)  # display order: name, url, used_for
ORDERS = ("asc", "desc")


def _is_missing(record, column):
    value = record.get(column)
    return value is None or not value.strip()


class SortState:
    """One viewer's sort: a column (or None for sheet order) and a direction."""

    def __init__(self, column=None, descending=False):
        if column is not None and column not in COLUMNS:
            raise ValueError(f"Unknown column: {column}")
        self.column = column
        self.descending = descending if column else False

    @classmethod
    def from_args(cls, column=None, order=None):
        """Build from request args. Raises ValueError on an unknown column or order."""
        if not column:
            return cls()
        order = order or "asc"
        if order not in ORDERS:
            raise ValueError(f"Unknown sort order: {order}")
        return cls(column, order == "desc")

    def toggle(self, column):
        """Header click: new column → ascending, same column → flip direction."""
        if column == self.column:
            return SortState(column, not self.descending)
        return SortState(column)

    def next_order(self, column):
        """Direction the next click on this column's header would apply."""
        return self.toggle(column).order

    @property
    def order(self):
        return "desc" if self.descending else "asc"

    def as_dict(self):
        return {"column": self.column, "order": self.order if self.column else None}

    def __eq__(self, other):
        return isinstance(other, SortState) and self.as_dict() == other.as_dict()

    def __repr__(self):
        return f"SortState({self.column!r}, {self.order!r})"


class LinkTable:
    """Ordered list of link records, sorted in place.

    Every sort starts again from sheet order, so the result depends only on
    the SortState given and not on earlier viewers' sorts. Callers holding a
    reference to ``table.records`` see the new order.
    """

    def __init__(self, records=None):
        self.records = list(records or [])
        self._sheet_order = list(self.records)

    def __len__(self):
        return len(self.records)

    def replace(self, records):
        """Swap in freshly loaded records."""
        self.records[:] = records
        self._sheet_order = list(records)

    def sort(self, state):
        """Sort the records in place for a viewer's SortState (sheet order without a column)."""
        self.records[:] = self._sheet_order
        column = state.column
        if column is None:
            return
        self.records.sort(
            key=lambda r: "" if _is_missing(r, column) else r[column].strip().lower(),
            reverse=state.descending,
        )
        # Stable second pass: blanks go last whatever the direction
        self.records.sort(key=lambda r: _is_missing(r, column))
        log.debug(f"Sorted {len(self.records)} rows by {column} ({state.order})")
