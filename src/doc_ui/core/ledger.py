"""
Results Ledger
==============

This module holds the measurement records produced during a session and
exports them as a table.

The ledger is the single source of truth for:
- Which images have been measured, in measurement order
- Water and paper patch RGB means for each measurement
- The DOC estimate computed from them

Classes
-------
MeasurementRecord
    Immutable result of measuring one image
ResultsLedger
    Ordered, append-only record store with delete-last and reset

Functions
---------
export_filename
    Build the dated CSV file name, ``rgb_values_<YYYY-MM-DD>.csv``

Notes
-----
The ledger only grows through ``append`` and only shrinks through
``delete_last`` (removes exactly the final record) or ``reset`` (clears
everything). Insertion order is display order and export order.

See Also
--------
doc_ui.core.workflow : The only writer of the ledger
doc_ui.ui.main_window : Renders the ledger as a table
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
import logging

import pandas as pd

from .patch_stats import PatchStats

logger = logging.getLogger(__name__)

COLUMNS = [
    "ImageName",
    "Water_R",
    "Water_G",
    "Water_B",
    "Paper_R",
    "Paper_G",
    "Paper_B",
    "Estimated_DOC",
]


@dataclass(frozen=True)
class MeasurementRecord:
    image_name: str
    water: PatchStats
    paper: PatchStats
    estimated_doc: float

    def as_row(self) -> dict:
        """Return the record keyed by export column name."""
        return {
            "ImageName": self.image_name,
            "Water_R": self.water.r,
            "Water_G": self.water.g,
            "Water_B": self.water.b,
            "Paper_R": self.paper.r,
            "Paper_G": self.paper.g,
            "Paper_B": self.paper.b,
            "Estimated_DOC": self.estimated_doc,
        }


def export_filename(day: date | None = None) -> str:
    """
    Construct the CSV file name for an export.

    Parameters
    ----------
    day : date, optional
        Date stamped into the name, defaults to today

    Returns
    -------
    str
        ``rgb_values_<ISO-8601 date>.csv``

    Examples
    --------
    >>> from datetime import date
    >>> export_filename(date(2025, 3, 14))
    'rgb_values_2025-03-14.csv'
    """
    if day is None:
        day = date.today()
    return f"rgb_values_{day.isoformat()}.csv"


class ResultsLedger:
    """
    Ordered store of MeasurementRecord.

    Examples
    --------
    >>> rec = MeasurementRecord(
    ...     "cup_01.jpg", PatchStats(10, 20, 150), PatchStats(240, 235, 50), 0.024
    ... )
    >>> ledger = ResultsLedger()
    >>> ledger.append(rec)
    >>> len(ledger)
    1
    >>> ledger.delete_last() is rec
    True
    >>> ledger.delete_last() is None
    True
    """

    def __init__(self):
        self._records: list[MeasurementRecord] = []

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(list(self._records))

    @property
    def last(self) -> MeasurementRecord | None:
        return self._records[-1] if self._records else None

    def append(self, record: MeasurementRecord) -> None:
        self._records.append(record)
        logger.info(
            "Recorded %s: DOC=%.4f (%d rows)",
            record.image_name,
            record.estimated_doc,
            len(self._records),
        )

    def delete_last(self) -> MeasurementRecord | None:
        """Remove and return the final record, or None if the ledger is empty."""
        if not self._records:
            logger.debug("Delete last line on empty ledger ignored")
            return None
        rec = self._records.pop()
        logger.info("Deleted last row (%s)", rec.image_name)
        return rec

    def reset(self) -> None:
        self._records.clear()
        logger.info("Ledger reset")

    def export(self) -> pd.DataFrame:
        """
        Snapshot the ledger as a DataFrame in export column order.

        Returns
        -------
        pd.DataFrame
            One row per record, columns as in COLUMNS. An empty ledger yields
            an empty frame with the same columns.

        Notes
        -----
        The returned frame is a copy; editing it does not touch the ledger.
        """
        if not self._records:
            return pd.DataFrame(columns=COLUMNS)
        return pd.DataFrame([r.as_row() for r in self._records], columns=COLUMNS)

    def write_csv(self, path: str | Path) -> Path:
        """
        Write the ledger snapshot to a CSV file without an index column.

        Parameters
        ----------
        path : str or Path
            Destination file; parent directories are created

        Returns
        -------
        Path
            The written path
        """
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        self.export().to_csv(p, index=False)
        logger.info("Exported %d row(s) to %s", len(self._records), p)
        return p
