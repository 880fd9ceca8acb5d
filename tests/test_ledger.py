from datetime import date

import pandas as pd
import pytest

from doc_ui.core.ledger import COLUMNS, MeasurementRecord, ResultsLedger, export_filename
from doc_ui.core.patch_stats import PatchStats


def _rec(name, doc=0.5):
    return MeasurementRecord(name, PatchStats(10, 20, 150), PatchStats(240, 235, 50), doc)


def test_length_changes():
    ledger = ResultsLedger()
    ledger.append(_rec("a.jpg"))
    ledger.append(_rec("b.jpg"))
    assert len(ledger) == 2
    assert ledger.delete_last().image_name == "b.jpg"
    assert len(ledger) == 1
    ledger.delete_last()
    assert ledger.delete_last() is None
    assert len(ledger) == 0


def test_reset_clears():
    ledger = ResultsLedger()
    for n in "abc":
        ledger.append(_rec(n))
    ledger.reset()
    assert len(ledger) == 0 and ledger.last is None


def test_export_column_order_and_rows():
    ledger = ResultsLedger()
    ledger.append(_rec("a.jpg", 0.1))
    ledger.append(_rec("b.jpg", 0.2))
    df = ledger.export()
    assert list(df.columns) == COLUMNS
    assert df["ImageName"].tolist() == ["a.jpg", "b.jpg"]
    assert df.iloc[0][["Water_R", "Water_G", "Water_B"]].tolist() == [10, 20, 150]
    assert df.iloc[1][["Paper_R", "Paper_G", "Paper_B"]].tolist() == [240, 235, 50]
    assert df["Estimated_DOC"].tolist() == [0.1, 0.2]


def test_export_does_not_mutate():
    ledger = ResultsLedger()
    ledger.append(_rec("a.jpg"))
    df = ledger.export()
    df.drop(index=0, inplace=True)
    assert len(ledger) == 1


def test_empty_export_keeps_columns():
    df = ResultsLedger().export()
    assert list(df.columns) == COLUMNS and len(df) == 0


def test_write_csv_has_no_index_column(tmp_path):
    ledger = ResultsLedger()
    ledger.append(_rec("a.jpg", 0.02372))
    p = ledger.write_csv(tmp_path / "out" / "results.csv")
    header = p.read_text().splitlines()[0]
    assert header == ",".join(COLUMNS)
    back = pd.read_csv(p)
    assert back.loc[0, "ImageName"] == "a.jpg"
    assert back.loc[0, "Estimated_DOC"] == pytest.approx(0.02372)


def test_export_filename():
    assert export_filename(date(2025, 3, 14)) == "rgb_values_2025-03-14.csv"
    assert export_filename().startswith("rgb_values_")
