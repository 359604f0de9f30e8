import datetime as dt
import importlib

import pandas as pd
import pytest

export = importlib.import_module('barrage.reports.export')
summary = importlib.import_module('barrage.reports.summary')
plots = importlib.import_module('barrage.visualization.plots')
EmptyAggregationError = importlib.import_module('barrage.core.aggregator').EmptyAggregationError

STAMP = dt.datetime(2024, 3, 6, 8, 30)


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    import matplotlib.pyplot as plt

    plt.close("all")


def test_to_frame_columns_and_order(logbook):
    df = logbook.to_frame()
    assert list(df.columns) == [label for label, _ in export.COLUMNS.values()]
    assert list(df["Date"]) == sorted(df["Date"])
    assert len(df) == 5
    assert df["Gains (Hm³)"].iloc[1] == pytest.approx(10.75)
    assert df["Évaporation (Hm³)"].iloc[1] == pytest.approx(7.49112)


def test_frame_rows_follow_metrics(logbook):
    metrics = logbook.derive_many()
    df = export.to_frame(reversed(metrics))
    for attr, (label, _) in export.COLUMNS.items():
        assert list(df[label]) == [m.as_dict()[attr] for m in metrics]
    assert list(df["Taux (%)"]) == [m.taux for m in metrics]


def test_export_csv_rounds_for_display(tmp_path, logbook):
    path = logbook.export_csv(tmp_path / "barrage.csv", logbook.by_month("2024-03"))
    df = pd.read_csv(path)

    assert len(df) == 4
    assert df["Date"].iloc[0] == "01/03/2024"
    assert df["Évaporation (Hm³)"].iloc[0] == pytest.approx(5.382)
    assert df["Évaporation (Hm³)"].iloc[1] == pytest.approx(7.491)
    assert df["Taux (%)"].iloc[0] == pytest.approx(32.95)


def test_daily_report(logbook):
    text = logbook.report(logbook.by_date("2024-03-02"), generated_at=STAMP)
    lines = text.splitlines()

    assert lines[0] == "RAPPORT JOURNALIER - 02/03/2024"
    assert lines[1] == "Barrage Beni Haroun"
    assert "Cote: 105.00 m" in lines
    assert "Affluent: 19.791 Hm³" in lines
    assert "Défluent: 9.041 Hm³" in lines
    assert lines[-1] == "Généré le: 06/03/2024 08:30"


def test_monthly_report_markdown(logbook):
    text = logbook.report(
        logbook.by_month("2024-03"),
        selection=summary.Selection(month="2024-03"),
        style="markdown",
        generated_at=STAMP,
    )
    assert text.startswith("*RAPPORT MENSUEL - 03/2024*")
    assert "*TOTAUX (4 jours):*" in text
    assert "Pluie Totale: *14.5 mm*" in text
    assert "Cote: 104.00 m | Surface: 1150.000 ha | Volume: 290.000 Hm³" in text


def test_report_titles(logbook):
    days = logbook.derive_many(logbook.by_period("2024-03-01", "2024-03-03"))
    period = summary.Selection(start=dt.date(2024, 3, 1), end=dt.date(2024, 3, 3))
    assert summary.report_title(days, period) == "RAPPORT PÉRIODE (01/03/2024 au 03/03/2024)"
    assert summary.report_title(days) == "RAPPORT PÉRIODE (3 jours)"


def test_report_errors(logbook):
    with pytest.raises(EmptyAggregationError):
        logbook.report([])
    with pytest.raises(ValueError):
        logbook.report(style="html")


def test_plots(logbook, calibration):
    ax = logbook.plot_levels(show=False)
    assert ax.get_title() == "Cote et taux de remplissage"

    ax = logbook.plot_water_balance(logbook.by_month("2024-03"), show=False)
    assert len(ax.patches) == 8

    ax = plots.plot_calibration_curve(calibration.volume, "Volume, Hm³", show=False)
    xs, ys = ax.lines[0].get_data()
    assert list(xs) == [104.0, 105.0, 106.0]
