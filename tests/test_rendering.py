"""
Tests for the console renderer.
"""

import io

import pytest  # type: ignore
from datetime import datetime

import pytz

from src.reservoir_watch.models import (
    ApiFlavor,
    ChartPoint,
    SiteProfile,
    SummaryRecord,
    TableRow,
)
from src.reservoir_watch.rendering import ConsoleRenderer, TextChart, format_number

LA = pytz.timezone("America/Los_Angeles")

STORAGE = SiteProfile(
    key="lake_piru_storage",
    site_id="11109700",
    parameter_code="00054",
    api_flavor=ApiFlavor.FEATURE_COLLECTION,
    unit_label="ac-ft",
    capacity=83240,
    display_name="Lake Piru",
    value_label="storage",
)

OUTFLOW = SiteProfile(
    key="castaic_outflow",
    site_id="CAS",
    parameter_code="23",
    api_flavor=ApiFlavor.FLAT_ARRAY,
    unit_label="cfs",
    display_name="Castaic Reservoir",
    value_label="outflow",
)


@pytest.mark.parametrize("value,expected", [
    (75000.0, "75,000"),
    (1234.5, "1,234.5"),
    (0.0, "0"),
    (12.3456, "12.346"),
])
def test_format_number(value, expected):
    """Test number formatting with separators."""
    assert format_number(value) == expected


class TestConsoleRenderer:
    """Test cases for ConsoleRenderer."""

    @pytest.fixture
    def stream(self):
        return io.StringIO()

    @pytest.fixture
    def renderer(self, stream):
        return ConsoleRenderer(stream=stream)

    def test_summary_with_capacity(self, renderer):
        """Test the summary sentence with capacity."""
        summary = SummaryRecord(
            timestamp=LA.localize(datetime(2024, 1, 3)),
            value=75000.0,
            percent_capacity=90.1,
            is_stale=False,
            stale_days=1,
        )

        renderer.show_summary(STORAGE, summary)

        assert renderer.regions["lake_piru_storage"] == [
            "As of January 3, 2024, Lake Piru storage is 75,000 ac-ft, "
            "which is 90.1% of its capacity."
        ]

    def test_stale_summary_has_advisory(self, renderer):
        """Test that stale data adds an advisory line."""
        summary = SummaryRecord(
            timestamp=LA.localize(datetime(2024, 1, 3)),
            value=12.0,
            percent_capacity=None,
            is_stale=True,
            stale_days=10,
        )

        renderer.show_summary(OUTFLOW, summary)

        lines = renderer.regions["castaic_outflow"]
        assert lines[0] == "Advisory: Latest data is 10 days old (last update: 1/3/2024)"
        assert lines[1] == "As of January 3, 2024, Castaic Reservoir outflow is 12 cfs."

    def test_table_columns_follow_site(self, renderer):
        """Test that table columns depend on the site."""
        rows = [TableRow("Jan 3, 2024", 75000.0, 90.1, "Provisional")]

        renderer.show_table(STORAGE, rows)
        renderer.show_table(OUTFLOW, [TableRow("Jan 3, 2024", 12.0)])

        storage_header = renderer.regions["lake_piru_storage"][0]
        assert "% Capacity" in storage_header and "Status" in storage_header
        assert "Provisional" in renderer.regions["lake_piru_storage"][2]
        outflow_header = renderer.regions["castaic_outflow"][0]
        assert "% Capacity" not in outflow_header and "Status" not in outflow_header

    def test_loading_clears_region(self, renderer):
        """Test that loading clears the region."""
        renderer.show_no_data(STORAGE, "nothing")
        renderer.show_loading(STORAGE, "Loading storage data...")

        assert renderer.regions["lake_piru_storage"] == []
        assert renderer.loading["lake_piru_storage"]

        renderer.hide_loading(STORAGE)
        assert not renderer.loading["lake_piru_storage"]

    def test_draw_chart_returns_releasable_handle(self, renderer):
        """Test that a drawn chart can be released twice."""
        points = [
            ChartPoint(LA.localize(datetime(2024, 1, 1)), 70000.0),
            ChartPoint(LA.localize(datetime(2024, 1, 3)), 75000.0),
        ]

        chart = renderer.draw_chart(STORAGE, points)

        assert isinstance(chart, TextChart)
        assert "2 points" in renderer.regions["lake_piru_storage"][0]
        chart.release()
        chart.release()
        assert chart.released
        assert chart.points == []

    def test_gauge(self, renderer):
        """Test the capacity gauge line."""
        renderer.show_gauge(STORAGE, 50.0)
        assert renderer.regions["lake_piru_storage"] == ["E [##########..........] F  50.0%"]

    def test_flush_writes_regions_in_order(self, renderer, stream):
        """Test that flush writes regions in site order."""
        renderer.show_error(OUTFLOW, "Failed to load outflow data: boom")
        renderer.show_no_data(STORAGE, "No storage data found")

        renderer.flush([STORAGE, OUTFLOW])

        output = stream.getvalue()
        assert output.index("Lake Piru (storage)") < output.index("Castaic Reservoir (outflow)")
        assert "ERROR: Failed to load outflow data: boom" in output
