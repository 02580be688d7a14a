"""
Integration tests for the complete fetch-and-render workflow.

Runs the application against recorded USGS and CDEC payloads with the
HTTP layer mocked.
"""

import io
import json
from datetime import date, datetime
from unittest.mock import Mock

import pytest  # type: ignore
import pytz
import requests  # type: ignore

from src.reservoir_watch.main import WatchApp, main
from src.reservoir_watch.models import DateRange, FeedStatus
from src.reservoir_watch.rendering import ConsoleRenderer

LA = pytz.timezone("America/Los_Angeles")


def json_response(data):
    response = Mock(spec=requests.Response)
    response.status_code = 200
    response.raise_for_status.return_value = None
    response.json.return_value = data
    return response


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "test.log"))
    application = WatchApp(renderer=ConsoleRenderer(stream=io.StringIO()))
    application.initialize_components()
    yield application
    application.close()


class TestWatchApp:
    """Test the application refresh cycle."""

    def test_refresh_all_feeds(self, app, usgs_storage_response, cdec_outflow_response):
        """Test a refresh of every configured feed."""
        app.usgs_api.session = Mock()
        app.usgs_api.session.request.side_effect = lambda **kwargs: json_response(
            usgs_storage_response
            if kwargs["params"]["parameter_code"] == "00054"
            else {"features": []}
        )
        app.cdec_api.session = Mock()
        app.cdec_api.session.request.return_value = json_response(cdec_outflow_response)

        results = app.refresh(
            DateRange(start=date(2024, 1, 1), end=date(2024, 1, 3)),
            now=LA.localize(datetime(2024, 1, 13)),
        )

        statuses = {r.profile.key: r.status for r in results}
        assert statuses == {
            "lake_piru_storage": FeedStatus.OK,
            "piru_creek_discharge": FeedStatus.NO_DATA,
            "castaic_outflow": FeedStatus.OK,
        }

        storage = results[0].projection
        assert storage.summary.value == 75000.0
        assert storage.summary.percent_capacity == 90.1
        assert storage.summary.is_stale
        assert storage.summary.stale_days == 10
        assert [r.date_label for r in storage.table_rows] == ["Jan 3, 2024", "Jan 1, 2024"]

        outflow = results[2].projection
        assert [p.y for p in outflow.chart_points] == [12.0, 14.0, 13.0, 15.0]
        assert outflow.summary.percent_capacity is None

        assert app.contexts["lake_piru_storage"].chart is not None
        assert app.contexts["piru_creek_discharge"].chart is None

    def test_failing_feed_does_not_affect_others(self, app, usgs_storage_response):
        """Test that a fetch failure in one feed leaves the others intact."""
        app.usgs_api.session = Mock()
        app.usgs_api.session.request.return_value = json_response(usgs_storage_response)
        app.cdec_api.session = Mock()
        app.cdec_api.session.request.side_effect = requests.exceptions.ConnectionError("down")

        results = app.refresh(now=LA.localize(datetime(2024, 1, 4)))

        statuses = [r.status for r in results]
        assert statuses == [FeedStatus.OK, FeedStatus.OK, FeedStatus.ERROR]
        assert app.contexts["castaic_outflow"].chart is None
        for profile in app.profiles:
            assert not app.renderer.loading[profile.key]

    def test_refresh_selected_sites(self, app):
        """Test refreshing only the selected sites."""
        app.usgs_api.session = Mock()
        app.usgs_api.session.request.return_value = json_response({"features": []})

        results = app.refresh(keys=["piru_creek_discharge"])

        assert [r.profile.key for r in results] == ["piru_creek_discharge"]

    def test_unknown_site(self, app):
        """Test that an unknown site key is rejected."""
        with pytest.raises(ValueError, match="Unknown site"):
            app.refresh(keys=["nowhere"])

    def test_oversized_value_is_dropped(self, app, usgs_storage_response):
        """Test that a value beyond float range is dropped without failing the refresh."""
        app.usgs_api.session = Mock()
        app.usgs_api.session.request.return_value = json_response(usgs_storage_response)
        app.cdec_api.session = Mock()
        app.cdec_api.session.request.return_value = json_response([
            {"date": "2024-01-01 00:00", "value": 10 ** 400},
            {"date": "2024-01-01 01:00", "value": 7},
        ])

        results = app.refresh(now=LA.localize(datetime(2024, 1, 4)))

        assert [r.status for r in results] == [FeedStatus.OK, FeedStatus.OK, FeedStatus.OK]
        assert [p.y for p in results[2].projection.chart_points] == [7.0]

    def test_render_failure_does_not_affect_others(self, app, usgs_storage_response,
                                                   cdec_outflow_response, monkeypatch):
        """Test that a feed whose chart cannot be drawn renders an error while others succeed."""
        app.usgs_api.session = Mock()
        app.usgs_api.session.request.return_value = json_response(usgs_storage_response)
        app.cdec_api.session = Mock()
        app.cdec_api.session.request.return_value = json_response(cdec_outflow_response)

        draw_chart = app.renderer.draw_chart

        def failing_draw_chart(profile, points):
            if profile.key == "castaic_outflow":
                raise RuntimeError("chart backend crashed")
            return draw_chart(profile, points)

        monkeypatch.setattr(app.renderer, "draw_chart", failing_draw_chart)

        results = app.refresh(now=LA.localize(datetime(2024, 1, 4)))

        assert [r.status for r in results] == [FeedStatus.OK, FeedStatus.OK, FeedStatus.ERROR]
        assert app.renderer.regions["castaic_outflow"][-1] == (
            "ERROR: Failed to load outflow data: chart backend crashed"
        )
        assert app.contexts["castaic_outflow"].chart is None
        assert app.contexts["lake_piru_storage"].chart is not None
        for profile in app.profiles:
            assert not app.renderer.loading[profile.key]

    def test_worker_failure_becomes_error_result(self, app, usgs_storage_response, monkeypatch):
        """Test that an exception escaping a feed worker is reported as that feed's error."""
        app.usgs_api.session = Mock()
        app.usgs_api.session.request.return_value = json_response(usgs_storage_response)
        app.cdec_api.session = Mock()
        app.cdec_api.session.request.return_value = json_response([])

        show_loading = app.renderer.show_loading

        def failing_show_loading(profile, message):
            if profile.key == "piru_creek_discharge":
                raise RuntimeError("display detached")
            show_loading(profile, message)

        monkeypatch.setattr(app.renderer, "show_loading", failing_show_loading)

        results = app.refresh(now=LA.localize(datetime(2024, 1, 4)))

        assert [r.profile.key for r in results] == [
            "lake_piru_storage", "piru_creek_discharge", "castaic_outflow"
        ]
        assert [r.status for r in results] == [FeedStatus.OK, FeedStatus.ERROR, FeedStatus.NO_DATA]
        assert str(results[1].error) == "display detached"


class TestMain:
    """Test the command line entry point."""

    @pytest.mark.parametrize("config", [
        {"sites": ["x"]},
        {"api": {"timeout": "abc"}},
        {"api": 5},
    ])
    def test_malformed_config_exits_with_usage_error(self, tmp_path, monkeypatch, capsys, config):
        """Test that malformed configuration files exit with status 2 and a message."""
        monkeypatch.setenv("LOG_FILE", str(tmp_path / "test.log"))
        path = tmp_path / "config.json"
        path.write_text(json.dumps(config), encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(path)])

        assert exc_info.value.code == 2
        assert "Configuration error" in capsys.readouterr().out

    def test_period_with_dates_is_rejected(self):
        """Test that --period cannot be combined with --start/--end."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--period", "P7D", "--start", "2024-01-01"])

        assert exc_info.value.code == 2
