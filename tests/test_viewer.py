import pytest
import requests

from stationflow.traffic.engine import TrafficEngine
from stationflow.traffic.types import Station
from stationflow.viz.app.single import create_app
from stationflow.viz.maps.render import render_map_document
from stationflow.viz.overlays import bike_lanes
from stationflow.viz.overlays.stations import (
    ARRIVAL_COLOR,
    DEPARTURE_COLOR,
    mix_color,
    station_tooltip,
)

LANES = {
    "boston_bike_network": {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Mass Ave"},
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[-71.0936, 42.3581], [-71.0862, 42.3625]],
                },
            }
        ],
    }
}


@pytest.fixture
def engine(stations, make_trip):
    return TrafficEngine.from_trips(stations[:2], [make_trip(485, 500, "A", "B")])


@pytest.fixture
def client(engine):
    app = create_app(engine, title="Test Map")
    app.config["TESTING"] = True
    return app.test_client()


def test_mix_color_endpoints():
    assert mix_color(1.0) == DEPARTURE_COLOR
    assert mix_color(0.0) == ARRIVAL_COLOR
    assert mix_color(0.5) not in (DEPARTURE_COLOR, ARRIVAL_COLOR)


def test_station_tooltip_text(stations):
    text = station_tooltip(stations[0])

    assert "Kendall T" in text
    assert "0 total trips" in text
    assert "0 departures, 0 arrivals" in text
    assert "Around 12:30 PM" in station_tooltip(stations[0], 750)


def test_station_tooltip_escapes_name():
    s = Station(id="X", name='<img src=x onerror="alert(1)">', lon=0.0, lat=0.0)
    text = station_tooltip(s)

    assert "<img" not in text
    assert "&lt;img" in text


def test_map_document_any_time(client):
    resp = client.get("/")

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "time-slider" in body
    assert "(any time)" in body
    assert "Kendall T" in body


def test_map_document_with_filter(client):
    resp = client.get("/?t=750")

    assert resp.status_code == 200
    assert "12:30 PM" in resp.get_data(as_text=True)


def test_slider_input_fetches_station_json(client):
    body = client.get("/").get_data(as_text=True)

    assert 'const STATIONS_URL = "/stations.json"' in body
    assert 'slider.addEventListener("input"' in body
    assert "fetch(" in body
    assert "setRadius" in body and "setTooltipContent" in body
    # markers are addressable by station id
    assert '"A": "circle_marker_' in body
    assert '"B": "circle_marker_' in body


def test_title_is_json_encoded(engine):
    html = render_map_document(
        views=engine.view_for(-1),
        time_filter=-1,
        hourly_departures=[0] * 24,
        title="Bikes </script> 'Boston'",
    )

    assert "const title = \"Bikes <\\/script> 'Boston'\";" in html


def test_stations_json_follows_filter(client):
    morning = client.get("/stations.json?t=540").get_json()
    early = client.get("/stations.json?t=300").get_json()

    assert morning["time_filter"] == 540
    assert [s["total_traffic"] for s in morning["stations"]] == [1, 1]
    assert [s["fill_color"] for s in morning["stations"]] == [DEPARTURE_COLOR, ARRIVAL_COLOR]
    assert "1 total trips" in morning["stations"][0]["tooltip"]
    assert [s["total_traffic"] for s in early["stations"]] == [0, 0]
    assert [s["flow_ratio"] for s in early["stations"]] == [0.5, 0.5]


def test_stations_json_defaults_to_any_time(client):
    data = client.get("/stations.json").get_json()

    assert data["time_filter"] == -1
    assert data["stations"][0]["radius"] == pytest.approx(25)


@pytest.mark.parametrize("bad", ["1440", "-2", "abc", "7.5"])
def test_invalid_filter_is_rejected(client, bad):
    assert client.get(f"/?t={bad}").status_code == 400
    assert client.get(f"/stations.json?t={bad}").status_code == 400


def test_bike_lanes_are_drawn(engine):
    app = create_app(engine, bike_networks=LANES)
    app.config["TESTING"] = True
    body = app.test_client().get("/").get_data(as_text=True)

    assert "geo_json_" in body
    assert bike_lanes.LANE_COLOR in body
    assert "-71.0936" in body


def test_bike_network_download_failure_is_skipped(monkeypatch, capsys):
    class _Resp:
        def raise_for_status(self):
            pass

        def json(self):
            return LANES["boston_bike_network"]

    def fake_get(url, timeout):
        if "cambridge" in url:
            raise requests.ConnectionError("offline")
        return _Resp()

    monkeypatch.setattr(bike_lanes.requests, "get", fake_get)

    networks = bike_lanes.fetch_bike_networks()

    assert list(networks) == ["boston_bike_network"]
    assert "Skipping cambridge_bike_network" in capsys.readouterr().out
