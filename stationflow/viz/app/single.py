# stationflow/viz/app/single.py
from __future__ import annotations

from flask import Flask, abort, jsonify, request, url_for

from stationflow.errors import InvalidTimeFilterError
from stationflow.traffic.types import Role
from stationflow.traffic.window import NO_FILTER, validate_time_filter
from stationflow.viz.maps.render import render_map_document
from stationflow.viz.overlays.bike_lanes import fetch_bike_networks
from stationflow.viz.overlays.stations import mix_color, station_tooltip


def _view_record(v, time_filter):
    s = v.station
    return {
        "id": s.id,
        "name": s.name,
        "lat": s.lat,
        "lon": s.lon,
        "departures": s.departures,
        "arrivals": s.arrivals,
        "total_traffic": s.total_traffic,
        "flow_ratio": s.flow_ratio,
        "radius": v.radius,
        "color_ratio": v.color_ratio,
        "fill_color": mix_color(v.color_ratio),
        "tooltip": station_tooltip(s, time_filter),
    }


def create_app(engine, *, title: str | None = None, bike_networks=None) -> Flask:
    """
    Flask app over a loaded TrafficEngine.

    Routes:
      /                 map document for ?t=<minute> (-1 or missing = any time)
      /stations.json    per-station traffic for the same ?t=; the slider
                        calls this on every move
    """
    hourly_departures = engine.index.hourly_counts(Role.DEPARTURE)

    app = Flask(__name__)

    def _resolve_time() -> int:
        t_raw = request.args.get("t", None)
        if t_raw is None or t_raw == "":
            return NO_FILTER

        try:
            return validate_time_filter(int(t_raw))
        except (ValueError, InvalidTimeFilterError) as e:
            abort(400, description=f"invalid time filter: {t_raw!r} ({e})")

    @app.route("/")
    def _index():
        t_cur = _resolve_time()
        views = engine.view_for(t_cur)

        return render_map_document(
            views=views,
            time_filter=t_cur,
            hourly_departures=hourly_departures,
            data_url=url_for("_stations"),
            bike_networks=bike_networks,
            title=title,
        )

    @app.route("/stations.json")
    def _stations():
        t_cur = _resolve_time()
        views = engine.view_for(t_cur)

        return jsonify(
            {
                "time_filter": t_cur,
                "stations": [_view_record(v, t_cur) for v in views],
            }
        )

    return app


def serve_traffic_map(
    *,
    engine,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = None,
    bike_lanes: bool = True,
):
    """
    Serve the station traffic map for a loaded engine.
    Bike network layers are downloaded once here, not per request.
    """
    if engine is None:
        raise ValueError("serve_traffic_map requires a TrafficEngine")

    bike_networks = fetch_bike_networks() if bike_lanes else None

    app = create_app(engine, title=title, bike_networks=bike_networks)
    app.run(host=host, port=int(port), debug=bool(debug))
