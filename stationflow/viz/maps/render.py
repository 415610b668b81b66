# stationflow/viz/maps/render.py
import json

import folium

from stationflow.viz.overlays.bike_lanes import add_bike_lanes
from stationflow.viz.overlays.stations import add_station_markers
from stationflow.viz.widgets.legend import build_legend_widget
from stationflow.viz.widgets.time_slider import build_time_slider

CENTER_LAT = 42.36027
CENTER_LON = -71.09415


def _layout_widget(title):
    # wraps the map so the slider/legend panels can sit on top of it
    title_js = json.dumps(title).replace("</", "<\\/") if title else "null"

    return folium.Element(
        f"""
<style>
#map-wrap {{ position: relative; width: 100%; }}
#map-wrap .leaflet-container {{ width: 100% !important; height: 85vh !important; }}
#map-title {{
  position: absolute;
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  background: rgba(255,255,255,0.95);
  padding: 6px 16px;
  border-radius: 999px;
  font-weight: 600;
  z-index: 1300;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl || document.getElementById("map-wrap")) return;

  const wrap = document.createElement("div");
  wrap.id = "map-wrap";
  mapEl.parentNode.insertBefore(wrap, mapEl);
  wrap.appendChild(mapEl);

  const title = {title_js};
  if (title) {{
    const el = document.createElement("div");
    el.id = "map-title";
    el.textContent = title;
    wrap.appendChild(el);
  }}
}});
</script>
"""
    )


def render_map_document(
    *,
    views,
    time_filter,
    hourly_departures,
    data_url: str = "/stations.json",
    bike_networks=None,
    title: str | None = None,
):
    """
    Single place that assembles the full Folium map HTML document.
    """

    m = folium.Map(
        location=[CENTER_LAT, CENTER_LON],
        zoom_start=12,
        min_zoom=6,
        max_zoom=17,
        tiles="cartodbpositron",
        prefer_canvas=True,
    )

    # bike lanes under the stations
    add_bike_lanes(m, bike_networks)

    marker_names = add_station_markers(m, views, time_filter)

    # layout first: it creates #map-wrap the other widgets attach to
    root = m.get_root().html
    root.add_child(_layout_widget(title))
    root.add_child(
        build_time_slider(
            time_filter,
            hourly_departures,
            marker_names=marker_names,
            data_url=data_url,
        )
    )
    root.add_child(build_legend_widget())

    return m.get_root().render()
