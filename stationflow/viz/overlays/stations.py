import html

import folium

from stationflow.traffic.window import NO_FILTER
from stationflow.viz.time_label import format_time

DEPARTURE_COLOR = "#4682b4"  # steelblue
ARRIVAL_COLOR = "#ff8c00"  # darkorange


def _hex_to_rgb(h):
    h = h.lstrip("#")
    return tuple(int(h[i:i + 2], 16) for i in (0, 2, 4))


def mix_color(color_ratio):
    """
    Blend between ARRIVAL_COLOR (ratio 0) and DEPARTURE_COLOR (ratio 1).
    """
    r = max(0.0, min(1.0, float(color_ratio)))
    dep = _hex_to_rgb(DEPARTURE_COLOR)
    arr = _hex_to_rgb(ARRIVAL_COLOR)
    rgb = [round(a + (d - a) * r) for d, a in zip(dep, arr)]
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def station_tooltip(station, time_filter=NO_FILTER):
    text = (
        f"<b>{html.escape(station.name)}</b>: {station.total_traffic} total trips<br>"
        f"{station.departures} departures, {station.arrivals} arrivals"
    )
    if time_filter != NO_FILTER:
        text += f"<br>Around {format_time(time_filter)}"
    return text


def add_station_markers(m, views, time_filter):
    """
    One circle per station:
      radius = sqrt-scaled total traffic
      fill   = departures vs arrivals mix (quantized flow ratio)

    Returns {station id: JS variable name of its marker} so the page can
    restyle markers in place when the time filter moves.
    """
    marker_names = {}

    for v in views:
        s = v.station

        marker = folium.CircleMarker(
            location=[s.lat, s.lon],
            radius=v.radius,
            color="white",
            weight=1.5,
            fill=True,
            fill_color=mix_color(v.color_ratio),
            fill_opacity=0.85,
            tooltip=station_tooltip(s, time_filter),
        )
        marker.add_to(m)
        marker_names[s.id] = marker.get_name()

    return marker_names
