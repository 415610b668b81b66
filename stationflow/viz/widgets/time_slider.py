# stationflow/viz/widgets/time_slider.py
import json

import folium

from stationflow.traffic.time_index import MINUTES_PER_DAY
from stationflow.traffic.window import NO_FILTER
from stationflow.viz.time_label import format_time


def _js(value):
    # safe to inline inside <script>
    return json.dumps(value).replace("</", "<\\/")


def build_time_slider(time_filter, hourly_departures, *, marker_names, data_url):
    """
    Time filter control:
      - range slider from -1 ("any time") to 1439
      - bars = departures per hour, clicking one jumps to that hour
      - every slider `input` fetches data_url?t=<minute> and restyles the
        station markers in place (radius, fill, tooltip), keyed by station id
    """
    max_count = max(hourly_departures, default=0)

    bars = []
    for hour, count in enumerate(hourly_departures):
        height = int((count / max_count) * 48) if max_count > 0 else 0
        t = hour * 60
        active = time_filter != NO_FILTER and time_filter // 60 == hour

        bars.append(
            f"""
            <div class="slider-bar-item"
                 onclick="setTime({t})"
                 title="{format_time(t)}: {count} departures">
              <div class="slider-bar" data-hour="{hour}"
                   style="height:{height}px; opacity:{'1.0' if active else '0.55'};">
              </div>
            </div>
            """
        )

    label = "" if time_filter == NO_FILTER else format_time(time_filter)
    any_display = "inline" if time_filter == NO_FILTER else "none"

    return folium.Element(
        f"""
<style>
#time-filter {{
  position: absolute;
  left: 16px;
  right: 16px;
  bottom: 14px;
  z-index: 1200;
  padding: 8px 12px;
  border-radius: 10px;
  background: rgba(255,255,255,0.92);
  font-size: 12px;
}}

#time-filter-head {{
  display: flex;
  justify-content: space-between;
  font-weight: 600;
}}

#any-time {{
  color: #888888;
  font-style: italic;
}}

#slider-bars {{
  display: flex;
  align-items: flex-end;
  height: 52px;
  margin-top: 6px;
}}

.slider-bar-item {{
  flex: 1;
  display: flex;
  align-items: flex-end;
  height: 100%;
  margin-right: 2px;
  cursor: pointer;
}}

.slider-bar {{
  width: 100%;
  background: #4682b4;
  border-radius: 2px;
}}

#time-slider {{
  width: 100%;
}}
</style>

<div id="time-filter">
  <div id="time-filter-head">
    <span>Filter by time:</span>
    <span>
      <time id="selected-time">{label}</time>
      <em id="any-time" style="display:{any_display}">(any time)</em>
    </span>
  </div>
  <div id="slider-bars">
    {''.join(bars)}
  </div>
  <input id="time-slider" type="range"
         min="{NO_FILTER}" max="{MINUTES_PER_DAY - 1}" value="{time_filter}">
</div>

<script>
const STATION_MARKERS = {_js(marker_names)};
const STATIONS_URL = {_js(data_url)};
let latestRequest = 0;

function formatTime(minutes) {{
  const hour = Math.floor(minutes / 60);
  const minute = minutes % 60;
  const suffix = hour < 12 ? "AM" : "PM";
  return `${{hour % 12 || 12}}:${{String(minute).padStart(2, "0")}} ${{suffix}}`;
}}

function updateLabel(t) {{
  const selected = document.getElementById("selected-time");
  const anyTime = document.getElementById("any-time");
  if (t === {NO_FILTER}) {{
    selected.textContent = "";
    anyTime.style.display = "inline";
  }} else {{
    selected.textContent = formatTime(t);
    anyTime.style.display = "none";
  }}

  document.querySelectorAll(".slider-bar").forEach((bar) => {{
    const active = t !== {NO_FILTER} && Math.floor(t / 60) === Number(bar.dataset.hour);
    bar.style.opacity = active ? "1.0" : "0.55";
  }});
}}

function applyStations(data) {{
  data.stations.forEach((s) => {{
    const marker = window[STATION_MARKERS[s.id]];
    if (!marker) return;
    marker.setRadius(s.radius);
    marker.setStyle({{ fillColor: s.fill_color }});
    marker.setTooltipContent(s.tooltip);
  }});
}}

function updateTimeFilter(t) {{
  updateLabel(t);

  const url = new URL(window.location.href);
  url.searchParams.set("t", String(t));
  window.history.replaceState(null, "", url.toString());

  // only the newest response is drawn
  const req = ++latestRequest;
  fetch(`${{STATIONS_URL}}?t=${{t}}`)
    .then((resp) => (resp.ok ? resp.json() : Promise.reject(resp.status)))
    .then((data) => {{
      if (req === latestRequest) applyStations(data);
    }})
    .catch((err) => console.error("Error loading station traffic:", err));
}}

function setTime(t) {{
  const slider = document.getElementById("time-slider");
  if (slider) slider.value = String(t);
  updateTimeFilter(t);
}}

document.addEventListener("DOMContentLoaded", () => {{
  const slider = document.getElementById("time-slider");
  if (!slider) return;

  slider.addEventListener("input", () => updateTimeFilter(Number(slider.value)));

  const wrap = document.getElementById("map-wrap");
  const panel = document.getElementById("time-filter");
  if (wrap && panel) wrap.appendChild(panel);
}});
</script>
"""
    )
