# stationflow/viz/overlays/bike_lanes.py
import folium
import requests
from colorama import Fore, Style

BIKE_NETWORK_URLS = {
    "boston_bike_network": (
        "https://bostonopendata-boston.opendata.arcgis.com/datasets/"
        "boston::existing-bike-network-2022.geojson"
    ),
    "cambridge_bike_network": (
        "https://raw.githubusercontent.com/cambridgegis/cambridgegis_data/main/"
        "Recreation/Bike_Facilities/RECREATION_BikeFacilities.geojson"
    ),
}

LANE_COLOR = "#4CAF50"
LANE_WEIGHT = 3
LANE_OPACITY = 0.7


def _lane_style(_feature):
    return {"color": LANE_COLOR, "weight": LANE_WEIGHT, "opacity": LANE_OPACITY}


def fetch_bike_networks(urls=None, timeout=30):
    """
    Download the bike network GeoJSON layers once.
    A layer that fails to download is left out (warning only).
    Returns {layer name: geojson dict}.
    """
    urls = BIKE_NETWORK_URLS if urls is None else urls

    networks = {}
    for name, url in urls.items():
        print(f"{Fore.CYAN}Loading {name}…{Style.RESET_ALL}")
        try:
            resp = requests.get(url, timeout=timeout)
            resp.raise_for_status()
            networks[name] = resp.json()
        except (requests.RequestException, ValueError) as e:
            print(f"{Fore.YELLOW}Skipping {name}: {e}{Style.RESET_ALL}")

    return networks


def add_bike_lanes(m, networks):
    """Draw each bike network as green lines under the station circles."""
    for name, data in (networks or {}).items():
        folium.GeoJson(
            data,
            name=name,
            style_function=_lane_style,
            control=False,
        ).add_to(m)
