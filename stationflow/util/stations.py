import json

from stationflow.traffic.types import Station

STATION_KEY_FIELDS = ("short_name", "station_id")


def load_stations(path, key_field="short_name"):
    """
    Load bikeshare stations from a GBFS station_information.json.

    key_field picks the station attribute that trips refer to:
      - "short_name" (Bluebikes trip exports)
      - "station_id" (GBFS-native ids)
    Returns Station records with zeroed traffic fields.
    """
    if key_field not in STATION_KEY_FIELDS:
        raise ValueError(f"key_field must be one of {STATION_KEY_FIELDS}, got {key_field!r}")

    with open(path) as f:
        doc = json.load(f)

    try:
        raw = doc["data"]["stations"]
    except (KeyError, TypeError) as e:
        raise ValueError(f"{path}: expected data.stations in station JSON") from e

    stations = []
    for s in raw:
        stations.append(
            Station(
                id=str(s[key_field]).strip(),
                name=s["name"],
                lon=float(s["lon"]),
                lat=float(s["lat"]),
            )
        )

    return stations
