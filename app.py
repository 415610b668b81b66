import os

from stationflow.data.dataset import load_dataset
from stationflow.traffic.engine import TrafficEngine
from stationflow.viz.app.single import serve_traffic_map

TRIPS = os.environ.get("TRIPS_CSV", "bluebikes-traffic-2024-03.csv")
STATIONS = os.environ.get("STATIONS_JSON", "bluebikes-stations.json")
STATION_KEY = os.environ.get("STATION_KEY", "short_name")


def build_engine():
  dataset = load_dataset(
      TRIPS,
      STATIONS,
      key_field=STATION_KEY,
      progress=False,
  )

  return TrafficEngine(dataset.stations, dataset.index)


def main():
  engine = build_engine()

  host = os.environ.get("HOST", "0.0.0.0")
  port = int(os.environ.get("PORT", "8080"))

  serve_traffic_map(
      engine=engine,
      host=host,
      port=port,
      title="Bluebikes Station Traffic",
  )


if __name__ == "__main__":
  main()
