# main.py

from stationflow.data.dataset import load_dataset
from stationflow.traffic.engine import TrafficEngine
from stationflow.traffic.window import NO_FILTER
from stationflow.viz.app.single import serve_traffic_map


TRIPS = "bluebikes-traffic-2024-03.csv"
STATIONS = "bluebikes-stations.json"


def main():
    # ---- data ----
    dataset = load_dataset(TRIPS, STATIONS, key_field="short_name")

    engine = TrafficEngine(dataset.stations, dataset.index)

    # ---- busiest stations, any time ----
    busiest = sorted(
        engine.stations_for(NO_FILTER),
        key=lambda s: s.total_traffic,
        reverse=True,
    )[:10]

    print("\nBusiest stations (any time):\n")
    for i, s in enumerate(busiest, 1):
        print(
            f"{i:02d}. "
            f"{s.name} | "
            f"{s.total_traffic:6d} trips "
            f"({s.departures} out → {s.arrivals} in)"
        )

    print(f"\nSkipped trips (bad timestamps): {dataset.index.skipped}")

    # ---- UI ----
    serve_traffic_map(
        engine=engine,
        port=8080,
        title="Bluebikes Station Traffic",
    )


if __name__ == "__main__":
    main()
