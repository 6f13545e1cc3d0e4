"""
Ski Trip Report

Command-line summary of a single trip log: base metrics plus performance,
slope and altitude analyses, optionally exporting the filtered GPS points
to CSV.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict

from skitrip import analyze_trip
from skitrip.logging_config import configure_logging


def print_report(result: Dict, trip_file: Path) -> None:
    """
    Print a formatted summary of an analysed trip.

    Args:
        result: Payload from analyze_trip_data().
        trip_file: Trip file the payload came from.
    """
    metrics = result["metrics"]
    performance = result["performanceMetrics"]
    slopes = result["slopeAnalysis"]
    altitude = result["altitudeAnalysis"]

    print(f"\n{'='*60}")
    print(f"Trip: {trip_file.stem}")
    print(f"{'='*60}")
    if result["startPoint"]:
        print(f"Started:          {analyze_trip.format_date(result['startPoint']['timestamp'])}")
    print(f"GPS points:       {len(result['gpsPoints'])}")
    print(f"Distance:         {analyze_trip.format_distance(metrics['totalDistance'])}")
    print(f"Duration:         {analyze_trip.format_duration(metrics['duration'])}")
    print(f"Max speed:        {analyze_trip.format_speed(metrics['maxSpeed'])}")
    print(f"Vertical drop:    {analyze_trip.format_altitude(metrics['verticalDrop'])}")
    print(f"Altitude:         {analyze_trip.format_altitude(metrics['minAltitude'])}"
          f" - {analyze_trip.format_altitude(metrics['maxAltitude'])}")

    print(f"\n{'-'*60}")
    print("Performance")
    print(f"{'-'*60}")
    print(f"Speed std dev:    {analyze_trip.format_speed(performance['speedConsistency'])}")
    print(f"Skiing time:      {analyze_trip.format_duration(performance['skiingTime'])}")
    print(f"Lift time:        {analyze_trip.format_duration(performance['liftTime'])}")
    print(f"Stopped time:     {analyze_trip.format_duration(performance['stoppedTime'])}")
    print(f"Accel zones:      {len(performance['accelerationZones'])}")
    print(f"Decel zones:      {len(performance['decelerationZones'])}")
    for zone, seconds in performance["speedZones"].items():
        print(f"  {zone:<14}  {analyze_trip.format_duration(seconds)}")

    print(f"\n{'-'*60}")
    print("Slopes")
    print(f"{'-'*60}")
    print(f"Avg gradient:     {slopes['averageGradient']:.1f}%")
    print(f"Runs:             {slopes['totalRuns']}")
    print(f"Longest run:      {analyze_trip.format_distance(slopes['longestRun'])}")
    for colour, meters in slopes["slopeDifficulty"].items():
        print(f"  {colour:<14}  {analyze_trip.format_distance(meters)}")

    print(f"\n{'-'*60}")
    print("Altitude")
    print(f"{'-'*60}")
    print(f"Ascent time:      {analyze_trip.format_duration(altitude['ascentTime'])}")
    print(f"Descent time:     {analyze_trip.format_duration(altitude['descentTime'])}")
    print(f"Max ascent rate:  {altitude['maxAscentRate']:.2f} m/s")
    print(f"Max descent rate: {altitude['maxDescentRate']:.2f} m/s")
    for zone, seconds in altitude["elevationZones"].items():
        print(f"  {zone:<14}  {analyze_trip.format_duration(seconds)}")
    print(f"{'='*60}\n")


def main():
    parser = argparse.ArgumentParser(
        description="Summarise a ski trip GPS log"
    )
    parser.add_argument(
        "--trip-file",
        type=str,
        required=True,
        help="Path to trip JSON file"
    )
    parser.add_argument(
        "--accuracy-threshold",
        type=float,
        default=analyze_trip.DEFAULT_GPS_ACCURACY_THRESHOLD_M,
        help="Drop GPS points with horizontal accuracy above this many meters (default: 50)"
    )
    parser.add_argument(
        "--export-csv",
        type=str,
        default=None,
        help="Write the filtered GPS points to this CSV file"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Log level (default: WARNING)"
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    trip_file = Path(args.trip_file)
    if not trip_file.exists():
        print(f"Error: Trip file not found: {trip_file}")
        sys.exit(1)

    with trip_file.open("r", encoding="utf-8") as file:
        try:
            raw_log = json.load(file)
        except json.JSONDecodeError as exc:
            print(f"Error: Invalid JSON in {trip_file}: {exc}")
            sys.exit(1)

    config = analyze_trip.AnalysisConfig(gps_accuracy_threshold=args.accuracy_threshold)
    result = analyze_trip.analyze_trip_data(raw_log, config)

    if not result["gpsPoints"]:
        print(f"No valid GPS points in {trip_file}")
        sys.exit(1)

    print_report(result, trip_file)

    if args.export_csv:
        csv_path = Path(args.export_csv)
        csv_path.write_text(analyze_trip.export_points_csv(result), encoding="utf-8")
        print(f"Saved GPS points CSV to: {csv_path}")


if __name__ == "__main__":
    main()
