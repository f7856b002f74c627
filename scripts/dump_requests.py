#!/usr/bin/env python3
"""Dump the relief requests reliefmap would pin on the map.

Fetches the resource-needs listing, reconciles it against an empty
headless map surface and prints the resulting pins. Optionally plans a
driving route between two coordinates.

Usage
-----
::

    export RELIEFMAP_RESOURCES_URL="https://keralarescue.in/data/?format=json"
    python scripts/dump_requests.py

Options::

    --json                   Output as machine-readable JSON
    --route LAT,LON LAT,LON  Also plan a driving route between two points
    --debug                  Enable DEBUG logging (personal data is redacted)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from reliefmap import (  # noqa: E402
    AnnotationReconciler,
    Coordinate,
    HeadlessMapSurface,
    ReliefApiClient,
    ReliefMapConfig,
    ReliefMapError,
    RouteOverlayPlanner,
)


def _coordinate(text: str) -> Coordinate:
    lat_text, _, lon_text = text.partition(",")
    try:
        return Coordinate(latitude=float(lat_text), longitude=float(lon_text))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected LAT,LON, got {text!r}") from exc


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


async def main() -> int:
    parser = argparse.ArgumentParser(description="Dump the relief requests shown on the map.")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--route", nargs=2, type=_coordinate, metavar="LAT,LON", help="Plan a route")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = ReliefMapConfig.from_env()
    surface = HeadlessMapSurface()
    output: dict[str, Any] = {}

    try:
        async with ReliefApiClient(config) as client:
            records = await client.fetch_resource_requests()
            diff = AnnotationReconciler().reconcile(surface.annotations, records)
            surface.add_annotations(diff.to_add)
            output["fetched"] = len(records)
            output["pins"] = [a.model_dump(mode="json") for a in diff.to_add]

            if args.route:
                planner = RouteOverlayPlanner(client.directions_provider(), edge_padding=config.route_edge_padding)
                plan = await planner.plan_route(args.route[0], args.route[1])
                output["route"] = {
                    "points": len(plan.polyline),
                    "distance_m": plan.distance_m,
                    "duration_s": plan.duration_s,
                    "region": plan.region.model_dump(mode="json"),
                }
    except ReliefMapError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0

    print(_section(f"{len(output['pins'])} pins from {output['fetched']} requests"))
    for pin in output["pins"]:
        coord = pin["coordinate"]
        print(f"  {coord['latitude']:.5f},{coord['longitude']:.5f}  {pin['title'] or '-'} ({pin['subtitle'] or '-'})")
    if "route" in output:
        route = output["route"]
        print(_section("Route"))
        print(f"  points: {route['points']}")
        print(f"  distance_m: {route['distance_m']}")
        print(f"  duration_s: {route['duration_s']}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
