import argparse
import json
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .services import ephem, views
from .services.chart import BirthRecord, ChartEngine
from .services.errors import ChartError, PositionCalculationError

VIEWS = ("chart", "planets", "houses", "ascendant", "dashas", "nakshatra")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vedic-chart", description="Compute a sidereal whole-sign chart.")
    parser.add_argument("--date", required=True, help="YYYY-MM-DD")
    parser.add_argument("--time", required=True, help="HH:MM or HH:MM:SS, local civil time")
    parser.add_argument("--tz", required=True, help="IANA zone (Asia/Kolkata) or offset (+05:30)")
    parser.add_argument("--lat", type=float, required=True)
    parser.add_argument("--lon", type=float, required=True)
    parser.add_argument("--ayanamsha", default=None)
    parser.add_argument("--node-type", choices=["true", "mean"], default=None)
    parser.add_argument("--view", choices=VIEWS, default="chart")
    parser.add_argument("--planet", default="Moon", help="body for --view nakshatra")
    parser.add_argument("--as-of", default=None, help="YYYY-MM-DD; report the dasha running on that date")
    return parser


def run(args: argparse.Namespace) -> object:
    provider = ephem.SwissEphemerisProvider()
    engine = ChartEngine(provider, ayanamsha=args.ayanamsha, node=args.node_type)
    record = BirthRecord(date=args.date, time=args.time, tz=args.tz, lat=args.lat, lon=args.lon)

    if args.view == "planets":
        return [views.body_view(p) for p in engine.positions(record)]
    if args.view == "houses":
        return engine.houses(record)
    if args.view == "ascendant":
        return views.ascendant_view(engine.ascendant(record))
    if args.view == "dashas":
        return views.dasha_view(engine.dasha_schedule(record), as_of=args.as_of)
    if args.view == "nakshatra":
        found = engine.nakshatra_of(record, args.planet)
        if found is None:
            raise PositionCalculationError(f"Could not find nakshatra for planet {args.planet}", body=args.planet)
        return found
    return views.chart_view(record, engine.compute_chart(record), as_of=args.as_of, backend=provider.backend)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    ephem.init_paths(ephem.ephemeris_dir())
    try:
        output = run(args)
    except ChartError as exc:
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
