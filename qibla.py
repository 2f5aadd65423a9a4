"""Command-line Qibla report: geocode an address, print the day's times, save a compass PNG."""

import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv
from pytz import timezone

from qiblafinder.compute import GeocodingError, run
from qiblafinder.config import configure_logging, load_settings
from qiblafinder.methods import madhab_from_name, method_from_name
from qiblafinder.models import QueryInput
from qiblafinder.renderers.static import save_static_compass
from qiblafinder.timeutil import hijri_date_string

logger = logging.getLogger("qibla")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("address", help='Place to search, e.g. "Westminster, London"')
    parser.add_argument("--date", default="", help="YYYY-MM-DD; local today if omitted")
    parser.add_argument("--method", default=None, help="Calculation method name")
    parser.add_argument("--madhab", default=None, help="shafi or hanafi")
    parser.add_argument("--output", type=Path, default=None, help="PNG path; under results/ if omitted")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    load_dotenv()
    settings = load_settings()
    configure_logging(settings.log_level)
    args = _parse_args(argv)

    method = method_from_name(args.method) if args.method else settings.default_method
    madhab = madhab_from_name(args.madhab) if args.madhab else settings.default_madhab

    try:
        report = run(QueryInput(address=args.address, date=args.date), method, madhab)
    except GeocodingError as exc:
        logger.error("%s", exc)
        return 1

    context = report.context
    print(f"{context.address_display} ({context.timezone})")
    print(f"{context.local_date.isoformat()}  ·  {hijri_date_string(context.local_date)}")
    print(f"Qibla {report.direction.formatted_bearing}, {report.direction.formatted_distance} to Mecca")

    if report.schedule is None:
        print("No prayer schedule for this date and place.")
    else:
        print(f"{method.value}, {madhab.value}")
        for prayer, when in report.schedule.localized(timezone(context.timezone)):
            print(f"  {prayer.value:<8} {when:%H:%M}")

    path = save_static_compass(report.direction, args.output)
    print(f"Compass saved to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
