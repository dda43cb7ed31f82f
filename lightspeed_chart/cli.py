import argparse
import logging
from dataclasses import replace
from pathlib import Path

from .chart import DEFAULT_CONFIG, render_svg
from .dataset import MEASUREMENTS
from .logging_config import setup_logging
from .page import build_html, build_interactive_svg

logger = logging.getLogger(__name__)


def describe(records):
    if not records:
        return "No measurements."
    first = min(r.year for r in records)
    last = max(r.year for r in records)
    return (
        f"{len(records)} measurements from {first:g} to {last:g}. "
        "Hover a point to see the observer, the method and its uncertainty range."
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate an interactive chart of historical speed of light measurements"
    )
    parser.add_argument("--out-html", help="Output HTML path")
    parser.add_argument("--out-svg", help="Output static SVG path")
    parser.add_argument("--title", default=DEFAULT_CONFIG.title, help="Chart and page title")
    parser.add_argument("--y-min", type=float, default=None, help="Lower limit of the speed axis (km/s)")
    parser.add_argument("--y-max", type=float, default=None, help="Upper limit of the speed axis (km/s)")
    parser.add_argument("--width", type=float, default=DEFAULT_CONFIG.width, help="Figure width in inches")
    parser.add_argument("--height", type=float, default=DEFAULT_CONFIG.height, help="Figure height in inches")
    parser.add_argument("--dpi", type=int, default=DEFAULT_CONFIG.dpi, help="Figure resolution")
    parser.add_argument("--show", action="store_true", help="Open an interactive matplotlib window")
    parser.add_argument("--log-file", default=None, help="Also write log output to this file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if not (args.out_html or args.out_svg or args.show):
        parser.error("Provide at least one of --out-html, --out-svg or --show.")
    if args.y_min is not None and args.y_max is not None and args.y_min >= args.y_max:
        parser.error("--y-min must be lower than --y-max.")
    if args.width <= 0 or args.height <= 0 or args.dpi <= 0:
        parser.error("--width, --height and --dpi must be > 0.")

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    config = replace(
        DEFAULT_CONFIG,
        title=args.title,
        y_min=args.y_min,
        y_max=args.y_max,
        width=args.width,
        height=args.height,
        dpi=args.dpi,
    )
    records = MEASUREMENTS
    logger.info("Rendering %d measurements", len(records))

    if args.out_html:
        out_html = Path(args.out_html).resolve()
        out_html.parent.mkdir(parents=True, exist_ok=True)
        svg = build_interactive_svg(records, config)
        out_html.write_text(build_html(config.title, svg, describe(records)), encoding="utf-8")
        print(out_html)

    if args.out_svg:
        out_svg = Path(args.out_svg).resolve()
        out_svg.parent.mkdir(parents=True, exist_ok=True)
        out_svg.write_text(render_svg(records, config=config), encoding="utf-8")
        print(out_svg)

    if args.show:
        from .viewer import HoverViewer

        HoverViewer(records, config).show()


if __name__ == "__main__":
    main()
