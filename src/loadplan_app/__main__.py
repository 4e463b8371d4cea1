import argparse
import logging
import sys
from importlib import metadata
from typing import List, Optional

from assembly_core.algorithms import PACKERS
from assembly_core.engine import plan_assembly
from assembly_core.export import result_to_dict, save_json, summary_to_dict
from assembly_core.sanity import assembly_flags
from assembly_core.summary import UNIT_POLICIES, summarize

from loadplan_app.core.order_sheet import load_orders
from loadplan_app.core.report_text import render_report
from loadplan_app.data import get_pallet_profile, load_catalog, load_settings

logger = logging.getLogger("loadplan_app")

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def _get_app_version() -> str:
    for distribution in ("pallet-assembly", "loadplan_app"):
        try:
            return metadata.version(distribution)
        except metadata.PackageNotFoundError:
            continue
    return "dev"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loadplan",
        description="Build a pallet loading plan from an order spreadsheet.",
    )
    parser.add_argument("orders", help="order sheet (.xlsx, .xlsm or .csv)")
    parser.add_argument("--customer", required=True, help="customer name for the report")
    parser.add_argument("--catalog", help="products-detail.json (default: bundled data)")
    parser.add_argument("--profile", help="pallet profile from pallets.xml")
    parser.add_argument("--strategy", choices=sorted(PACKERS), help="layer packing strategy")
    parser.add_argument("--unit-policy", choices=UNIT_POLICIES, help="how units are counted")
    parser.add_argument("--json", dest="json_path", help="write the plan as JSON")
    parser.add_argument("--plots", dest="plot_dir", help="write one PNG per pallet here")
    parser.add_argument("--check", action="store_true", help="verify the plan and list violations")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_app_version()}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
        catalog = load_catalog(args.catalog)
        config = get_pallet_profile(args.profile or settings["default_profile"])
        lines = load_orders(args.orders, catalog)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_INPUT_ERROR

    strategy = args.strategy or settings["strategy"]
    unit_policy = args.unit_policy or settings["unit_policy"]
    try:
        result = plan_assembly(lines, catalog, config, strategy=strategy)
        summary = summarize(result, unit_policy=unit_policy)
    except ValueError as e:
        logger.error("%s", e)
        return EXIT_INPUT_ERROR

    sys.stdout.write(render_report(summary, args.customer))

    if args.json_path:
        payload = result_to_dict(result)
        payload["summary"] = summary_to_dict(summary)
        save_json(args.json_path, payload)
        logger.info("Plan written to %s", args.json_path)

    if args.plot_dir and result.pallets:
        from loadplan_app.core.layer_plot import save_pallet_plots

        paths = save_pallet_plots(result, args.plot_dir)
        logger.info("Wrote %d pallet plots to %s", len(paths), args.plot_dir)

    if args.check:
        flags = assembly_flags(result)
        if flags:
            logger.warning("Plan checks: %s", ", ".join(sorted(flags)))
        else:
            logger.info("Plan checks passed")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
