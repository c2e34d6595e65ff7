#!/usr/bin/env python3
"""
Route every payment in a pain.001.001.03 file and print the routing report.

Outputs:
- a table of payments with route and reason (default)
- the full report as JSON (--json)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Add repo root to path so `payment_factory.*` imports work when running from scripts/
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from payment_factory.ingestion.pain001 import ParseError, Pain001Parser
from payment_factory.reporting import RoutingReport, route_message
from payment_factory.utils.config_loader import load_factory_config


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def print_table(report: RoutingReport) -> None:
    for row in report.rows:
        data = row.to_dict()
        chain = f" [{data['chain']}]" if data["chain"] else ""
        print(
            f"{data['id']:<8} {data['creditorName'] or '-':<28} {data['displayAmount']:>16}  "
            f"{data['route']}{chain}: {data['routeReason']}"
        )
    summary = report.summary()
    print()
    print("Routes: " + ", ".join(f"{route}={count}" for route, count in summary["routes"].items()))
    if not summary["countMatchesHeader"]:
        print(f"WARNING: header declares {report.message.header.number_of_transactions} transactions")


def main() -> int:
    parser = argparse.ArgumentParser(description="Classify pain.001 payments into Blockchain, CPN or Traditional routes")
    parser.add_argument("input", type=Path, help="Path to a pain.001.001.03 XML file")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to factory config YAML file (default: config/factory_config.yml)",
    )
    parser.add_argument("--source-country", default=None, help="Override the configured source country")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()
    load_dotenv()
    setup_logging(verbose=args.verbose)
    logger = logging.getLogger(__name__)

    try:
        cfg = load_factory_config(args.config)
        classifier = cfg.routing.build_classifier()
        message = Pain001Parser().parse(args.input.read_bytes())
        source_country: Optional[str] = args.source_country.upper() if args.source_country else None
        report = route_message(message, classifier, source_country)

        if args.json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            print_table(report)
        return 0
    except ParseError as e:
        logger.error("Could not read %s: %s", args.input, e)
        return 2
    except KeyboardInterrupt:
        logger.warning("Routing interrupted by user")
        return 130
    except Exception as e:
        logger.error("Error during routing: %s: %s", type(e).__name__, str(e), exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
