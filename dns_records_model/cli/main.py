#!/usr/bin/env python3
"""
DNS Records Model - Command Line Interface

Inspect a DNS config file: list a domain's records grouped by (type, name),
or print them as encoded zone-file lines.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict

from rich.console import Console
from rich.table import Table

from ..codec.rr import records_to_zone_text
from ..core.domain import DomainConfig
from ..parsers.dnsconfig import load_dns_config, load_settings
from ..utils.errors import DNSModelError

console = Console()
logger = logging.getLogger(__name__)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="DNS Records Model - Inspect and encode DNS record configs"
    )

    parser.add_argument(
        "--config", "-c", required=True, help="DNS config file (YAML or JSON)"
    )

    parser.add_argument(
        "--domain", "-d", help="Domain to show (default: all domains)"
    )

    parser.add_argument(
        "--zone",
        "-z",
        action="store_true",
        help="Print records as encoded zone-file lines instead of a table",
    )

    parser.add_argument(
        "--settings", "-s", help="Settings file with a logging section"
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args()

    if not Path(args.config).exists():
        print(f"Error: DNS config file '{args.config}' not found")
        sys.exit(1)

    settings = load_settings(args.settings)
    if args.verbose:
        settings.setdefault("logging", {})["level"] = "DEBUG"
    config_logger(settings)

    try:
        config = load_dns_config(args.config)

        domains = config.domains
        if args.domain:
            domain = config.find_domain(args.domain)
            if domain is None:
                print(f"Error: domain '{args.domain}' not found in {args.config}")
                sys.exit(1)
            domains = [domain]

        for domain in domains:
            if args.zone:
                print(f"$ORIGIN {domain.name}.")
                print(records_to_zone_text(domain.records))
            else:
                console.print(build_records_table(domain))

        sys.exit(0)

    except (DNSModelError, ValueError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


def build_records_table(domain: DomainConfig) -> Table:
    """Render a domain's records, grouped by (type, name), as a rich table."""
    table = Table(title=f"{domain.name} ({len(domain.records)} records)")
    table.add_column("Type", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Target")
    table.add_column("TTL", justify="right")
    table.add_column("Priority", justify="right")
    table.add_column("Meta", style="dim")

    for key, records in domain.records.grouped().items():
        for record in records:
            table.add_row(
                key.type,
                key.name,
                record.target,
                str(record.ttl or "default"),
                str(record.priority) if record.type == "MX" else "",
                " ".join(f"{k}={v}" for k, v in record.metadata.items()),
            )
    return table


def config_logger(settings: Dict):
    """Configure logging."""
    logging_config = settings.get("logging", None)
    if logging_config:
        log_level = logging_config.get("level", "INFO")
        handlers = [logging.StreamHandler(sys.stderr)]
        if logging_config.get("file"):
            handlers.append(logging.FileHandler(logging_config["file"]))

        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=handlers,
        )
        return

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


if __name__ == "__main__":
    main()
