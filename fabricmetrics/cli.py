"""Command-line interface for fabricmetrics."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from fabricmetrics.calc import (
    calculate_all_metrics,
    compare_topologies,
    comparison_frame,
    validate_parallel_links,
)
from fabricmetrics.catalog import ROLES, DeviceCatalog, apply_device_selection
from fabricmetrics.errors import FabricMetricsError
from fabricmetrics.io import load_topologies, topology_to_dict
from fabricmetrics.logging import (
    enable_debug_logging,
    get_logger,
    set_global_log_level,
)
from fabricmetrics.model import MetricsResult, Topology
from fabricmetrics.templates import get_template, list_templates

logger = get_logger(__name__)


def _format_table(
    headers: List[str], rows: List[List[str]], min_width: int = 8
) -> str:
    """Render ``rows`` under ``headers`` as an indented ASCII table.

    Each column is as wide as its longest cell, but never narrower than
    ``min_width``. Returns an empty string when there are no rows.
    """
    if not rows:
        return ""

    widths = [
        max(min_width, len(str(header)), *(len(str(row[i])) for row in rows))
        for i, header in enumerate(headers)
    ]

    def line(cells: List[Any]) -> str:
        return "   " + " | ".join(
            f"{str(cell):<{width}}" for cell, width in zip(cells, widths)
        )

    rule = "   " + "-+-".join("-" * width for width in widths)
    return "\n".join([line(headers), rule, *(line(row) for row in rows)])


def _format_number(value: Any) -> str:
    """Return a number with thousands separators and at most two decimals.

    Examples:
        58000.0 -> "58,000"; 1.25 -> "1.25".
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return str(value)
    s = f"{v:,.2f}"
    return s.rstrip("0").rstrip(".") if "." in s else s


def _resolve(topology: Topology, catalog: DeviceCatalog) -> Topology:
    """Fold the topology's device selection into its configuration."""
    config = apply_device_selection(topology.configuration, catalog)
    if config is topology.configuration:
        return topology
    return Topology(
        id=topology.id,
        name=topology.name,
        configuration=config,
        description=topology.description,
        created_at=topology.created_at,
        updated_at=topology.updated_at,
        imported_at=topology.imported_at,
        exported_at=topology.exported_at,
        export_version=topology.export_version,
    )


def _metrics_rows(metrics: MetricsResult) -> List[List[str]]:
    m = metrics
    return [
        ["Spines", str(m.device_count.spines)],
        ["Leafs", str(m.device_count.leafs)],
        ["Switch cost", _format_number(m.cost.switches.total)],
        ["Optics cost", _format_number(m.cost.optics)],
        ["Total cost", _format_number(m.cost.total)],
        ["Switch power (W)", _format_number(m.power.switches.total)],
        ["Optics power (W)", _format_number(m.power.optics)],
        ["Total power (W)", _format_number(m.power.total)],
        ["Oversubscription", m.oversubscription.ratio_label],
        ["Uplink capacity (Gbps)", _format_number(m.oversubscription.uplink_capacity)],
        [
            "Downlink capacity (Gbps)",
            _format_number(m.oversubscription.downlink_capacity),
        ],
        ["Hops", str(m.latency.hops)],
        ["Latency (us)", _format_number(m.latency.total)],
        ["Rack units", str(m.rack_space.total_rack_units)],
        ["Racks", str(m.rack_space.racks_needed)],
        ["Links", str(m.cabling.total)],
        ["Breakout links", str(m.cabling.breakout)],
        ["Physical cables", str(m.cabling.physical)],
    ]


def _run_metrics(path: Path, as_json: bool, output: Optional[Path]) -> None:
    logger.info(f"Loading topologies from: {path}")
    catalog = DeviceCatalog.builtin()
    payload: List[Dict[str, Any]] = []
    for topology in load_topologies(path):
        topology = _resolve(topology, catalog)
        logger.debug(f"Calculating metrics for '{topology.name}'")
        metrics = calculate_all_metrics(topology.configuration)
        payload.append(
            {"id": topology.id, "name": topology.name, "metrics": metrics.to_dict()}
        )
        if not as_json:
            print(f"\n{topology.name}")
            print(_format_table(["Metric", "Value"], _metrics_rows(metrics)))

    if as_json or output is not None:
        json_str = json.dumps(payload, indent=2)
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(json_str)
            logger.info(f"Metrics written to: {output}")
        if as_json:
            print(json_str)


def _run_compare(paths: List[Path], csv_path: Optional[Path]) -> None:
    catalog = DeviceCatalog.builtin()
    topologies: List[Topology] = []
    for path in paths:
        logger.info(f"Loading topologies from: {path}")
        topologies.extend(_resolve(t, catalog) for t in load_topologies(path))
    if not topologies:
        logger.warning("No topologies to compare")
        return

    frame = comparison_frame(compare_topologies(topologies))
    headers = ["name", *frame.columns]
    rows = [
        [str(name), *(_format_number(v) for v in row)]
        for name, row in zip(frame.index, frame.itertuples(index=False))
    ]
    print(_format_table(headers, rows, min_width=4))

    if csv_path is not None:
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(csv_path)
        logger.info(f"Comparison written to: {csv_path}")


def _run_validate(path: Path) -> bool:
    """Check every topology in ``path``; return True when all are usable."""
    catalog = DeviceCatalog.builtin()
    ok = True
    for topology in load_topologies(path):
        problem: Optional[str] = None
        try:
            topology = _resolve(topology, catalog)
            check = validate_parallel_links(topology.configuration)
            if check.valid:
                calculate_all_metrics(topology.configuration)
            else:
                problem = check.reason
        except FabricMetricsError as e:
            problem = str(e)

        if problem is None:
            print(f"✅ {topology.name}")
            continue
        ok = False
        logger.error(f"'{topology.name}' is invalid: {problem}")
        print(f"❌ {topology.name}: {problem}")
    return ok


def _run_templates(show: Optional[str]) -> bool:
    if show is not None:
        template = get_template(show)
        if template is None:
            logger.error(f"Unknown template: {show}")
            return False
        print(json.dumps(topology_to_dict(template), indent=2))
        return True

    rows = []
    for template in list_templates():
        cfg = template.configuration
        rows.append(
            [
                template.name,
                str(cfg.num_tiers),
                str(0 if cfg.is_single_tier else cfg.num_spines),
                str(cfg.num_leafs),
            ]
        )
    print(_format_table(["Template", "Tiers", "Spines", "Leafs"], rows))
    return True


def _run_devices(role: Optional[str]) -> None:
    catalog = DeviceCatalog.builtin()
    devices = (
        catalog.devices_for_role(role) if role else list(catalog.devices.values())
    )
    rows = [
        [
            d.id,
            d.display_name,
            "/".join(d.roles),
            ", ".join(f"{p.count}x{p.speed.value}" for p in d.port_configurations),
            _format_number(d.power_watts),
            str(d.rack_units),
            _format_number(d.cost),
        ]
        for d in devices
    ]
    print(
        _format_table(
            ["Id", "Device", "Roles", "Ports", "Power (W)", "RU", "Cost"], rows
        )
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``fabricmetrics`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="fabricmetrics",
        description="Evaluate and compare data-center fabric topologies.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{metrics,compare,validate,templates,devices}",
        help="Available commands",
    )

    metrics_parser = subparsers.add_parser(
        "metrics", help="Calculate metrics for each topology in a file"
    )
    metrics_parser.add_argument("file", type=Path, help="Topology YAML or JSON")
    metrics_parser.add_argument(
        "--json", action="store_true", help="Print metrics as JSON"
    )
    metrics_parser.add_argument(
        "--output", "-o", type=Path, default=None, help="Write metrics JSON here"
    )

    compare_parser = subparsers.add_parser(
        "compare", help="Score topologies side by side"
    )
    compare_parser.add_argument(
        "files", type=Path, nargs="+", help="Topology YAML or JSON files"
    )
    compare_parser.add_argument(
        "--csv", type=Path, default=None, help="Also write the table as CSV"
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Check a topology file without printing metrics"
    )
    validate_parser.add_argument("file", type=Path, help="Topology YAML or JSON")

    templates_parser = subparsers.add_parser(
        "templates", help="List built-in templates"
    )
    templates_parser.add_argument(
        "--show", metavar="NAME", default=None, help="Dump one template as JSON"
    )

    devices_parser = subparsers.add_parser("devices", help="List the device catalog")
    devices_parser.add_argument(
        "--role", choices=ROLES, default=None, help="Only devices for this role"
    )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        enable_debug_logging()
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    try:
        if args.command == "metrics":
            _run_metrics(args.file, args.json, args.output)
        elif args.command == "compare":
            _run_compare(args.files, args.csv)
        elif args.command == "validate":
            if not _run_validate(args.file):
                sys.exit(1)
        elif args.command == "templates":
            if not _run_templates(args.show):
                sys.exit(1)
        elif args.command == "devices":
            _run_devices(args.role)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        sys.exit(1)
    except FabricMetricsError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
