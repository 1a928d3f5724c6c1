"""Report CLI — grid sweeps and calibration tables.

    srs-pricing-report sweep --rate-min 10 --rate-max 15 --contracts all --table
    srs-pricing-report calibrate --rates 10,15 --durations 1,3,5,10 --contract 10
    srs-pricing-report config --config configs/two_layer.yaml --out effective.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from srs_pricing.config.engine import EngineConfig
from srs_pricing.config.loader import dump_engine_config, load_engine_config
from srs_pricing.engine import prices
from srs_pricing.engine.discounts import contract_discount, discount_basis_units, total_commitment
from srs_pricing.errors import PricingError
from srs_pricing.reporting.grid import (
    build_grid,
    find_anomalies,
    find_term_gap_violations,
    format_anomaly,
    grid_frame,
    tier_label,
)
from srs_pricing.utils.logger import setup_logging

logger = logging.getLogger(__name__)

MAX_PRINTED_ISSUES = 25


def value_range(start: float, stop: float, step: float) -> list[float]:
    """Inclusive range ``start..stop`` by ``step``."""
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    values = np.arange(start, stop + step / 2, step)
    return [float(v) for v in np.round(values, 6)]


def parse_number_list(value: str) -> list[float]:
    items = [v for v in value.replace(",", " ").split() if v]
    try:
        return [float(v) for v in items]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number list: {value!r}") from exc


def parse_contracts(value: str | None, config: EngineConfig) -> list[int]:
    if value is None or value == "all":
        return config.contract_terms
    return [int(v) for v in parse_number_list(value)]


def _load_config(path: str | None) -> EngineConfig:
    return load_engine_config(path) if path else EngineConfig()


def run_sweep(args: argparse.Namespace, out=None) -> int:
    out = out or sys.stdout
    config = _load_config(args.config)
    contracts = parse_contracts(args.contracts, config)
    rates = value_range(args.rate_min, args.rate_max, args.rate_step)
    durations = value_range(args.duration_min, args.duration_max, args.duration_step)
    fleet = config.fleet.existing_units if args.fleet is None else args.fleet

    rows = build_grid(config, rates, durations, contracts, fleet)
    anomalies = find_anomalies(rows, args.price_eps, args.disc_eps)

    print(
        f"# contract={','.join(str(c) for c in contracts)} fleet={fleet:g} "
        f"rate={args.rate_min:g}-{args.rate_max:g} step={args.rate_step:g} "
        f"duration={args.duration_min:g}-{args.duration_max:g}",
        file=out,
    )

    if args.table:
        table_rows = rows
        if args.issues_only:
            flagged = {id(a.curr) for a in anomalies} | {id(a.prev) for a in anomalies}
            table_rows = [r for r in rows if id(r) in flagged]
        out.write(grid_frame(table_rows).to_csv(sep="\t", index=False))

    if args.series:
        if not anomalies:
            print("\n# series check: no issues found", file=out)
        else:
            print(f"\n# series check: {len(anomalies)} issues", file=out)
            for anomaly in anomalies[:MAX_PRINTED_ISSUES]:
                print(format_anomaly(anomaly), file=out)
            if len(anomalies) > MAX_PRINTED_ISSUES:
                print(f"... {len(anomalies) - MAX_PRINTED_ISSUES} more", file=out)

    violations = find_term_gap_violations(config, rates, durations, fleet)
    if violations:
        print(f"\n# term gap check: {len(violations)} violations", file=out)
        for v in violations[:MAX_PRINTED_ISSUES]:
            print(
                f"! {v.shorter}yr {v.shorter_y2:.0f} vs {v.longer}yr {v.longer_y2:.0f} "
                f"(gap {v.required_gap:g}) at {v.rate:g}/{v.duration:g}",
                file=out,
            )

    logger.info("sweep: %d rows, %d anomalies, %d gap violations", len(rows), len(anomalies), len(violations))
    return 1 if (anomalies or violations) and args.fail_on_issues else 0


def run_calibrate(args: argparse.Namespace, out=None) -> int:
    out = out or sys.stdout
    config = _load_config(args.config)
    fleet = config.fleet.existing_units if args.existing is None else args.existing
    contract = args.contract

    print("Installed-Base Pricing Calibration", file=out)
    print(f"contractYears={contract} existingFleet={fleet:g}", file=out)
    print(
        f"margin targets: y1={config.pricing.target_margin_year1:g} "
        f"y2={config.pricing.target_margin_year2:g} ({config.pricing.margin_basis}) "
        f"overheadY1Factor={config.pricing.overhead_year1_factor:g}",
        file=out,
    )
    print(f"scaleEfficiency: {config.scale_efficiency.model_dump()}", file=out)
    print("", file=out)
    print("rate/mo | commitYrs | units | tier | listY1 | listY2 | y1 | y2 | total", file=out)
    print("--------|-----------|-------|------|--------|--------|----|----|------", file=out)

    for rate in args.rates:
        for duration in args.durations:
            units = total_commitment(rate, duration)
            row = [
                f"{rate:>6g}",
                f"{duration:>9g}",
                f"{units:>5g}",
                f"{tier_label(config, discount_basis_units(config, rate, duration)):>4}",
                f"{prices.year1_list_price(config):>7.0f}",
                f"{prices.year2_list_price(config, rate, duration, fleet):>7.0f}",
                f"{prices.year1_price(config, rate, duration, contract):>4.0f}",
                f"{prices.year2_price(config, contract, rate, duration, fleet):>4.0f}",
                f"{prices.contract_price(config, contract, rate, duration, fleet):>6.0f}",
            ]
            print(" | ".join(row), file=out)

    print("", file=out)
    print(f"Contract discount ({contract}yr): {contract_discount(config, contract) * 100:.0f}%", file=out)
    return 0


def run_config(args: argparse.Namespace, out=None) -> int:
    """Write the effective EngineConfig (file or defaults, all fields filled) as YAML."""
    out = out or sys.stdout
    config = _load_config(args.config)
    dump_engine_config(config, args.out)
    print(f"Wrote {args.out} (contract terms: {config.contract_terms})", file=out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="srs-pricing-report", description=__doc__.splitlines()[0])
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    sweep = sub.add_parser("sweep", help="Price a rate × duration grid and flag non-monotonic transitions")
    sweep.add_argument("--config", help="YAML EngineConfig (defaults if omitted)")
    sweep.add_argument("--rate-min", type=float, default=10)
    sweep.add_argument("--rate-max", type=float, default=15)
    sweep.add_argument("--rate-step", type=float, default=1)
    sweep.add_argument("--duration-min", type=float, default=1)
    sweep.add_argument("--duration-max", type=float, default=3)
    sweep.add_argument("--duration-step", type=float, default=1)
    sweep.add_argument("--contracts", help="Comma list of contract lengths, or 'all' (default)")
    sweep.add_argument("--fleet", type=float, default=None, help="Existing installed base")
    sweep.add_argument("--price-eps", type=float, default=0.01)
    sweep.add_argument("--disc-eps", type=float, default=0.005)
    sweep.add_argument("--table", action="store_true", help="Print the tab-separated grid")
    sweep.add_argument("--issues-only", action="store_true", help="Table shows only flagged rows")
    sweep.add_argument("--no-series", dest="series", action="store_false", help="Skip the series check")
    sweep.add_argument("--fail-on-issues", action="store_true", help="Exit 1 when anything is flagged")
    sweep.set_defaults(func=run_sweep)

    cal = sub.add_parser("calibrate", help="List and net prices across rates and commitment lengths")
    cal.add_argument("--config", help="YAML EngineConfig (defaults if omitted)")
    cal.add_argument("--rates", type=parse_number_list, default=[10.0, 15.0])
    cal.add_argument("--durations", type=parse_number_list, default=[1.0, 3.0, 5.0, 10.0])
    cal.add_argument("--contract", type=int, default=10)
    cal.add_argument("--existing", type=float, default=None)
    cal.set_defaults(func=run_calibrate)

    dump = sub.add_parser("config", help="Write the effective configuration with every default filled in")
    dump.add_argument("--config", help="YAML EngineConfig (defaults if omitted)")
    dump.add_argument("--out", required=True, help="Destination YAML file")
    dump.set_defaults(func=run_config)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        return args.func(args)
    except PricingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
