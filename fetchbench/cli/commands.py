from __future__ import annotations

import argparse
import json
import logging
import sys

from fetchbench.config import ConfigError, HarnessConfig, default_config, load_config
from fetchbench.fetch import FetchFailure, HttpFetcher
from fetchbench.harness import Comparison, Harness
from fetchbench.report import Bar, Speedup
from fetchbench.runner import BatchTimeout

from .args import build_parser


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        setup_logging(args.log_level)

        match args.command:
            case "run":
                return cmd_run(args)
            case "list":
                return cmd_list(args)
            case _:
                return 2

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except (FetchFailure, BatchTimeout) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        return 130


def main() -> None:
    sys.exit(run_cli())


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def cmd_run(args: argparse.Namespace) -> int:
    config = _load(args)

    if args.show is not None and not config.spec.has_name(args.show):
        raise ConfigError(f"Unknown fetch name: {args.show}")

    with _make_fetcher(config) as fetcher:
        harness = Harness(fetcher, batch_timeout=config.batch_timeout)
        comparison = harness.run(config.spec)

    if args.json:
        print(json.dumps(comparison.report.to_dict(), indent=2))
    else:
        _print_comparison(comparison, args.width)

    if args.show is not None:
        _print_payloads(comparison, args.show)

    return 0


def cmd_list(args: argparse.Namespace) -> int:
    config = _load(args)
    for entry in config.spec:
        print(f"{entry.name} {entry.locator}")
    return 0


def _load(args: argparse.Namespace) -> HarnessConfig:
    if args.config is None:
        return default_config()
    return load_config(args.config)


def _make_fetcher(config: HarnessConfig) -> HttpFetcher:
    return HttpFetcher(timeout=config.timeout)


def _print_comparison(comparison: Comparison, width: int) -> None:
    report = comparison.report

    print(f"Sequential total: {report.sequential_total * 1000:.2f}ms")
    for bar in report.sequential_timeline:
        print(_render_bar(bar, width))

    print(f"Concurrent total: {report.concurrent_total * 1000:.2f}ms")
    for bar in report.concurrent_timeline:
        print(_render_bar(bar, width))

    if isinstance(report.speedup, Speedup):
        print(
            f"{report.speedup.percentage_reduction:.1f}% reduction in execution time "
            f"({report.speedup.speedup_ratio:.2f}x faster)"
        )
    else:
        print(f"speedup not computable: {report.speedup.reason}")


def _render_bar(bar: Bar, width: int) -> str:
    filled = "#" * round(bar.fraction * width)
    label = f"{bar.name} ({bar.elapsed * 1000:.0f}ms)"
    return f"  {filled:<{width}} {label}"


def _print_payloads(comparison: Comparison, name: str) -> None:
    for run in (comparison.sequential, comparison.concurrent):
        print(f"{run.strategy} {name}:")
        print(json.dumps(run.results[name], indent=2))
