#!/usr/bin/env python3
"""
Ops Timer Lab - Main entry point for running throughput comparisons.

Usage:
    python main.py [command] [options]

Commands:
    overhead    - Measure harness overhead (single-value and spread calls)
    baseline    - Run all baseline scenarios
    strings     - Run the bundled string benchmarks
    measure     - Measure module:function targets against shared arguments
    list        - List the baseline scenarios
"""

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from opstimer.benchmarks.strings import StringBenchmarkSuite
from opstimer.harness import (
    NO_ARGS,
    BenchmarkConfig,
    BenchmarkRunner,
    ChartReporter,
    ConsoleReporter,
    Multi,
    OpsTimerError,
    Single,
    overhead,
    overhead_arg_array,
)
from opstimer.instrumentation.traces import Tracer, TracingConfig
from opstimer.scenarios import (
    get_baseline_scenarios,
    get_scenario,
    get_scenarios_by_category,
    list_scenarios,
)

STRING_SUITES = ["all", "for-methods", "char-parsing", "bad-code"]


def resolve_target(target: str):
    """Import a ``module:attribute`` (or ``module.attribute``) callable."""
    if ":" in target:
        module_name, _, attr_path = target.partition(":")
    else:
        module_name, _, attr_path = target.rpartition(".")
    if not module_name or not attr_path:
        raise ValueError(f"Cannot resolve {target!r}; expected module:function")

    try:
        obj = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Cannot resolve {target!r}: {e}") from e
    if not callable(obj):
        raise ValueError(f"{target!r} is not callable")
    return obj


def build_arguments(args):
    """Turn --arg values into an argument set."""
    if not args.arg:
        return NO_ARGS
    if args.spread or len(args.arg) > 1:
        return Multi(tuple(args.arg))
    return Single(args.arg[0])


def run_overhead(runner, args):
    """Measure harness overhead for both call shapes."""
    return overhead(runner=runner) + overhead_arg_array(runner=runner)


def select_scenarios(args):
    """Scenarios picked by --scenario/--category, or the full baseline set."""
    if args.scenario:
        scenarios = []
        for name in args.scenario:
            scenario = get_scenario(name)
            if scenario is None:
                raise ValueError(f"Unknown scenario {name!r}; see 'python main.py list'")
            scenarios.append(scenario)
        return scenarios
    if args.category:
        scenarios = get_scenarios_by_category(args.category)
        if not scenarios:
            raise ValueError(f"Unknown category {args.category!r}; see 'python main.py list'")
        return scenarios
    return get_baseline_scenarios()


def run_baseline(runner, args):
    """Run baseline scenarios to characterize the harness."""
    results = []
    saved = {}
    for scenario in select_scenarios(args):
        print(f"\n--- {scenario.name} ({scenario.category}) ---")
        print(scenario.description)
        report = scenario.run(runner)
        results.extend(report.results)
        saved[scenario.name] = {"scenario": scenario.to_dict(), "report": report.to_dict()}

    if args.save:
        args.output_dir.mkdir(parents=True, exist_ok=True)
        path = args.output_dir / "baseline.json"
        with open(path, "w") as f:
            json.dump(saved, f, indent=2)
        print(f"\nResults saved to {path}")
    return results


def list_available(args):
    """Print the scenario registry."""
    for category, names in list_scenarios().items():
        print(f"{category}:")
        for name in names:
            print(f"  {name:<16}{get_scenario(name).description}")


def run_strings(runner, args):
    """Run string benchmarks."""
    suite = StringBenchmarkSuite(runner)
    if args.suite == "for-methods":
        return suite.run_for_methods(args.text)
    if args.suite == "char-parsing":
        return suite.run_char_parsing(args.text)
    if args.suite == "bad-code":
        return [r for pair in suite.run_bad_code(args.text).values() for r in pair]
    results = suite.run_all(args.text)
    return (
        results["for_methods"]
        + results["char_parsing"]
        + [r for pair in results["bad_code"].values() for r in pair]
    )


def run_measure(runner, args):
    """Measure user-supplied targets."""
    candidates = [resolve_target(t) for t in args.targets]
    return runner.measure(candidates, build_arguments(args))


def build_parser():
    parser = argparse.ArgumentParser(
        description="Ops Timer Lab - Compare the throughput of Python functions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py list
    python main.py overhead
    python main.py baseline --category overhead --save
    python main.py strings --suite bad-code --target-ms 500
    python main.py measure json:dumps --arg '{"a": 1}'
    python main.py measure operator:add --arg 1 --arg 2 --spread
        """,
    )

    parser.add_argument(
        "command",
        choices=["overhead", "baseline", "strings", "measure", "list"],
        help="What to run",
    )
    parser.add_argument(
        "targets",
        nargs="*",
        help="module:function targets for the measure command",
    )
    parser.add_argument(
        "--arg",
        action="append",
        default=[],
        help="Argument passed to every target (repeat for several; values are strings)",
    )
    parser.add_argument(
        "--spread",
        action="store_true",
        help="Call targets with the --arg values spread as positional arguments",
    )
    parser.add_argument(
        "--scenario",
        action="append",
        default=[],
        help="Baseline scenario to run (repeat for several; default: all)",
    )
    parser.add_argument(
        "--category",
        default=None,
        help="Run only the baseline scenarios in this category",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Write baseline reports to <output-dir>/baseline.json",
    )
    parser.add_argument(
        "--suite",
        choices=STRING_SUITES,
        default="all",
        help="String benchmark to run (default: all)",
    )
    parser.add_argument(
        "--text",
        default=None,
        help="Input string for the string benchmarks",
    )
    parser.add_argument(
        "--target-ms",
        type=float,
        default=None,
        help="Desired test length per candidate in ms (default: 1000)",
    )
    parser.add_argument(
        "--checkpoint",
        type=int,
        default=None,
        help="Iterations before the first elapsed-time sample (default: 10)",
    )
    parser.add_argument(
        "--min-sample-ms",
        type=float,
        default=None,
        help="Shortest sample trusted for extrapolation in ms (default: 35)",
    )
    parser.add_argument(
        "--strategy",
        choices=["inline", "separate"],
        default=None,
        help="Calibration strategy (default: inline)",
    )
    parser.add_argument(
        "--isolate",
        action="store_true",
        help="Keep going when a candidate raises instead of aborting the run",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print tables",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors",
    )
    parser.add_argument(
        "--chart",
        action="store_true",
        help="Save a throughput bar chart to the output directory",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("results"),
        help="Directory to save charts and reports (default: results/)",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Export an OpenTelemetry span per candidate to the console",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def build_config(args) -> BenchmarkConfig:
    """Environment defaults overridden by command line options."""
    overrides = {}
    if args.target_ms is not None:
        overrides["target_ms"] = args.target_ms
    if args.checkpoint is not None:
        overrides["initial_checkpoint"] = args.checkpoint
    if args.min_sample_ms is not None:
        overrides["min_sample_ms"] = args.min_sample_ms
    if args.strategy is not None:
        overrides["strategy"] = args.strategy
    if args.isolate:
        overrides["fault_mode"] = "isolate"
    if args.quiet:
        overrides["verbose"] = False
    return BenchmarkConfig.from_env(**overrides)


def main(argv=None) -> int:
    # Load environment variables from .env file
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "measure" and not args.targets:
        parser.error("measure needs at least one module:function target")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "list":
        list_available(args)
        return 0

    commands = {
        "overhead": run_overhead,
        "baseline": run_baseline,
        "strings": run_strings,
        "measure": run_measure,
    }

    tracer = Tracer(TracingConfig(enabled=True)) if args.trace else Tracer()
    try:
        runner = BenchmarkRunner(
            config=build_config(args),
            reporter=ConsoleReporter(use_color=not args.no_color),
            tracer=tracer,
        )
        results = commands[args.command](runner, args)
        if args.chart:
            path = ChartReporter(args.output_dir / "charts").throughput_bar_chart(
                results, filename=f"{args.command}_throughput.png"
            )
            if path:
                print(f"\nChart saved to {path}")
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user", file=sys.stderr)
        return 1
    except (OpsTimerError, ValueError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    finally:
        tracer.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
