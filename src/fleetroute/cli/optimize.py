"""
Command-line tool that optimizes vessel routes for a scenario file.
"""
from __future__ import annotations
import dataclasses
import logging
import time

import yaml

from fleetroute.exceptions import FleetRouteError
from fleetroute.models import OptimizationResult
from fleetroute.pipeline import optimize
from fleetroute.utils.cli import load_parameters, parse_args, print_parameter_help
from fleetroute.utils.data_loading import default_scenario_path, load_scenario
from fleetroute.utils.logging import Colors, ProgressTracker, setup_logging
from fleetroute.utils.save_results import save_optimization_results

# openpyxl writes only the xlsx format
EXCEL_SUFFIX = '.xlsx'


def _print_info() -> None:
    print("\nFleet Routing Optimization")
    print("=" * 80)
    print("Clusters demand ports, assigns vessels by capacity and builds one")
    print("time-window-aware nearest-neighbor route per vessel.")
    print(f"  Bundled scenario: {default_scenario_path()}")
    print("    Example: fleetroute --return-to-start --format json")
    print("\nUse --help or --help-params to see all available options.")


def _print_summary(result: OptimizationResult) -> None:
    print(f"\n{Colors.BOLD}=== Optimization Results ==={Colors.RESET}")
    for route in result.routes:
        closing = " (round trip)" if route.returns_to_start else ""
        print(
            f"  {route.vessel_id}: {route.port_sequence}{closing}\n"
            f"    {route.distance:,.1f} NM | {route.time:,.1f} h | "
            f"${route.cost:,.2f} | {route.fuel_consumption:,.1f} t fuel"
        )
    print(f"Total Cost: ${result.total_cost:,.2f}")
    print(f"Total Distance: {result.total_distance:,.1f} NM")
    print(f"Total Time: {result.total_time:,.2f} days")
    print(f"Vessel Utilization: {result.vessel_utilization:.1f}%")
    for advisory in result.advisories:
        print(f"{Colors.YELLOW}Advisory: {advisory.message}{Colors.RESET}")


def main(argv=None) -> None:
    parser = parse_args()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    logger = logging.getLogger(__name__)

    if args.help_params:
        print_parameter_help()
    if args.info:
        _print_info()
        return

    try:
        params = load_parameters(args)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        parser.error(f"Invalid configuration: {e}")
    if args.time_limit is not None and args.time_limit < 0:
        parser.error(f"--time-limit must be non-negative, got {args.time_limit}")
    if args.format == 'excel' and args.output and not args.output.lower().endswith(EXCEL_SUFFIX):
        parser.error(f"--format excel needs an {EXCEL_SUFFIX} output file, got {args.output}")

    steps = ['Load Scenario', 'Optimize Routes', 'Save Results']
    start_time = time.time()

    with ProgressTracker(steps) as progress:
        try:
            scenario = load_scenario(args.scenario or default_scenario_path())
        except (OSError, ValueError, yaml.YAMLError) as e:
            parser.error(str(e))
        progress.advance(
            f"Loaded {Colors.BOLD}{len(scenario.vessels)}{Colors.RESET} vessels and "
            f"{Colors.BOLD}{len(scenario.ports)}{Colors.RESET} ports"
        )

        constraints = scenario.constraints
        if args.return_to_start:
            constraints = dataclasses.replace(constraints, return_to_start=True)
        if args.merge_shared_vessels:
            constraints = dataclasses.replace(constraints, merge_shared_vessels=True)

        try:
            result = optimize(
                scenario.vessels,
                scenario.ports,
                time_windows=scenario.time_windows,
                constraints=constraints,
                demands=scenario.demands,
                params=params,
                time_limit=args.time_limit,
            )
        except FleetRouteError as e:
            progress.fail(e)
            parser.exit(1, f"Optimization failed: {e}\n")
        progress.advance(
            f"Built {Colors.BOLD}{len(result.routes)}{Colors.RESET} routes: "
            f"${result.total_cost:,.2f} total cost"
        )

        if args.format or args.output:
            output_format = args.format
            if output_format is None:
                output_format = 'excel' if args.output.lower().endswith(EXCEL_SUFFIX) else 'json'
            try:
                path = save_optimization_results(
                    result,
                    scenario.vessels,
                    params,
                    filename=args.output,
                    format=output_format,
                    execution_time=time.time() - start_time,
                )
            except (OSError, ValueError) as e:
                progress.fail(e)
                parser.exit(1, f"Could not save results: {e}\n")
            logger.info(f"Saved results to {path}")
            progress.advance(f"Results saved {Colors.GRAY}({path}){Colors.RESET}")
        else:
            progress.advance("No output file requested", status='info')

    _print_summary(result)


if __name__ == "__main__":
    main()
