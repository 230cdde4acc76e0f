from argparse import ArgumentParser, RawTextHelpFormatter
from dataclasses import fields, replace
from typing import Dict, Any
import sys

from fleetroute.config.parameters import Parameters
from fleetroute.utils.logging import Colors

def print_parameter_help():
    """Display detailed help information about parameters"""
    help_text = f"""
{Colors.BOLD}Fleet Routing Parameters{Colors.RESET}
{Colors.CYAN}════════════════════════{Colors.RESET}

{Colors.YELLOW}Cost Rates:{Colors.RESET}
  --fuel-price FLOAT        Fuel price in USD per ton
                           Default: 600
                           Example: --fuel-price 650

  --avg-port-charge FLOAT   Charge per port call in USD, also used when a
                           port has no berthing fee
                           Default: 5000

  --crew-day-rate FLOAT     Crew cost in USD per person per day
                           Default: 150

  --maintenance-per-nm FLOAT
                           Maintenance cost in USD per nautical mile
                           (reporting only)
                           Default: 0.8

{Colors.YELLOW}Algorithm:{Colors.RESET}
  --max-cluster-iterations INT
                           Upper bound on clustering rounds
                           Default: 100

{Colors.YELLOW}Routing Options:{Colors.RESET}
  --return-to-start         Close every route back to its first port
  --merge-shared-vessels    Merge routes that share a vessel into one itinerary
  --time-limit SECONDS      Abort the run when it takes longer

{Colors.YELLOW}Input/Output:{Colors.RESET}
  --scenario PATH           YAML or JSON scenario with vessels, ports,
                           time_windows and constraints
                           Default: bundled Indonesian example
  --config PATH             Path to custom config file
  --format {{json,excel}}     Output file format
  --output PATH             Output file (default: results/ directory)

{Colors.CYAN}Examples:{Colors.RESET}
  # Run the bundled example and close every loop
  fleetroute --return-to-start

  # Use a custom scenario and fuel price, save an Excel report
  fleetroute --scenario my_fleet.yaml --fuel-price 700 --format excel
"""
    print(help_text)
    sys.exit(0)

def parse_args() -> ArgumentParser:
    """Parse command line arguments for parameter overrides"""
    parser = ArgumentParser(
        description='Fleet Routing Optimization',
        formatter_class=RawTextHelpFormatter
    )

    parser.add_argument(
        '--help-params',
        action='store_true',
        help='Show detailed parameter information and exit'
    )
    parser.add_argument('--info', action='store_true', help='Show tool information and exit')

    parser.add_argument('--config', type=str, help='Path to custom config file')
    parser.add_argument('--scenario', type=str, help='Path to a YAML or JSON scenario file')
    parser.add_argument('--fuel-price', type=float, help='Fuel price in USD per ton')
    parser.add_argument('--avg-port-charge', type=float, help='Charge per port call in USD')
    parser.add_argument('--crew-day-rate', type=float, help='Crew cost per person per day')
    parser.add_argument('--maintenance-per-nm', type=float, help='Maintenance cost per NM')
    parser.add_argument('--max-cluster-iterations', type=int, help='Upper bound on clustering rounds')
    parser.add_argument(
        '--return-to-start',
        action='store_true',
        default=None,
        help='Close every route back to its first port'
    )
    parser.add_argument(
        '--merge-shared-vessels',
        action='store_true',
        default=None,
        help='Merge routes that share a vessel into one itinerary'
    )
    parser.add_argument('--time-limit', type=float, help='Time limit in seconds')
    parser.add_argument(
        '--format',
        choices=['json', 'excel'],
        help='Output file format (no file is written when omitted)'
    )
    parser.add_argument('--output', type=str, help='Output file path')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')

    return parser

def get_parameter_overrides(args) -> Dict[str, Any]:
    """Flags that name a :class:`Parameters` field and were given on the command line."""
    names = {f.name for f in fields(Parameters)}
    return {k: v for k, v in vars(args).items() if v is not None and k in names}

def load_parameters(args) -> Parameters:
    """Load ``--config`` (or the packaged defaults) and apply flag overrides.

    Raises:
        ValueError: If an override or a config value fails validation.
        TypeError: If the config file has keys that are not parameters.
    """
    params = Parameters.from_yaml(args.config)
    overrides = get_parameter_overrides(args)
    return replace(params, **overrides) if overrides else params

