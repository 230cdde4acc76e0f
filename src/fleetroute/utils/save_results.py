import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from fleetroute.config.parameters import Parameters
from fleetroute.costing import fleet_cost_breakdown, vessel_cost_summary
from fleetroute.models import OptimizationResult, Vessel


def results_dir() -> Path:
    """Directory for result files; ``FLEETROUTE_RESULTS_DIR`` overrides ``./results``."""
    return Path(os.environ.get('FLEETROUTE_RESULTS_DIR', Path.cwd() / 'results'))


def routes_to_dataframe(result: OptimizationResult) -> pd.DataFrame:
    """One row per route."""
    columns = [
        'Vessel_ID', 'Ports', 'Port_Sequence', 'Stops', 'Distance_NM',
        'Closing_Distance_NM', 'Time_Hours', 'Cost', 'Fuel_Consumption', 'Returns_To_Start'
    ]
    return pd.DataFrame([route.to_dict() for route in result.routes], columns=columns)


def save_optimization_results(
    result: OptimizationResult,
    vessels: Sequence[Vessel],
    parameters: Optional[Parameters] = None,
    filename: str = None,
    format: str = 'json',
    execution_time: Optional[float] = None
) -> Path:
    """Save optimization results to a file (Excel or JSON).

    Returns:
        Path of the written file.
    """
    if format not in ('json', 'excel'):
        raise ValueError(f"Unknown output format: {format}")
    parameters = parameters or Parameters()

    # Create timestamp and filename if not provided
    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        extension = '.xlsx' if format == 'excel' else '.json'
        filename = results_dir() / f"route_optimization_{timestamp}{extension}"
    filename = Path(filename)
    filename.parent.mkdir(parents=True, exist_ok=True)

    breakdown = fleet_cost_breakdown(result.routes, vessels, parameters)
    summary_metrics = [
        ('Total Cost ($)', round(result.total_cost, 2)),
        ('Total Distance (NM)', round(result.total_distance, 2)),
        ('Total Time (days)', round(result.total_time, 2)),
        ('Vessel Utilization (%)', round(result.vessel_utilization, 1)),
        ('Routes', len(result.routes)),
        ('Savings Potential ($)', round(breakdown.savings_potential, 2)),
        ('Advisories', len(result.advisories)),
    ]
    if execution_time is not None:
        summary_metrics.append(('Execution Time (s)', round(execution_time, 3)))

    if format == 'excel':
        with pd.ExcelWriter(filename) as writer:
            pd.DataFrame(summary_metrics, columns=['Metric', 'Value']).to_excel(
                writer, sheet_name='Summary', index=False
            )
            routes_df = routes_to_dataframe(result)
            routes_df['Ports'] = routes_df['Ports'].apply(lambda ids: ', '.join(map(str, ids)))
            routes_df.to_excel(writer, sheet_name='Routes', index=False)
            breakdown.to_dataframe().to_excel(writer, sheet_name='Costs', index=False)
            vessel_cost_summary(result.routes, vessels, parameters).to_excel(
                writer, sheet_name='Vessel_Costs', index=False
            )
            pd.DataFrame(
                [advisory.to_dict() for advisory in result.advisories],
                columns=['constraint', 'subject', 'actual', 'limit', 'message']
            ).to_excel(writer, sheet_name='Advisories', index=False)
    else:
        payload = {
            'summary': dict(summary_metrics),
            'result': result.to_dict(),
            'cost_breakdown': breakdown.to_dict(),
            'vessel_costs': vessel_cost_summary(result.routes, vessels, parameters).to_dict(orient='records'),
        }
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, default=str, ensure_ascii=False)

    return filename
