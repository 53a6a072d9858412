from pathlib import Path
from typing import Optional
import pandas as pd

from icwl.aggregation import monthly_totals, season_total
from icwl.data_structures import CalculatedTableResults
from icwl.utils import ureg

def write_summary(results: CalculatedTableResults, output_file: Path,
                  channels: Optional[pd.DataFrame] = None) -> None:
    """
    Write a summary of intake volumes and, if given, channel records.

    Args:
        results (CalculatedTableResults): Hydrology table results
        output_file (Path): Path to save the summary file
        channels (pd.DataFrame): Channel records with derived metrics

    Returns:
        None
    """
    totals = monthly_totals(results)
    computed = sum(not r.is_empty for r in results.values())

    with open(output_file, 'w', encoding="utf8") as f:
        f.write("=" * 50 + "\n\n")
        f.write("Channel Water Loss Summary\n")
        f.write("=" * 50 + "\n\n")

        f.write(f"{'Decades computed':22s}: {computed} of {len(results)}\n")

        total = season_total(results)
        if total is not None:
            volume = ureg.Quantity(total, 'hectometer ** 3').to('meter ** 3')
            f.write(f"{'Season intake volume':22s}: {total:,.4f} million m³ ({volume:,.0f~P})\n")

        f.write("\nMonthly Intake Volume\n")
        f.write("-" * 25 + "\n")
        for month, row in totals.iterrows():
            if pd.isna(row['w_total']):
                f.write(f"{month:22s}: -\n")
                continue
            f.write(f"{month:22s}: {row['w_total']:,.4f} million m³ ({int(row['decades'])} decades)\n")

        f.write("\nSeepage by Reach\n")
        f.write("-" * 25 + "\n")
        n_segments = max((len(r.segments) for r in results.values()), default=0)
        for i in range(n_segments):
            losses = [r.segments[i].s for r in results.values() if r.segments[i].s is not None]
            mean_loss = sum(losses) / len(losses) if losses else float('nan')
            f.write(f"{'Segment ' + str(i + 1):22s}: {mean_loss:,.1f} L/s mean over {len(losses)} decades\n")

        if channels is not None and not channels.empty:
            f.write("\nChannels\n")
            f.write("-" * 25 + "\n")
            for status, count in channels['status'].value_counts().items():
                f.write(f"{status:22s}: {count}\n")
            f.write(f"{'Mean efficiency':22s}: {channels['efficiency'].mean():.1%}\n")
