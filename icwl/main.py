from pathlib import Path
import argparse
import logging
import pandas as pd

from icwl.read_data import read_data
from icwl.hydrology import calculate_hydrology_table
from icwl.channel_metrics import derive_channel_table
from icwl.checker import check_results, check_channels, alert
from icwl.summary import write_summary
from icwl.plots import generate_plots
from icwl.formulas import AVERAGE_A
from icwl.aggregation import DAYS_IN_DECADE, RETURN_VOLUME
from icwl.utils import load_config

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s',
                    datefmt='%H:%M:%S')
logger = logging.getLogger(__name__)

def main() -> None:
    parser = argparse.ArgumentParser(description="Compute irrigation channel water losses")
    parser.add_argument("--config", required=True, help="Path to the configuration files")
    parser.add_argument("--env", default="default", help="Environment to use within the config file")
    parser.add_argument("--plot", action="store_true", help="Generate plots")
    parser.add_argument("--check", action="store_true", help="Check result consistency")
    parser.add_argument("--save", action="store_true", help="Save results")
    parser.add_argument("--n-jobs", type=int, default=1, help="Number of parallel jobs")
    args = parser.parse_args()

    logger.info("Irrigation Channel Water Loss Model")

    config = load_config(args.config, args.env, "config.yaml")
    part1, part2, channels = read_data(config)

    hydrology = config.get('hydrology', {}) or {}
    results = calculate_hydrology_table(
        part1, part2,
        a=hydrology.get('filtration_coefficient', AVERAGE_A),
        days=hydrology.get('days_in_decade', DAYS_IN_DECADE),
        return_volume=hydrology.get('return_volume', RETURN_VOLUME),
        n_jobs=args.n_jobs,
        progress=True
    )

    if channels is not None:
        channels = derive_channel_table(channels)
        logger.info("Updated %d channel records", len(channels))

    output = config.get('output', {}) or {}
    output_dir = Path(output.get('directory', 'results')) / args.env
    process_outputs(results, channels, output_dir, args)

    logger.info("Calculation completed")


def process_outputs(results, channels, output_dir, args):
    """Process and save outputs based on arguments"""

    output_dir.mkdir(parents=True, exist_ok=True)

    if args.plot:
        plot_dir = output_dir / 'figures'
        generate_plots(results, plot_dir)
        logger.info("Plots saved to %s", plot_dir)

    if args.check:
        issues = check_results(results)
        if channels is not None:
            issues = pd.concat([issues, check_channels(channels)], ignore_index=True)
        alert(issues)
        check_file = output_dir / 'issues.csv'
        issues.to_csv(check_file, index=False)
        logger.info("Diagnostic report saved to %s", check_file)

    if args.save:
        results_file = output_dir / 'hydrology_table.csv'
        results.to_dataframe().to_csv(results_file)
        if channels is not None:
            channels.to_csv(output_dir / 'channels.csv', index=False)
        logger.info("Results saved to %s", output_dir)

    summary_file = output_dir / 'summary.txt'
    write_summary(results, summary_file, channels)


if __name__ == "__main__":
    main()
