from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns

from icwl.data_structures import CalculatedTableResults

def generate_plots(results: CalculatedTableResults, output_dir: Path) -> None:
    """
    Plot the intake flow and volume and the seepage of each reach per decade.

    Args:
        results (CalculatedTableResults): Hydrology table results
        output_dir (Path): Directory to save the output figures

    Returns:
        None (saves PNG and PDF files for each plot)
    """
    custom_params = {"axes.spines.top": False, "axes.spines.right": False}
    sns.set_theme(context='notebook', style='ticks', palette='colorblind',
                  font='serif', font_scale=0.8, rc=custom_params)

    lw = 0.7

    fig_width_cm = 18
    fig_height_cm = 12
    fig_width_inch = fig_width_cm / 2.54
    fig_height_inch = fig_height_cm / 2.54

    output_dir.mkdir(parents=True, exist_ok=True)

    table = results.to_dataframe()
    labels = [f"{month} {decade}" for month, decade in table.index]
    positions = range(len(labels))

    # Intake flow and volume, unset decades are left as gaps
    fig, ax1 = plt.subplots(figsize=(fig_width_inch, fig_height_inch))
    ax1.bar(positions, table['q_g'], color='C0', alpha=0.8, label=r'$Q_g$')
    ax1.set_ylabel("Intake flow [L/s]")
    ax1.set_xticks(list(positions))
    ax1.set_xticklabels(labels, rotation=90)

    ax2 = ax1.twinx()
    ax2.plot(positions, table['w_g'], color='C3', marker='o', linewidth=lw, label=r'$W_g$')
    ax2.set_ylabel(r"Intake volume [million $\mathrm{m}^3$]")

    lines, line_labels = ax1.get_legend_handles_labels()
    lines2, line_labels2 = ax2.get_legend_handles_labels()
    ax2.legend(lines + lines2, line_labels + line_labels2, loc='upper center',
               bbox_to_anchor=(0.5, 1.12), ncol=2, frameon=False)
    plt.tight_layout()

    base_filename = output_dir / 'intake'
    plt.savefig(f"{base_filename}.png", format='png', dpi=300, bbox_inches='tight')
    plt.savefig(f"{base_filename}.pdf", format='pdf', dpi=300, bbox_inches='tight')
    plt.close(fig)

    loss_columns = [c for c in table.columns if c.startswith('segment_') and c.endswith('_s')]
    fig, ax = plt.subplots(figsize=(fig_width_inch, fig_height_inch))
    for column in loss_columns:
        number = column.split('_')[1]
        ax.plot(positions, table[column], marker='.', linewidth=lw, label=f"Segment {number}")
    ax.set_ylabel("Seepage loss S [L/s]")
    ax.set_xticks(list(positions))
    ax.set_xticklabels(labels, rotation=90)
    ax.legend(loc='upper center', bbox_to_anchor=(0.5, 1.12), ncol=len(loss_columns), frameon=False)
    plt.tight_layout()

    base_filename = output_dir / 'seepage'
    plt.savefig(f"{base_filename}.png", format='png', dpi=300, bbox_inches='tight')
    plt.savefig(f"{base_filename}.pdf", format='pdf', dpi=300, bbox_inches='tight')
    plt.close(fig)
