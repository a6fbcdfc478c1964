"""
Basic Stand Analysis Example

Builds a small mixed-conifer cruise in code and prints stand metrics,
species composition, sampling statistics and a stand table.

Usage:
    python examples/basic_analysis.py
"""
import random

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from forestinv import (
    Analyzer,
    ForestInventory,
    InsufficientDataError,
    Plot,
    Species,
    Tree,
    TreeStatus,
    get_volume_equation,
    setup_logging,
)

console = Console()

SPECIES = [
    Species("DF", "Douglas Fir"),
    Species("WH", "Western Hemlock"),
    Species("RC", "Western Redcedar"),
    Species("RA", "Red Alder"),
]

# Fixed-radius 1/10 acre plots
PLOT_SIZE_ACRES = 0.1


def build_inventory(num_plots=8, seed=42):
    """Generate a reproducible sample inventory."""
    rng = random.Random(seed)
    plots = []
    for plot_id in range(1, num_plots + 1):
        trees = []
        for tree_id in range(1, rng.randint(6, 14) + 1):
            species = rng.choices(SPECIES, weights=[5, 3, 2, 1])[0]
            dbh = round(rng.uniform(3.0, 28.0), 1)
            # Height is measured on roughly three trees in four
            height = max(round(4.5 + 3.2 * dbh + rng.gauss(0, 6)), 10) if rng.random() < 0.75 else None
            status = TreeStatus.DEAD if rng.random() < 0.08 else TreeStatus.LIVE
            trees.append(Tree(
                plot_id=plot_id,
                tree_id=tree_id,
                species=species,
                dbh=dbh,
                height=height,
                status=status,
                volume_equation=get_volume_equation(species.code),
            ))
        plots.append(Plot(plot_id=plot_id, size_acres=PLOT_SIZE_ACRES, trees=trees))
    return ForestInventory(name="Demo Mixed Conifer", plots=plots, total_acres=120.0)


def show_stand_metrics(analyzer, inventory):
    metrics = analyzer.stand_metrics(inventory)

    table = Table(title=f"Stand Metrics: {inventory.name}")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Plots", str(inventory.num_plots))
    table.add_row("Live trees measured", str(inventory.num_live_trees))
    table.add_row("Trees per acre", f"{metrics.total_tpa:.1f}")
    table.add_row("Basal area (sq ft/ac)", f"{metrics.total_basal_area:.1f}")
    table.add_row("Volume (cu ft/ac)", f"{metrics.total_volume_cuft:.0f}")
    table.add_row("Volume (bd ft/ac)", f"{metrics.total_volume_bdft:.0f}")
    table.add_row("QMD (in)", f"{metrics.quadratic_mean_diameter:.2f}")
    console.print(table)

    comp = Table(title="Species Composition")
    comp.add_column("Species")
    comp.add_column("TPA", justify="right")
    comp.add_column("BA", justify="right")
    comp.add_column("% BA", justify="right")
    for entry in metrics.species_composition:
        comp.add_row(
            str(entry.species),
            f"{entry.tpa:.1f}",
            f"{entry.basal_area:.1f}",
            f"{entry.percent_of_total:.1f}",
        )
    console.print(comp)
    console.print()


def show_sampling_statistics(analyzer, inventory):
    try:
        stats = analyzer.sampling_statistics(inventory)
    except InsufficientDataError as e:
        console.print(f"[yellow]{e}[/yellow]")
        return

    table = Table(title=f"Sampling Statistics ({stats.tpa.confidence_level:.0%} confidence)")
    table.add_column("Metric", style="bold")
    table.add_column("Mean", justify="right")
    table.add_column("Std. error", justify="right")
    table.add_column("Interval", justify="right")
    table.add_column("SE %", justify="right")
    for name, ci in stats.items():
        table.add_row(
            name,
            f"{ci.mean:.1f}",
            f"{ci.std_error:.2f}",
            f"{ci.lower:.1f} - {ci.upper:.1f}",
            f"{ci.sampling_error_percent:.1f}",
        )
    console.print(table)
    console.print()


def show_stand_table(analyzer, inventory):
    dist = analyzer.diameter_distribution(inventory, include_empty=True)

    table = Table(title=f"Stand Table ({dist.class_width:g}\" classes)")
    table.add_column("Class", justify="center")
    table.add_column("Trees", justify="right")
    table.add_column("TPA", justify="right")
    table.add_column("BA", justify="right")
    for cls in dist.classes:
        table.add_row(
            f"{cls.lower_bound:g}-{cls.upper_bound:g}",
            str(cls.tree_count),
            f"{cls.tpa:.1f}",
            f"{cls.basal_area:.1f}",
        )
    console.print(table)


def main():
    setup_logging("WARNING")

    console.print()
    console.rule("[bold blue]forestinv Stand Analysis[/bold blue]")
    console.print()

    inventory = build_inventory()
    analyzer = Analyzer.from_config()

    console.print(Panel(f"[bold]{inventory.name}[/bold] - {inventory.total_acres:g} acres"))
    show_stand_metrics(analyzer, inventory)
    show_sampling_statistics(analyzer, inventory)
    show_stand_table(analyzer, inventory)


if __name__ == "__main__":
    main()
