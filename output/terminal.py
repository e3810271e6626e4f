"""Terminal output using Rich library."""
from datetime import datetime
from rich.console import Console
from rich.table import Table
from rich.text import Text
from aggregator import format_benchmark, total_benchmark, total_power, total_price
from display_names import component_display_name, discount_badge, format_vnd
from models import PricedItem
from taxonomy import organize_in_order


def render_products_table(items: list[PricedItem]) -> str:
    """Render normalized products as a Rich table. Returns string representation."""
    console = Console(record=True, width=160)

    if not items:
        console.print("[bold red]No products to show.[/bold red]")
        return console.export_text()

    now = datetime.now().strftime("%Y-%m-%d %H:%M")
    discounted = [i for i in items if i.is_discounted]
    console.print(f"\n[bold]Products  {now}    Total: {len(items)}    Discounted: {len(discounted)}[/bold]\n")

    table = Table(show_header=True, header_style="bold cyan", show_lines=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("Product", width=40)
    table.add_column("Categories", width=20)
    table.add_column("Price", justify="right", width=14)
    table.add_column("Original", justify="right", width=14)
    table.add_column("Discount", justify="right", width=11)
    table.add_column("Type", width=10)
    table.add_column("Source", width=9)

    for i, item in enumerate(items, 1):
        badge = discount_badge(item)
        table.add_row(
            str(i),
            item.name or str(item.id or "—"),
            ", ".join(item.categories or []) or "—",
            format_vnd(item.price),
            format_vnd(item.original_price) if item.is_discounted else "—",
            Text(badge, style="green") if badge else "—",
            item.discount_type if item.is_discounted else "—",
            item.discount_source if item.is_discounted else "—",
        )

    console.print(table)
    return console.export_text()


def render_configurations_table(configs: list[dict], language: str = "vi") -> str:
    """Render one table per generated build plus a summary line each."""
    console = Console(record=True, width=160)

    if not configs:
        console.print("[bold red]No configurations received.[/bold red]")
        return console.export_text()

    for n, config in enumerate(configs, 1):
        table = Table(
            title=f"Cấu hình #{n}" if language == "vi" else f"Configuration #{n}",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Component", width=18)
        table.add_column("Name", width=60)
        table.add_column("Price", justify="right", width=14)
        table.add_column("TDP", justify="right", width=6)
        table.add_column("Bench", justify="right", width=8)

        for key, component in organize_in_order(config).items():
            table.add_row(
                component_display_name(key, language),
                component.name or "—",
                format_vnd(component.price),
                f"{component.tdp}W" if component.tdp else "—",
                str(component.benchmark_score) if component.benchmark_score else "—",
            )

        console.print(table)
        console.print(
            f"[bold]Total:[/bold] {format_vnd(total_price(config))}    "
            f"[bold]Power:[/bold] {total_power(config)}W    "
            f"[bold]Benchmark:[/bold] {format_benchmark(total_benchmark(config))}\n"
        )

    return console.export_text()
