"""HTML report of generated configurations with sortable table and dark theme."""

import os
import glob
from datetime import datetime

from jinja2 import Template

from aggregator import format_benchmark, total_benchmark, total_power, total_price
from display_names import component_display_name, format_vnd
from taxonomy import organize_in_order


HTML_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="{{ language }}">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>PC Build Report - {{ generated_at }}</title>
<style>
  * { margin: 0; padding: 0; box-sizing: border-box; }
  body {
    background: #1a1a2e;
    color: #e0e0e0;
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    padding: 20px;
  }
  h1 { color: #00d4ff; margin-bottom: 10px; }
  .summary {
    background: #16213e;
    border: 1px solid #0f3460;
    border-radius: 8px;
    padding: 15px 20px;
    margin-bottom: 20px;
    display: flex;
    gap: 30px;
    flex-wrap: wrap;
  }
  .summary .stat { display: flex; flex-direction: column; }
  .summary .stat .label { font-size: 0.8em; color: #888; text-transform: uppercase; }
  .summary .stat .value { font-size: 1.3em; font-weight: bold; color: #00d4ff; }
  .meta { color: #666; font-size: 0.85em; margin-bottom: 15px; }
  table {
    width: 100%;
    border-collapse: collapse;
    background: #16213e;
    border-radius: 8px;
    overflow: hidden;
  }
  th {
    background: #0f3460;
    color: #00d4ff;
    padding: 10px 8px;
    text-align: left;
    cursor: pointer;
    user-select: none;
    white-space: nowrap;
  }
  th:hover { background: #1a4a8a; }
  th.sortable::after { content: ' \\2195'; font-size: 0.7em; opacity: 0.5; }
  td { padding: 8px; border-bottom: 1px solid #1a1a2e; vertical-align: top; }
  tr:hover { background: #1a2a4e; }
  tr.failed td { background: rgba(255, 82, 82, 0.15); }
  tr.saved td { background: rgba(0, 200, 83, 0.15); }
  ul.parts { list-style: none; }
  ul.parts .slot { color: #888; }
  .no-builds { text-align: center; padding: 40px; color: #666; font-size: 1.2em; }
</style>
</head>
<body>
<h1>PC Build Report</h1>
<div class="meta">Generated: {{ generated_at }} | Total builds: {{ builds|length }}</div>

{% if builds %}
<div class="summary">
  <div class="stat">
    <span class="label">Cheapest Build</span>
    <span class="value">{{ cheapest }}</span>
  </div>
  <div class="stat">
    <span class="label">Average Price</span>
    <span class="value">{{ average }}</span>
  </div>
  <div class="stat">
    <span class="label">Max Power</span>
    <span class="value">{{ max_power }}W</span>
  </div>
</div>

<table id="buildsTable">
<thead>
<tr>
  <th class="sortable" onclick="sortTable(0)">#</th>
  <th>Components</th>
  <th class="sortable" onclick="sortTable(2)">Price</th>
  <th class="sortable" onclick="sortTable(3)">Power</th>
  <th class="sortable" onclick="sortTable(4)">Benchmark</th>
  <th class="sortable" onclick="sortTable(5)">Status</th>
</tr>
</thead>
<tbody>
{% for build in builds %}
<tr class="{{ build.row_class }}">
  <td>{{ loop.index }}</td>
  <td><ul class="parts">
  {% for part in build.parts %}
    <li><span class="slot">{{ part.slot }}:</span> {{ part.name }} ({{ part.price }})</li>
  {% endfor %}
  </ul></td>
  <td>{{ build.price }}</td>
  <td>{{ build.power }}</td>
  <td>{{ build.benchmark }}</td>
  <td>{{ build.status }}</td>
</tr>
{% endfor %}
</tbody>
</table>
{% else %}
<div class="no-builds">No configurations received.</div>
{% endif %}

<script>
function sortTable(colIndex) {
  var table = document.getElementById("buildsTable");
  var tbody = table.querySelector("tbody");
  var rows = Array.from(tbody.querySelectorAll("tr"));
  var ascending = table.dataset.sortCol === String(colIndex)
    ? table.dataset.sortDir !== "asc"
    : true;

  rows.sort(function(a, b) {
    var aText = a.cells[colIndex].textContent.trim().replace(/[.đW]/g, "");
    var bText = b.cells[colIndex].textContent.trim().replace(/[.đW]/g, "");
    var aNum = parseFloat(aText);
    var bNum = parseFloat(bText);
    if (!isNaN(aNum) && !isNaN(bNum)) {
      return ascending ? aNum - bNum : bNum - aNum;
    }
    return ascending
      ? aText.localeCompare(bText)
      : bText.localeCompare(aText);
  });

  rows.forEach(function(row) { tbody.appendChild(row); });
  table.dataset.sortCol = String(colIndex);
  table.dataset.sortDir = ascending ? "asc" : "desc";
}
</script>
</body>
</html>
""")


INDEX_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>PC Build Reports Index</title>
<style>
  body {
    background: #1a1a2e;
    color: #e0e0e0;
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    padding: 20px;
  }
  h1 { color: #00d4ff; margin-bottom: 20px; }
  ul { list-style: none; padding: 0; }
  li { padding: 8px 0; border-bottom: 1px solid #0f3460; }
  a { color: #00d4ff; text-decoration: none; font-size: 1.1em; }
  a:hover { text-decoration: underline; }
</style>
</head>
<body>
<h1>PC Build Reports</h1>
<ul>
{% for report in reports %}
  <li><a href="{{ report }}">{{ report }}</a></li>
{% endfor %}
</ul>
{% if not reports %}
<p>No reports found.</p>
{% endif %}
</body>
</html>
""")


def _build_rows(configs: list[dict], statuses: dict[int, str], language: str) -> list[dict]:
    """Flatten each configuration into the values one table row shows."""
    rows = []
    for index, config in enumerate(configs):
        status = statuses.get(index, "")
        rows.append({
            "parts": [
                {
                    "slot": component_display_name(key, language),
                    "name": component.name or "—",
                    "price": format_vnd(component.price),
                }
                for key, component in organize_in_order(config).items()
            ],
            "price": format_vnd(total_price(config)),
            "power": f"{total_power(config)}W",
            "benchmark": format_benchmark(total_benchmark(config)),
            "status": status or "—",
            "row_class": status if status in ("saved", "failed") else "",
        })
    return rows


def render_html_report(
    configs: list[dict],
    output_dir: str = "results",
    statuses: dict[int, str] | None = None,
    language: str = "vi",
) -> str:
    """Render configurations to a timestamped HTML report file.

    Args:
        configs: Parsed configurations (taxonomy key -> BuildComponent).
        output_dir: Directory to write the HTML file into.
        statuses: Optional save status per configuration index.
        language: Display language for component slot names.

    Returns:
        Path to the generated HTML file.
    """
    os.makedirs(output_dir, exist_ok=True)

    cheapest = "N/A"
    average = "N/A"
    max_power = 0
    if configs:
        prices = [total_price(c) for c in configs]
        cheapest = format_vnd(min(prices))
        average = format_vnd(sum(prices) / len(prices))
        max_power = max(total_power(c) for c in configs)

    now = datetime.now()
    generated_at = now.strftime("%Y-%m-%d %H:%M:%S")
    filename = f"builds_{now.strftime('%Y-%m-%d_%H%M')}.html"
    filepath = os.path.join(output_dir, filename)

    html = HTML_TEMPLATE.render(
        builds=_build_rows(configs, statuses or {}, language),
        generated_at=generated_at,
        cheapest=cheapest,
        average=average,
        max_power=max_power,
        language=language,
    )

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(html)

    return filepath


def update_index(output_dir: str = "results") -> str:
    """Generate an index.html listing all report files in the output directory.

    Args:
        output_dir: Directory containing report HTML files.

    Returns:
        Path to the generated index.html.
    """
    pattern = os.path.join(output_dir, "builds_*.html")
    report_files = sorted(
        [os.path.basename(f) for f in glob.glob(pattern)],
        reverse=True,
    )

    html = INDEX_TEMPLATE.render(reports=report_files)

    index_path = os.path.join(output_dir, "index.html")
    with open(index_path, "w", encoding="utf-8") as f:
        f.write(html)

    return index_path
