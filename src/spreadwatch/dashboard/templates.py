"""
HTML rendering for the spread dashboard.

Values are rounded only here; the view carries raw floats.
"""

from html import escape
from string import Template

import orjson

from spreadwatch.core.types import StatSummary
from spreadwatch.dashboard.monitor import DirectionView, SpreadView
from spreadwatch.strategy.spread import spread_a, spread_b
from spreadwatch.utils.math import format_percent, format_price, format_signed
from spreadwatch.utils.time import format_timestamp_ms


def _stats_row(view: DirectionView) -> str:
    stats: StatSummary | None = view.stats
    if stats is None:
        cells = '<td colspan="4" class="muted">No data in window yet</td>'
    else:
        cells = (
            f"<td>{format_signed(stats.average)}</td>"
            f"<td>{format_signed(stats.max)}</td>"
            f"<td>{format_signed(stats.min)}</td>"
            f"<td>{stats.count}</td>"
        )
    return f"<tr><th>{view.direction.value} · {escape(view.direction.label)}</th>{cells}</tr>"


def _spread_card(view: DirectionView, formula: str) -> str:
    css = "pos" if (view.current or 0) > 0 else "neg" if (view.current or 0) < 0 else ""
    return (
        '<div class="card">'
        f'<div class="card-label">Spread {view.direction.value}: {escape(formula)}</div>'
        f'<div class="card-value {css}">{format_signed(view.current)}</div>'
        f'<div class="card-sub">{format_percent(view.current_pct)}</div>'
        "</div>"
    )


def _chart_data(view: SpreadView) -> str:
    data = {
        "labels": [format_timestamp_ms(obs.timestamp) for obs in view.history],
        "spreadA": [spread_a(obs) for obs in view.history],
        "spreadB": [spread_b(obs) for obs in view.history],
    }
    # Escape "</" so the payload cannot terminate the script element
    return orjson.dumps(data).decode().replace("</", "<\\/")


def _nav(instruments: list[str], current: str) -> str:
    links = []
    for name in instruments:
        css = "active" if name == current else ""
        links.append(f'<a class="{css}" href="/{escape(name)}">{escape(name)}</a>')
    return "".join(links)


def render_dashboard(
    view: SpreadView,
    instruments: list[str],
    refresh_seconds: float,
) -> str:
    """
    Render the auto-refreshing dashboard page.

    Args:
        view: Spread view to render.
        instruments: Instruments for the navigation bar.
        refresh_seconds: Browser reload period.

    Returns:
        Complete HTML document.
    """
    latest = view.latest
    return DASHBOARD_TEMPLATE.substitute(
        instrument=escape(view.instrument),
        nav=_nav(instruments, view.instrument),
        primary_price=format_price(latest.primary_price if latest else None),
        counter_bid=format_price(latest.counter_bid if latest else None),
        counter_ask=format_price(latest.counter_ask if latest else None),
        spread_a_card=_spread_card(view.spread_a, "primary − counter bid"),
        spread_b_card=_spread_card(view.spread_b, "counter ask − primary"),
        window_minutes=f"{view.window_ms / 60_000:g}",
        stats_a=_stats_row(view.spread_a),
        stats_b=_stats_row(view.spread_b),
        chart_data=_chart_data(view),
        updated=format_timestamp_ms(view.generated_at, include_date=True),
        refresh_ms=int(refresh_seconds * 1000),
    )


DASHBOARD_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>$instrument spread monitor</title>
    <script src="https://cdn.jsdelivr.net/npm/chart.js@4"></script>
    <style>
        :root {
            --bg: #09090b; --bg2: #18181b; --border: #3f3f46;
            --text: #fafafa; --text2: #a1a1aa; --accent: #3b82f6;
            --green: #22c55e; --red: #ef4444;
        }
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body { font-family: -apple-system, BlinkMacSystemFont, "Inter", sans-serif; background: var(--bg); color: var(--text); }
        .app { max-width: 960px; margin: 0 auto; padding: 32px 24px; }
        .header { display: flex; justify-content: space-between; align-items: center; margin-bottom: 24px; }
        .header h1 { font-size: 20px; font-weight: 600; }
        .nav a { color: var(--text2); text-decoration: none; margin-left: 8px; padding: 6px 12px; border-radius: 6px; font-size: 13px; }
        .nav a.active { background: var(--accent); color: white; }
        .grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 12px; margin-bottom: 16px; }
        .card { background: var(--bg2); border: 1px solid var(--border); border-radius: 10px; padding: 16px; }
        .card-label { font-size: 11px; color: var(--text2); text-transform: uppercase; letter-spacing: 0.05em; margin-bottom: 6px; }
        .card-value { font-size: 24px; font-weight: 600; font-variant-numeric: tabular-nums; }
        .card-sub { font-size: 12px; color: var(--text2); margin-top: 4px; }
        .pos { color: var(--green); }
        .neg { color: var(--red); }
        table { width: 100%; border-collapse: collapse; margin: 16px 0; font-size: 13px; font-variant-numeric: tabular-nums; }
        th, td { padding: 10px 12px; border-bottom: 1px solid var(--border); text-align: right; }
        th:first-child { text-align: left; font-weight: 500; }
        thead th { color: var(--text2); font-size: 11px; text-transform: uppercase; }
        .muted { color: var(--text2); text-align: center; }
        .footer { font-size: 12px; color: var(--text2); margin-top: 16px; }
        @media (max-width: 700px) { .grid { grid-template-columns: 1fr; } }
    </style>
</head>
<body>
<div class="app">
    <div class="header">
        <h1>$instrument cross-venue spread</h1>
        <div class="nav">$nav</div>
    </div>

    <div class="grid">
        <div class="card">
            <div class="card-label">Primary last trade</div>
            <div class="card-value">$primary_price</div>
        </div>
        <div class="card">
            <div class="card-label">Counter bid</div>
            <div class="card-value">$counter_bid</div>
        </div>
        <div class="card">
            <div class="card-label">Counter ask</div>
            <div class="card-value">$counter_ask</div>
        </div>
    </div>

    <div class="grid">
        $spread_a_card
        $spread_b_card
    </div>

    <table>
        <thead>
            <tr><th>Last $window_minutes min</th><th>Average</th><th>Max</th><th>Min</th><th>Samples</th></tr>
        </thead>
        <tbody>
            $stats_a
            $stats_b
        </tbody>
    </table>

    <div class="card"><canvas id="chart" height="120"></canvas></div>

    <div class="footer">Updated $updated UTC</div>
</div>
<script>
    const data = $chart_data;
    if (window.Chart && data.labels.length) {
        new Chart(document.getElementById("chart"), {
            type: "line",
            data: {
                labels: data.labels,
                datasets: [
                    { label: "Spread A", data: data.spreadA, borderColor: "#22c55e", spanGaps: true },
                    { label: "Spread B", data: data.spreadB, borderColor: "#3b82f6", spanGaps: true },
                ],
            },
            options: { animation: false, plugins: { legend: { labels: { color: "#a1a1aa" } } } },
        });
    }
    setTimeout(() => location.reload(), $refresh_ms);
</script>
</body>
</html>""")
