"""Matplotlib charts of the emissions breakdown"""

import matplotlib.pyplot as plt

from .engine import TOP_N

BRAND_COLORS = {
    "primary": "#0891b2",      # Cyan
    "secondary": "#0e7490",    # Deep cyan
    "accent": "#22d3ee",       # Light cyan
    "text": "#1a1a1a",         # Dark text
    "muted": "#666666",        # Muted grey
    "light": "#ecfeff",        # Pale cyan
    "success": "#00aa66",      # Green
    "error": "#cc3333"         # Red
}

CHART_COLORS = ["#00c9ff", "#92fe9d", "#ffc658", "#ff8042", "#8dd1e1", "#d0ed57", "#a4de6c", "#d88884"]


def _empty(ax, message):
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=11, color=BRAND_COLORS["muted"])
    ax.set_axis_off()


def top_emitters_pie(result, n=TOP_N, per_ton=False, title=None):
    """Pie chart of the n largest non-zero contributors"""
    entries = [e for e in result.top(n) if e.emission > 0]
    fig, ax = plt.subplots(figsize=(6, 4.5))
    fig.patch.set_facecolor("none")

    if title is None:
        title = f"Per-tonne emissions (top {n})" if per_ton else f"Total emissions (top {n})"
    ax.set_title(title, fontsize=13, fontweight="bold", color=BRAND_COLORS["primary"], pad=12)

    if not entries:
        _empty(ax, "No emissions to show")
        return fig

    values = [e.per_ton if per_ton else e.emission for e in entries]
    unit = "kg CO₂/t" if per_ton else "t CO₂"
    ax.pie(
        values,
        labels=[e.label for e in entries],
        colors=[CHART_COLORS[i % len(CHART_COLORS)] for i in range(len(entries))],
        autopct=lambda pct: f"{pct:.1f}%" if pct >= 3 else "",
        startangle=90,
        counterclock=False,
        wedgeprops=dict(edgecolor="white", linewidth=1.5),
        textprops=dict(fontsize=9),
    )
    ax.axis("equal")
    ax.text(0.5, -0.08, f"Sum shown: {sum(values):,.2f} {unit}", transform=ax.transAxes,
            ha="center", fontsize=9, color=BRAND_COLORS["muted"])
    fig.tight_layout()
    return fig


def ranked_bar_chart(result, per_ton=False):
    """Horizontal bars for every non-zero contributor, largest on top"""
    entries = [e for e in result.ranked() if e.emission > 0]
    fig, ax = plt.subplots(figsize=(8, max(2.5, 0.45 * len(entries) + 1.2)))
    fig.patch.set_facecolor("none")

    if not entries:
        _empty(ax, "No emissions to show")
        return fig

    entries = list(reversed(entries))
    values = [e.per_ton if per_ton else e.emission for e in entries]
    bars = ax.barh([e.label for e in entries], values, color=BRAND_COLORS["primary"], alpha=0.85)
    for bar, value in zip(bars, values):
        ax.annotate(f"{value:,.2f}", xy=(bar.get_width(), bar.get_y() + bar.get_height() / 2),
                    xytext=(4, 0), textcoords="offset points", va="center", fontsize=8)

    ax.set_xlabel("kg CO₂ per tonne of steel" if per_ton else "t CO₂ per year", fontsize=10, fontweight="bold")
    ax.set_title("Emissions by material", fontsize=13, fontweight="bold", color=BRAND_COLORS["primary"], pad=12)
    ax.grid(True, axis="x", alpha=0.3, linestyle="--", linewidth=0.5)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.margins(x=0.15)
    fig.tight_layout()
    return fig
