# services/weight-balance-service/src/apps/core/services/chart_service.py
"""
Chart Service

Renders the C.O.G. envelope plot and the loading graph of a computed sheet
as PNG images.
"""

import base64
import io
import logging
from typing import Dict

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt  # noqa: E402

from ..aircraft import AircraftType, AxisTicks  # noqa: E402
from .calculator_service import SheetResult  # noqa: E402
from .envelope_service import EnvelopeCheck, EnvelopeStatus  # noqa: E402

logger = logging.getLogger(__name__)

PNG_DATA_URI_PREFIX = 'data:image/png;base64,'

STATUS_COLORS = {
    EnvelopeStatus.WITHIN: '#2E7D32',
    EnvelopeStatus.MARGINAL: '#EF6C00',
    EnvelopeStatus.OUT: '#C62828',
}
RING_COLORS = ['#4472C4', '#70AD47']
STATION_COLORS = ['#4472C4', '#ED7D31', '#A5A5A5', '#FFC000', '#5B9BD5', '#70AD47']


def _apply_ticks(ax, x: AxisTicks, y: AxisTicks) -> None:
    ax.set_xticks(x.ticks)
    ax.set_xticklabels([x.label(t) for t in x.ticks], fontsize=7)
    ax.set_yticks(y.ticks)
    ax.set_yticklabels([y.label(t) for t in y.ticks], fontsize=7)


def _to_png(fig) -> bytes:
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format='png', bbox_inches='tight', dpi=100)
    finally:
        plt.close(fig)
    return buffer.getvalue()


def _plot_position(ax, point, check: EnvelopeCheck, marker: str, label: str, x_min, y_min) -> None:
    color = STATUS_COLORS[check.status]
    ax.plot([x_min, point.moment], [point.weight, point.weight],
            linestyle='--', linewidth=0.8, color=color)
    ax.plot([point.moment, point.moment], [y_min, point.weight],
            linestyle='--', linewidth=0.8, color=color)
    ax.scatter([point.moment], [point.weight], marker=marker, s=60, color=color,
               zorder=5, label=f"{label} ({check.label})")


def render_envelope_chart(result: SheetResult) -> bytes:
    """C.O.G. envelope with the takeoff (circle) and landing (square) positions."""
    config = result.config
    envelope = config.envelope
    units = config.unit_labels

    fig, ax = plt.subplots(figsize=(6, 5))

    for index, ring in enumerate(envelope.rings):
        xs = [p.moment for p in ring.points]
        ys = [p.weight for p in ring.points]
        color = RING_COLORS[index % len(RING_COLORS)]
        ax.plot(xs, ys, linestyle='-', linewidth=1.5, color=color)
        ax.fill(xs, ys, alpha=0.1, color=color)
        if ring.label_anchor is not None:
            ax.text(ring.label_anchor.moment, ring.label_anchor.weight,
                    f"{ring.name.upper()} CATEGORY", fontsize=8, ha='center', color=color)

    if config.aircraft_type == AircraftType.C172:
        weights = [envelope.min_weight, envelope.max_weight]
        for arm, name in ((envelope.forward_limit, 'FWD'), (envelope.aft_limit, 'AFT')):
            moments = [w * arm / config.scale_factor for w in weights]
            ax.plot(moments, weights, linestyle=':', linewidth=1, color='#7F7F7F')
            ax.text(moments[-1], weights[-1], f" {name} {arm}", fontsize=7, color='#7F7F7F')

    x_min, y_min = envelope.moment_min, envelope.min_weight
    if result.total_weight > 0:
        _plot_position(ax, result.takeoff_point, result.takeoff_envelope, 'o', 'Takeoff', x_min, y_min)
    if result.landing_weight > 0:
        _plot_position(ax, result.landing_point, result.landing_envelope, 's', 'Landing', x_min, y_min)

    if not (result.takeoff_envelope.within_envelope and result.landing_envelope.within_envelope):
        ax.text(0.5, 0.95, 'OUT OF LIMIT', transform=ax.transAxes, ha='center', va='top',
                fontsize=12, fontweight='bold', color=STATUS_COLORS[EnvelopeStatus.OUT])

    _apply_ticks(ax, config.axes.envelope_x, config.axes.envelope_y)
    ax.set_xlim(envelope.moment_min, envelope.moment_max)
    ax.set_ylim(envelope.min_weight, envelope.weight_axis_max)
    ax.set_xlabel(f"LOADED AIRCRAFT MOMENT ({units.moment})", fontsize=8)
    ax.set_ylabel(f"LOADED AIRCRAFT WEIGHT ({units.weight})", fontsize=8)
    ax.set_title(f"{config.aircraft_type.value} CENTER OF GRAVITY ENVELOPE", fontsize=10)
    ax.grid(True, linestyle='--', linewidth=0.5)
    if result.total_weight > 0:
        ax.legend(loc='lower right', fontsize=7)

    return _to_png(fig)


def render_loading_graph(result: SheetResult) -> bytes:
    """Per-station loading lines with the current station loads."""
    config = result.config
    units = config.unit_labels
    graph = config.loading_graph

    fig, ax = plt.subplots(figsize=(6, 5))

    specs = [spec for spec in config.stations if spec.loading_graph_max is not None]
    for index, spec in enumerate(specs):
        color = STATION_COLORS[index % len(STATION_COLORS)]
        arm = float(spec.arm)
        top = float(spec.loading_graph_max)
        ax.plot([0, arm * top / config.scale_factor], [0, top],
                linewidth=1.5, color=color, label=spec.description)

        station = result.station(spec.key)
        if station is not None and station.weight > 0:
            ax.scatter([float(station.moment)], [float(station.weight)], s=40,
                       color=color, edgecolors='black', zorder=5)

    _apply_ticks(ax, config.axes.loading_x, config.axes.loading_y)
    ax.set_xlim(0, graph.max_moment)
    ax.set_ylim(0, graph.max_weight)
    ax.set_xlabel(f"LOAD MOMENT ({units.moment})", fontsize=8)
    ax.set_ylabel(f"LOAD WEIGHT ({units.weight})", fontsize=8)
    ax.set_title(f"{config.aircraft_type.value} LOADING GRAPH", fontsize=10)
    ax.grid(True, linestyle='--', linewidth=0.5)
    ax.legend(loc='upper left', fontsize=7)

    return _to_png(fig)


def to_data_uri(png: bytes) -> str:
    return PNG_DATA_URI_PREFIX + base64.b64encode(png).decode('ascii')


def render_charts(result: SheetResult) -> Dict[str, str]:
    """Both charts as PNG data URIs, in PDF attachment order."""
    return {
        'envelope': to_data_uri(render_envelope_chart(result)),
        'loading': to_data_uri(render_loading_graph(result)),
    }
