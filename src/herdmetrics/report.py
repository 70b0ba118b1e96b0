"""
Herd and animal performance reports.

Reports are recomputed from a HerdSnapshot on every call; nothing is cached
between calls. Each herd KPI comes back as a DerivedMetric whose status
tells measured values apart from sentinels, estimates and placeholders.
"""

from datetime import date
from typing import TypedDict

from herdmetrics.core.config import settings
from herdmetrics.core.units import format_gain_rate, format_weight
from herdmetrics.data.records import HerdSnapshot
from herdmetrics.metrics import breeding, feed, growth, health, herd
from herdmetrics.metrics.scoring import score_metric
from herdmetrics.metrics.types import DerivedMetric, Direction, MetricStatus

HIGHER = Direction.HIGHER_IS_BETTER
LOWER = Direction.LOWER_IS_BETTER

# metric name -> (title, unit, direction, mortality scoring)
METRIC_DEFINITIONS = {
    "dlwg": ("Daily Live Weight Gain", "kg/day", HIGHER, False),
    "wgm": ("Weight Gain Metric", "ratio", HIGHER, False),
    "adg": ("Average Daily Gain (calves)", "kg/day", HIGHER, False),
    "fcr": ("Feed Conversion Ratio", "kg/kg", LOWER, False),
    "herd_weight_gain": ("Herd Weight Gain", "kg", HIGHER, False),
    "conception_rate": ("Conception Rate", "%", HIGHER, False),
    "in_calf_42": ("42-Day In-Calf Rate", "%", HIGHER, False),
    "in_calf_100": ("100-Day In-Calf Rate", "%", HIGHER, False),
    "calving_interval": ("Calving Interval", "days", LOWER, False),
    "calf_crop": ("Calf Crop %", "%", HIGHER, False),
    "weaning_rate": ("Weaning Rate", "%", HIGHER, False),
    "herd_mortality": ("Herd Mortality Rate", "%", LOWER, True),
    "calf_mortality": ("Calf Mortality Rate", "%", LOWER, True),
    "average_bcs": ("Average Body Condition", "score", HIGHER, False),
}

DEFAULT_TARGETS = {
    "dlwg": 0.8,
    "wgm": 1.0,
    "adg": 1.5,
    "fcr": 6.0,
    "conception_rate": 65.0,
    "in_calf_42": 60.0,
    "in_calf_100": 85.0,
    "calving_interval": 365.0,
    "calf_crop": 95.0,
    "weaning_rate": 90.0,
    "herd_mortality": 1.0,
    "calf_mortality": 3.0,
    "average_bcs": 3.0,
}


class AnimalReport(TypedDict):
    """Per-animal growth and feed metrics."""

    animal_id: str
    stock_type: str | None
    weigh_count: int
    total_gain_kg: float
    dlwg: float
    period_adg: float
    wgm: float
    fcr: float
    fcr_band: str
    fcr_from_weigh_records: float


def _metric(name: str, value: float, targets: dict[str, float], status: MetricStatus) -> DerivedMetric:
    _, unit, direction, mortality = METRIC_DEFINITIONS[name]
    return DerivedMetric(
        metric_name=name,
        value=value,
        unit=unit,
        target=targets[name],
        direction=direction,
        status=status,
        mortality=mortality,
    )


def _measured_if(has_data: bool) -> MetricStatus:
    return MetricStatus.MEASURED if has_data else MetricStatus.INSUFFICIENT


def _gain_status(is_estimate: bool, has_animals: bool) -> MetricStatus:
    if not has_animals:
        return MetricStatus.INSUFFICIENT
    return MetricStatus.ESTIMATED if is_estimate else MetricStatus.MEASURED


def build_herd_report(
    snapshot: HerdSnapshot,
    as_of: date,
    targets: dict[str, float] | None = None,
) -> list[DerivedMetric]:
    """
    Compute every herd KPI from a snapshot.

    Args:
        snapshot: Records to report on
        as_of: Reporting date (end of trailing windows, reference for ages)
        targets: Overrides for DEFAULT_TARGETS, keyed by metric name

    Returns:
        One DerivedMetric per entry in METRIC_DEFINITIONS, in that order
    """
    targets = {**DEFAULT_TARGETS, **(targets or {})}
    animals = snapshot.animals
    metrics: list[DerivedMetric] = []

    # Growth and feed
    dlwg = herd.herd_average_dlwg(animals, snapshot.weights, as_of)
    metrics.append(_metric("dlwg", dlwg, targets, _measured_if(dlwg != 0)))

    wgm = herd.herd_average_wgm(animals, snapshot.weights, as_of)
    metrics.append(_metric("wgm", wgm, targets, _measured_if(wgm != 0)))

    qualifying_calves = [c for c in snapshot.calves if growth.calf_gain_rate(c) is not None]
    adg = growth.average_daily_gain(snapshot.calves)
    metrics.append(_metric("adg", adg, targets, _measured_if(bool(qualifying_calves))))

    fcr = herd.herd_average_fcr(animals, snapshot.weights, snapshot.feed_intake, as_of)
    metrics.append(_metric("fcr", fcr, targets, _measured_if(fcr != 0)))

    gain = herd.herd_weight_gain(animals, snapshot.weights, as_of)
    window_days = growth.days_between(gain["window_start"], gain["window_end"])
    targets.setdefault("herd_weight_gain", len(animals) * targets["dlwg"] * window_days)
    metrics.append(
        _metric(
            "herd_weight_gain",
            gain["total_kg"],
            targets,
            _gain_status(gain["is_estimate"], bool(animals)),
        )
    )

    # Reproduction
    events = snapshot.breeding
    has_events = bool(events)
    metrics.append(_metric("conception_rate", breeding.conception_rate(events), targets, _measured_if(has_events)))
    metrics.append(_metric("in_calf_42", breeding.in_calf_rate_42(events), targets, _measured_if(has_events)))
    metrics.append(_metric("in_calf_100", breeding.in_calf_rate_100(events), targets, _measured_if(has_events)))

    calvings = sum(1 for e in events if e.actual_calving_date is not None)
    metrics.append(
        _metric(
            "calving_interval",
            breeding.calving_interval(events),
            targets,
            MetricStatus.MEASURED if calvings >= 2 else MetricStatus.DEFAULT,
        )
    )

    females = breeding.breeding_females(animals)
    metrics.append(
        _metric(
            "calf_crop",
            breeding.calf_crop_percentage(len(snapshot.calves), females),
            targets,
            _measured_if(females > 0),
        )
    )
    metrics.append(
        _metric("weaning_rate", breeding.weaning_rate(snapshot.calves), targets, _measured_if(bool(snapshot.calves)))
    )

    # Health
    metrics.append(
        _metric(
            "herd_mortality",
            health.mortality_rate(len(animals), snapshot.mortalities),
            targets,
            _measured_if(bool(animals)),
        )
    )
    metrics.append(
        _metric(
            "calf_mortality",
            health.calf_mortality_rate(snapshot.mortalities, animals, len(snapshot.calves), as_of),
            targets,
            _measured_if(bool(snapshot.calves)),
        )
    )

    has_bcs = any(health.parse_bcs(r.diagnosis) is not None for r in snapshot.health)
    metrics.append(
        _metric(
            "average_bcs",
            health.average_body_condition_score(snapshot.health),
            targets,
            MetricStatus.MEASURED if has_bcs else MetricStatus.DEFAULT,
        )
    )

    return metrics


def build_animal_report(snapshot: HerdSnapshot, animal_id: str, as_of: date) -> AnimalReport:
    """
    Compute growth and feed metrics for one animal.

    FCR uses the trailing settings.fcr_period_months window ending at ``as_of``.

    Raises:
        ValueError: If the animal is not on the roster
    """
    animal = snapshot.get_animal(animal_id)
    if animal is None:
        raise ValueError(f"No animal found matching '{animal_id}'")

    history = [w for w in snapshot.weights_for(animal_id) if w.observation_date <= as_of]
    start, end = growth.trailing_window(as_of, settings.fcr_period_months)
    fcr = feed.feed_conversion_ratio(animal_id, start, end, history, snapshot.feed_for(animal_id))

    return AnimalReport(
        animal_id=animal_id,
        stock_type=health.stock_type(animal.sex, animal.date_of_birth, as_of) if animal.date_of_birth else None,
        weigh_count=len(history),
        total_gain_kg=growth.total_weight_gain(history),
        dlwg=growth.daily_live_weight_gain(animal, history, as_of),
        period_adg=growth.period_average_daily_gain(history),
        wgm=growth.weight_gain_metric(animal, history, as_of),
        fcr=fcr,
        fcr_band=feed.fcr_band(fcr),
        fcr_from_weigh_records=feed.fcr_from_weight_records(history),
    )


# =============================================================================
# Formatting
# =============================================================================

STATUS_FLAGS = {
    MetricStatus.MEASURED: "",
    MetricStatus.INSUFFICIENT: "no data",
    MetricStatus.ESTIMATED: "estimate",
    MetricStatus.DEFAULT: "placeholder",
}


def format_value(value: float, unit: str) -> str:
    """Format a metric value with its unit, converting masses to display units."""
    if unit == "kg/day":
        return format_gain_rate(value)
    if unit == "kg":
        return format_weight(value, decimals=0)
    if unit == "%":
        return f"{value:.2f}%"
    if unit == "days":
        return f"{value:.1f} days"
    return f"{value:.2f}"


def metric_to_dict(metric: DerivedMetric) -> dict:
    """JSON-friendly view of a metric and its score."""
    scored = score_metric(metric)
    return {
        "metric": metric.metric_name,
        "title": METRIC_DEFINITIONS.get(metric.metric_name, (metric.metric_name,))[0],
        "value": metric.value,
        "unit": metric.unit,
        "target": metric.target,
        "direction": metric.direction.value,
        "status": metric.status.value,
        "percentage": scored[0] if scored else None,
        "band": scored[1] if scored else None,
    }


def format_herd_report(metrics: list[DerivedMetric]) -> str:
    """Render herd metrics as a text table."""
    lines = [
        f"{'Metric':<30} {'Value':>18} {'Target':>18} {'Score':>8}  {'Band':<8} {'Note'}",
        "-" * 100,
    ]
    for metric in metrics:
        title = METRIC_DEFINITIONS.get(metric.metric_name, (metric.metric_name,))[0]
        scored = score_metric(metric)
        value = format_value(metric.value, metric.unit) if metric.has_data else "-"
        percentage = f"{scored[0]:.0f}%" if scored else "-"
        band = scored[1] if scored else "-"
        target = format_value(metric.target, metric.unit)
        lines.append(
            f"{title:<30} {value:>18} {target:>18} {percentage:>8}  {band:<8} {STATUS_FLAGS[metric.status]}".rstrip()
        )
    return "\n".join(lines)
