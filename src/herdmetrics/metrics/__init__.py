"""Livestock performance metrics.

This module provides:
- Per-animal growth metrics: DLWG, period ADG, WGM, calf ADG (growth.py)
- Feed conversion ratio (feed.py)
- Herd aggregation with plausibility filtering and fallbacks (herd.py)
- Reproduction metrics (breeding.py)
- Mortality, body condition and stock type (health.py)
- Performance scoring against targets (scoring.py)
"""

from herdmetrics.metrics.breeding import (
    CALVING_INTERVAL_DEFAULT_DAYS,
    breeding_females,
    calf_crop_percentage,
    calving_interval,
    calving_interval_by_animal,
    calving_percentage,
    conception_rate,
    events_for_year,
    in_calf_rate,
    in_calf_rate_42,
    in_calf_rate_100,
    weaning_rate,
)
from herdmetrics.metrics.feed import (
    feed_conversion_ratio,
    fcr_band,
    fcr_from_weight_records,
)
from herdmetrics.metrics.growth import (
    average_daily_gain,
    daily_live_weight_gain,
    days_between,
    observations_in_window,
    period_average_daily_gain,
    total_weight_gain,
    trailing_window,
    weight_gain_metric,
)
from herdmetrics.metrics.health import (
    age_years,
    average_body_condition_score,
    calf_mortality_rate,
    mortality_rate,
    stock_type,
)
from herdmetrics.metrics.herd import (
    ADG_VALID_RANGE,
    DLWG_VALID_RANGE,
    FCR_VALID_RANGE,
    WGM_VALID_RANGE,
    HerdWeightGain,
    average_herd_metric,
    estimate_herd_weight_gain_fallback,
    herd_average_dlwg,
    herd_average_fcr,
    herd_average_wgm,
    herd_weight_gain,
)
from herdmetrics.metrics.scoring import Band, mortality_band, score, score_metric
from herdmetrics.metrics.types import DerivedMetric, Direction, MetricStatus

__all__ = [
    # types
    "DerivedMetric",
    "Direction",
    "MetricStatus",
    # growth
    "daily_live_weight_gain",
    "period_average_daily_gain",
    "weight_gain_metric",
    "average_daily_gain",
    "total_weight_gain",
    "days_between",
    "observations_in_window",
    "trailing_window",
    # feed
    "feed_conversion_ratio",
    "fcr_from_weight_records",
    "fcr_band",
    # herd
    "average_herd_metric",
    "estimate_herd_weight_gain_fallback",
    "herd_weight_gain",
    "herd_average_dlwg",
    "herd_average_wgm",
    "herd_average_fcr",
    "HerdWeightGain",
    "FCR_VALID_RANGE",
    "DLWG_VALID_RANGE",
    "ADG_VALID_RANGE",
    "WGM_VALID_RANGE",
    # breeding
    "conception_rate",
    "in_calf_rate",
    "in_calf_rate_42",
    "in_calf_rate_100",
    "calving_interval",
    "calving_interval_by_animal",
    "calf_crop_percentage",
    "calving_percentage",
    "weaning_rate",
    "events_for_year",
    "breeding_females",
    "CALVING_INTERVAL_DEFAULT_DAYS",
    # health
    "mortality_rate",
    "calf_mortality_rate",
    "average_body_condition_score",
    "age_years",
    "stock_type",
    # scoring
    "score",
    "score_metric",
    "mortality_band",
    "Band",
]
