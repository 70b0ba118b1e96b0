"""Livestock performance metrics.

This package turns herd records (weigh records, feed intake, breeding
cycles, calf and mortality registers) into zootechnical KPIs and scores
them against targets.

Subpackages:
- herdmetrics.core: Configuration and unit handling
- herdmetrics.data: Typed herd records and snapshot loading
- herdmetrics.metrics: Growth, feed, herd, breeding, health and scoring
- herdmetrics.report: Herd and animal reports
- herdmetrics.cli: Command-line tool
"""

# Re-export common items for convenience
from herdmetrics.core import settings
from herdmetrics.data import HerdSnapshot, load_snapshot
from herdmetrics.metrics import DerivedMetric, Direction, MetricStatus, score
from herdmetrics.report import build_animal_report, build_herd_report

__all__ = [
    "settings",
    "HerdSnapshot",
    "load_snapshot",
    "DerivedMetric",
    "Direction",
    "MetricStatus",
    "score",
    "build_herd_report",
    "build_animal_report",
]

__version__ = "0.1.0"
