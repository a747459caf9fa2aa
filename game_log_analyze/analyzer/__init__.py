"""
Live statistics core: windowed samples, subscribers, dispatcher and the
analyzer facade that ties them together.
"""

from .window import Sample, TrimPolicy, trim_sample, trim_samples
from .subscribers import (
    Subscriber,
    SubscriberKind,
    TotalDamageSubscriber,
    DamagePerSecondSubscriber,
    AverageHitSubscriber,
    MinimumHitSubscriber,
    MaximumHitSubscriber,
)
from .dispatcher import EventDispatcher, UnknownSubscriberError
from .live import AnalyzerSnapshot, LiveDamageAnalyzer

__all__ = [
    "Sample",
    "TrimPolicy",
    "trim_sample",
    "trim_samples",
    "Subscriber",
    "SubscriberKind",
    "TotalDamageSubscriber",
    "DamagePerSecondSubscriber",
    "AverageHitSubscriber",
    "MinimumHitSubscriber",
    "MaximumHitSubscriber",
    "EventDispatcher",
    "UnknownSubscriberError",
    "AnalyzerSnapshot",
    "LiveDamageAnalyzer",
]
