"""
Indicator Library Interface

Defines the contract for the indicator formula capability.
"""

from abc import ABC, abstractmethod

from tradetools.schemas.market import IndicatorKind, IndicatorPeriods
from tradetools.schemas.indicators import IndicatorSeries, PriceSeries


class IndicatorLibraryInterface(ABC):
    """
    Indicator formula capability.

    INPUT: kind, PriceSeries of length n, IndicatorPeriods

    OUTPUT: IndicatorSeries of length m <= n
        - Entry 0 corresponds to candle index n - m
        - Entries are floats, dicts of optional floats, or None
    """

    @abstractmethod
    def compute(
        self,
        kind: IndicatorKind,
        inputs: PriceSeries,
        params: IndicatorPeriods,
    ) -> IndicatorSeries:
        """Evaluate one indicator over the full series."""
        pass
