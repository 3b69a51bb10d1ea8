"""
Rolling history of outbreak statistics.
Provides per-tick population and resistance series for plotting and summaries.
"""

from __future__ import annotations
from collections import deque
from typing import Any, Deque, Dict, List, Optional
import logging

import numpy as np

from biochem.constants import DEFAULT_HISTORY_MAXLEN

logger = logging.getLogger(__name__)


class PopulationMetrics:
    """
    Records one sample per simulator tick.

    Resistance series are keyed by chemical name. A chemical first seen at a
    later tick is back-filled with NaN so every series lines up with `ticks`.
    """

    def __init__(self, max_history: int = DEFAULT_HISTORY_MAXLEN, smoothing_window: int = 1):
        """
        Args:
            max_history: Maximum number of samples to keep
            smoothing_window: Window size for the moving average of alive counts
        """
        self.max_history = max_history
        self.smoothing_window = smoothing_window

        self.ticks: Deque[int] = deque(maxlen=max_history)
        self.alive: Deque[int] = deque(maxlen=max_history)
        self.smoothed_alive: Deque[float] = deque(maxlen=max_history)
        self.max_generation: Deque[int] = deque(maxlen=max_history)
        self.resistance: Dict[str, Deque[float]] = {}

        self.peak_alive = 0

    def record(self, tick: int, alive_count: int, max_generation: int,
               resistance_stats: Dict[str, float]) -> None:
        """Append one sample."""
        self.ticks.append(int(tick))
        self.alive.append(int(alive_count))
        self.smoothed_alive.append(self._moving_average(self.alive))
        self.max_generation.append(int(max_generation))
        self.peak_alive = max(self.peak_alive, int(alive_count))

        for name in resistance_stats:
            if name not in self.resistance:
                series: Deque[float] = deque(maxlen=self.max_history)
                series.extend([float("nan")] * (len(self.ticks) - 1))
                self.resistance[name] = series
        for name, series in self.resistance.items():
            series.append(float(resistance_stats.get(name, float("nan"))))

    def _moving_average(self, history: Deque[int]) -> float:
        if self.smoothing_window <= 1:
            return float(history[-1])
        window_size = min(self.smoothing_window, len(history))
        return float(np.mean(list(history)[-window_size:]))

    def get_plot_data(self, max_points: Optional[int] = None) -> Dict[str, Any]:
        """
        Series suitable for plotting.

        Returns:
            Dict with 'x', 'alive', 'smoothed_alive', 'max_generation' arrays and
            a 'resistance' dict of arrays
        """
        n_points = len(self.ticks)
        start = n_points - max_points if max_points and n_points > max_points else 0

        def tail(values) -> np.ndarray:
            return np.array(list(values)[start:], dtype=float)

        return {
            "x": tail(self.ticks),
            "alive": tail(self.alive),
            "smoothed_alive": tail(self.smoothed_alive),
            "max_generation": tail(self.max_generation),
            "resistance": {name: tail(series) for name, series in self.resistance.items()},
        }

    def get_current_summary(self) -> Dict[str, Any]:
        """Latest sample plus peak population."""
        if not self.ticks:
            return {"tick": 0, "alive": 0, "peak_alive": 0, "max_generation": 0, "resistance": {}}
        return {
            "tick": self.ticks[-1],
            "alive": self.alive[-1],
            "peak_alive": self.peak_alive,
            "max_generation": self.max_generation[-1],
            "resistance": {
                name: series[-1] for name, series in self.resistance.items() if not np.isnan(series[-1])
            },
        }

    def chemicals(self) -> List[str]:
        return list(self.resistance.keys())

    def __len__(self) -> int:
        return len(self.ticks)

    def reset(self):
        """Reset all recorded data."""
        self.ticks.clear()
        self.alive.clear()
        self.smoothed_alive.clear()
        self.max_generation.clear()
        self.resistance.clear()
        self.peak_alive = 0
