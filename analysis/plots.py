"""
Publication-grade plotting functions for outbreak analysis.
Provides headless plotting with consistent styling and export to SVG/PNG formats.
"""

import logging
import os

import matplotlib.pyplot as plt
import numpy as np
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

# Set publication-grade defaults
plt.rcParams['font.family'] = 'serif'
plt.rcParams['font.size'] = 12
plt.rcParams['axes.labelsize'] = 14
plt.rcParams['axes.titlesize'] = 16
plt.rcParams['xtick.labelsize'] = 12
plt.rcParams['ytick.labelsize'] = 12
plt.rcParams['legend.fontsize'] = 12
plt.rcParams['figure.figsize'] = (8, 6)
plt.rcParams['figure.dpi'] = 100
plt.rcParams['savefig.dpi'] = 300
plt.rcParams['savefig.bbox'] = 'tight'
plt.rcParams['axes.facecolor'] = 'white'
plt.rcParams['figure.facecolor'] = 'white'

ArrayLike = Union[List[float], np.ndarray]


def _save(filename_prefix: str) -> List[str]:
    directory = os.path.dirname(filename_prefix)
    if directory:
        os.makedirs(directory, exist_ok=True)

    paths = [f'{filename_prefix}.svg', f'{filename_prefix}.png']
    plt.savefig(paths[0], format='svg')
    plt.savefig(paths[1], format='png')
    plt.close()

    logger.info(f"Saved plot {paths[0]} and {paths[1]}")
    return paths


def plot_population(ticks: ArrayLike,
                    alive: ArrayLike,
                    filename_prefix: str = 'population_plot',
                    smoothed: Optional[ArrayLike] = None,
                    spray_ticks: Optional[List[int]] = None,
                    title: Optional[str] = None) -> List[str]:
    """
    Create publication-grade living population vs tick plot.

    Parameters:
    -----------
    ticks : array-like
        Simulator tick numbers
    alive : array-like
        Living organism counts
    filename_prefix : str
        Prefix for output files (default: 'population_plot')
    smoothed : array-like, optional
        Moving average of the counts, drawn dashed
    spray_ticks : list of int, optional
        Ticks at which a chemical was applied, drawn as vertical markers
    title : str, optional
        Plot title (default: 'Population vs Time')

    Returns:
    --------
    list of str
        Paths of the written SVG and PNG files
    """
    plt.figure(figsize=(8, 6))

    plt.plot(ticks, alive, 'g-', linewidth=2, alpha=0.8, label='Alive')
    if smoothed is not None:
        plt.plot(ticks, smoothed, 'k--', linewidth=1.5, alpha=0.7, label='Smoothed')
    for i, tick in enumerate(spray_ticks or []):
        plt.axvline(tick, color='r', alpha=0.3, linewidth=1, label='Spray' if i == 0 else None)

    plt.xlabel('Tick')
    plt.ylabel('Living Organisms')

    if title is None:
        title = 'Population vs Time'
    plt.title(title)

    if smoothed is not None or spray_ticks:
        plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()

    return _save(filename_prefix)


def plot_resistance(ticks: ArrayLike,
                    resistance: Dict[str, ArrayLike],
                    filename_prefix: str = 'resistance_plot',
                    title: Optional[str] = None) -> List[str]:
    """
    Create publication-grade average resistance vs tick plot, one line per chemical.

    Parameters:
    -----------
    ticks : array-like
        Simulator tick numbers
    resistance : dict
        {chemical_name: average_resistance_array}; NaN marks ticks before the
        chemical was first resisted
    filename_prefix : str
        Prefix for output files (default: 'resistance_plot')
    title : str, optional
        Plot title (default: 'Average Resistance vs Time')
    """
    if not isinstance(resistance, dict):
        raise ValueError("resistance must be a dict of arrays")

    plt.figure(figsize=(8, 6))

    for name, values in resistance.items():
        plt.plot(ticks, values, label=name, linewidth=2, alpha=0.8)

    plt.xlabel('Tick')
    plt.ylabel('Average Resistance')
    plt.ylim(0.0, 1.0)

    if title is None:
        title = 'Average Resistance vs Time'
    plt.title(title)

    if resistance:
        plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()

    return _save(filename_prefix)


def plot_history(history, filename_prefix: str, spray_ticks: Optional[List[int]] = None) -> List[str]:
    """
    Write both plots for a `PopulationMetrics` history.

    Files are `<prefix>_population.{svg,png}` and `<prefix>_resistance.{svg,png}`.
    """
    data = history.get_plot_data()
    paths = plot_population(data['x'], data['alive'], f'{filename_prefix}_population',
                            smoothed=data['smoothed_alive'], spray_ticks=spray_ticks)
    paths += plot_resistance(data['x'], data['resistance'], f'{filename_prefix}_resistance')
    return paths
