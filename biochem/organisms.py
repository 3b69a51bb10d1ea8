"""
Organism class representing an individual pathogen with per-chemical resistances.
"""
from __future__ import annotations
from enum import Enum
from itertools import count
from typing import Dict, Optional, Tuple
import logging

import numpy as np

from biochem.constants import (
    EXPOSURE_RESISTANCE_CAP,
    MUTATION_RESISTANCE_CAP,
    MUTATION_RESISTANCE_GAIN,
)

logger = logging.getLogger(__name__)

_organism_ids = count(1)
_default_rng = np.random.default_rng()

Color = Tuple[int, int, int]


class OrganismType(Enum):
    SINGLE_CELL = "single_cell"
    BACTERIA = "bacteria"
    VIRUS = "virus"
    MUTATED_VIRUS = "mutated_virus"
    SUPER_VIRUS = "super_virus"


class Organism:
    """
    A single organism in the outbreak.

    Attributes:
        uid (int): Unique identifier
        pos (np.ndarray): 2D position in screen pixels
        health (float): Hit points, 100 at birth, never below 0
        resistances (dict): Chemical name -> fraction of damage ignored
        generation (int): Clone steps since the founding ancestor (founders are 1)
        is_alive (bool): False once health reaches 0; never reverts
    """

    def __init__(self,
                 pos=None,
                 health: float = 100.0,
                 reproduction_rate: float = 1.0,
                 mutation_rate: float = 0.1,
                 generation: int = 1,
                 size: float = 10.0,
                 color: Color = (0, 128, 0),
                 organism_type: OrganismType = OrganismType.SINGLE_CELL,
                 resistances: Optional[Dict[str, float]] = None,
                 created_tick: int = 0):
        self.uid: int = next(_organism_ids)
        self.pos: np.ndarray = np.array(pos if pos is not None else np.zeros(2), dtype=float)
        self.health: float = float(health)
        self.reproduction_rate: float = float(reproduction_rate)
        self.mutation_rate: float = float(mutation_rate)
        self.generation: int = int(generation)
        self.size: float = float(size)
        self.color: Color = tuple(int(c) for c in color)
        self.type: OrganismType = organism_type
        self.resistances: Dict[str, float] = dict(resistances) if resistances else {}
        self.created_tick: int = created_tick
        self.is_alive: bool = True

    def clone(self, mutate: bool = False, rng: Optional[np.random.Generator] = None) -> Organism:
        """
        Create a daughter organism one generation further on.

        Args:
            mutate (bool): Roll for resistance, colour and size mutations
            rng (np.random.Generator): Source of randomness for the mutation rolls

        Returns:
            Organism: New organism at the parent's position
        """
        child = Organism(
            pos=self.pos.copy(),
            health=self.health,
            reproduction_rate=self.reproduction_rate,
            mutation_rate=self.mutation_rate,
            generation=self.generation + 1,
            size=self.size,
            color=self.color,
            organism_type=self.type,
            resistances=self.resistances,
            created_tick=self.created_tick,
        )
        if mutate:
            child._mutate(rng if rng is not None else _default_rng)
        return child

    def _mutate(self, rng: np.random.Generator) -> None:
        # Resistance drift is capped at 1.0, looser than the exposure cap of 0.95
        if self.resistances and rng.random() < self.mutation_rate:
            key = list(self.resistances)[rng.integers(len(self.resistances))]
            self.resistances[key] = min(MUTATION_RESISTANCE_CAP, self.resistances[key] + MUTATION_RESISTANCE_GAIN)
            logger.debug(f"Organism {self.uid} resistance to {key} drifted to {self.resistances[key]:.2f}")

        if rng.random() < self.mutation_rate * 0.5:
            self.color = tuple(int(np.clip(c + rng.integers(-20, 20), 0, 255)) for c in self.color)

        if rng.random() < self.mutation_rate * 0.3:
            self.size *= 1.0 + (rng.random() - 0.5) * 0.2

    def take_damage(self, damage: float, chemical_name: Optional[str] = None) -> float:
        """
        Reduce health, killing the organism at 0.

        Args:
            damage (float): Incoming damage
            chemical_name (str): If given, the organism's resistance to this
                chemical reduces the damage first

        Returns:
            float: Damage actually taken
        """
        if chemical_name is not None:
            damage *= 1.0 - self.resistances.get(chemical_name, 0.0)
        self.health = max(0.0, self.health - damage)
        if self.health <= 0.0:
            self.is_alive = False
        return damage

    def develop_resistance(self, chemical_name: str, amount: float) -> None:
        """Raise resistance to a chemical, capped at 0.95."""
        current = self.resistances.get(chemical_name, 0.0)
        self.resistances[chemical_name] = min(EXPOSURE_RESISTANCE_CAP, current + amount)

    def distance_to(self, point) -> float:
        return float(np.linalg.norm(self.pos - np.asarray(point, dtype=float)))

    def to_dict(self) -> Dict:
        """Plain snapshot for presentation layers."""
        return {
            "uid": self.uid,
            "pos": [float(self.pos[0]), float(self.pos[1])],
            "health": self.health,
            "generation": self.generation,
            "size": self.size,
            "color": list(self.color),
            "type": self.type.value,
            "resistances": dict(self.resistances),
            "is_alive": self.is_alive,
        }

    def __repr__(self):
        return (f"Organism(uid={self.uid}, generation={self.generation}, "
                f"health={self.health:.1f}, alive={self.is_alive})")
