"""
PopulationSimulator: owns the outbreak population and advances it tick by tick.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import math

import numpy as np

from biochem.chemicals import Chemical
from biochem.constants import (
    DEFAULT_OUTBREAK_SIZE,
    DEFAULT_SCREEN_HEIGHT,
    DEFAULT_SCREEN_WIDTH,
    EXPOSURE_DAMAGE_THRESHOLD,
    EXPOSURE_RESISTANCE_GAIN,
    HEALTHY_THRESHOLD,
    MAX_OFFSPRING_PER_TICK,
    MAX_POPULATION,
    MOVE_JITTER,
    OFFSPRING_JITTER,
    OUTBREAK_MUTATION_RATE,
    OUTBREAK_REPRODUCTION_RATE,
    SPREAD_DISTANCE_RANGE,
    SPREAD_MIN_DISTANCE,
)
from biochem.metrics import PopulationMetrics
from biochem.organisms import Organism, OrganismType
from biochem.reactions import ReactionMatcher

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """What one call to `PopulationSimulator.update` changed."""
    tick: int
    removed_dead: int = 0
    spread: int = 0
    reproduced: int = 0
    culled: int = 0
    alive: int = 0

    @property
    def born(self) -> int:
        return self.spread + self.reproduced


@dataclass
class ExposureResult:
    """What one chemical application did to the population."""
    chemical: str
    affected: List[Organism] = field(default_factory=list)
    killed: List[Organism] = field(default_factory=list)
    adapted: List[Organism] = field(default_factory=list)
    total_damage: float = 0.0


class PopulationSimulator:
    """
    Manages the organism population and its collective behaviour.

    All randomness comes from a single `numpy.random.Generator`; pass `rng` or
    `seed` for reproducible runs. Calls must be serialized by the caller.

    Attributes:
        organisms (list): Organisms in the population, dead ones until the next update
        total_created (int): Organisms ever created by this simulator
        generations_evolved (int): Highest generation seen so far
        tick (int): Number of completed updates
    """

    def __init__(self,
                 matcher: Optional[ReactionMatcher] = None,
                 width: float = DEFAULT_SCREEN_WIDTH,
                 height: float = DEFAULT_SCREEN_HEIGHT,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None,
                 max_population: int = MAX_POPULATION,
                 history: Optional[PopulationMetrics] = None):
        """
        Args:
            matcher (ReactionMatcher): Supplies chemical damage calculation
            width (float): Screen width in pixels
            height (float): Screen height in pixels
            rng (np.random.Generator): Injected random source; takes precedence over seed
            seed (int): Seed for a fresh generator when rng is not given
            max_population (int): Hard cap enforced during every update
            history (PopulationMetrics): Collector for per-tick statistics
        """
        self.matcher = matcher if matcher is not None else ReactionMatcher()
        self.width = float(width)
        self.height = float(height)
        self.seed = int(seed) if seed is not None else None
        self.rng = rng if rng is not None else np.random.default_rng(seed=self.seed)
        self.max_population = int(max_population)
        self.history = history if history is not None else PopulationMetrics()

        self.organisms: List[Organism] = []
        self.total_created = 0
        self.generations_evolved = 0
        self.tick = 0

    # -----------------------
    # Setup
    # -----------------------
    def initialize_outbreak(self, count: int = DEFAULT_OUTBREAK_SIZE) -> List[Organism]:
        """
        Replace the population with `count` founding viruses at random positions.

        Returns:
            list: The new founders
        """
        self.organisms.clear()
        for _ in range(count):
            organism = Organism(
                pos=self.rng.random(2) * np.array([self.width, self.height]),
                size=15.0 + self.rng.random() * 10.0,
                color=(100 + int(self.rng.integers(100)),
                       150 + int(self.rng.integers(50)),
                       50 + int(self.rng.integers(50))),
                organism_type=OrganismType.VIRUS,
                generation=1,
                reproduction_rate=OUTBREAK_REPRODUCTION_RATE,
                mutation_rate=OUTBREAK_MUTATION_RATE,
                created_tick=self.tick,
            )
            self.organisms.append(organism)
            self.total_created += 1

        self.generations_evolved = max(self.generations_evolved, 1 if count > 0 else 0)
        logger.info(f"Outbreak initialized: {count} organisms on {self.width:.0f}x{self.height:.0f}")
        return list(self.organisms)

    def set_screen_size(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)

    def add_organism(self, organism: Organism) -> Organism:
        """Place an externally created organism into the population."""
        self.organisms.append(organism)
        self.total_created += 1
        self.generations_evolved = max(self.generations_evolved, organism.generation)
        return organism

    # -----------------------
    # Core stepping
    # -----------------------
    def update(self, delta_time: float) -> TickResult:
        """
        Advance the population by one tick:
         - remove dead organisms
         - spread mutated clones to nearby locations (then enforce the cap)
         - let healthy organisms reproduce (then enforce the cap)
         - jitter every living organism
        """
        result = TickResult(tick=self.tick + 1)

        before = len(self.organisms)
        self.organisms = [o for o in self.organisms if o.is_alive]
        result.removed_dead = before - len(self.organisms)

        result.spread = self._spread(delta_time)
        result.culled += self._enforce_cap()

        result.reproduced = self._reproduce()
        result.culled += self._enforce_cap()

        self._move(delta_time)

        self.tick += 1
        result.alive = self.alive_count()
        self.history.record(self.tick, result.alive, self.generations_evolved, self.resistance_stats())

        logger.debug(f"Tick {self.tick}: removed={result.removed_dead} spread={result.spread} "
                     f"reproduced={result.reproduced} culled={result.culled} alive={result.alive}")
        return result

    def _spawn(self, parent: Organism, pos: np.ndarray) -> Organism:
        child = parent.clone(mutate=True, rng=self.rng)
        child.pos = pos
        child.created_tick = self.tick
        self.total_created += 1
        if child.generation > self.generations_evolved:
            self.generations_evolved = child.generation
        return child

    def _spread(self, delta_time: float) -> int:
        new_organisms: List[Organism] = []
        for organism in self.organisms:
            if not organism.is_alive:
                continue
            if self.rng.random() < organism.reproduction_rate * delta_time:
                angle = self.rng.random() * 2.0 * math.pi
                distance = SPREAD_MIN_DISTANCE + self.rng.random() * SPREAD_DISTANCE_RANGE
                offset = np.array([math.cos(angle), math.sin(angle)]) * distance
                new_organisms.append(self._spawn(organism, self._clamp(organism.pos + offset)))

        self.organisms.extend(new_organisms)
        return len(new_organisms)

    def _enforce_cap(self) -> int:
        """
        Keep the `max_population` most evolved organisms, ranked by generation
        then health. Ties keep their current order (sorted() is stable).
        """
        excess = len(self.organisms) - self.max_population
        if excess <= 0:
            return 0
        ranked = sorted(self.organisms, key=lambda o: (o.generation, o.health), reverse=True)
        self.organisms = ranked[:self.max_population]
        logger.info(f"Population capped at {self.max_population}: culled {excess}")
        return excess

    def _reproduce(self) -> int:
        healthy = [o for o in self.organisms if o.is_alive and o.health > HEALTHY_THRESHOLD]
        if len(healthy) < 2:
            return 0

        offspring: List[Organism] = []
        for _ in range(min(MAX_OFFSPRING_PER_TICK, len(healthy) // 10)):
            parent = healthy[int(self.rng.integers(len(healthy)))]
            jitter = self.rng.integers(-OFFSPRING_JITTER, OFFSPRING_JITTER, size=2)
            offspring.append(self._spawn(parent, parent.pos + jitter))

        self.organisms.extend(offspring)
        return len(offspring)

    def _move(self, delta_time: float) -> None:
        for organism in self.organisms:
            if organism.is_alive:
                step = (self.rng.random(2) - 0.5) * MOVE_JITTER * delta_time
                organism.pos = self._clamp(organism.pos + step)

    def _clamp(self, pos: np.ndarray) -> np.ndarray:
        return np.clip(pos, [0.0, 0.0], [self.width, self.height])

    # -----------------------
    # Chemical attacks
    # -----------------------
    def apply_chemical(self, chemical: Chemical, point, radius: float) -> List[Organism]:
        """
        Spray a chemical at `point`. Damage falls off linearly from full at the
        centre to zero at `radius`.

        Returns:
            list: Every organism that was alive and within the radius, including those it killed
        """
        return self.apply_chemical_detailed(chemical, point, radius).affected

    def apply_chemical_detailed(self, chemical: Chemical, point, radius: float) -> ExposureResult:
        """
        Same as `apply_chemical` but reports kills, adaptations and total damage.

        Survivors hit by more than 10 damage gain 0.05 resistance to the chemical.
        """
        result = ExposureResult(chemical=chemical.name)
        center = np.asarray(point, dtype=float)

        for organism in self.organisms:
            if not organism.is_alive:
                continue
            distance = organism.distance_to(center)
            if distance > radius:
                continue

            damage = self.matcher.calculate_damage(chemical, organism)
            damage *= (1.0 - distance / radius) if radius > 0 else 1.0
            result.total_damage += organism.take_damage(damage)
            result.affected.append(organism)

            if not organism.is_alive:
                result.killed.append(organism)
            elif damage > EXPOSURE_DAMAGE_THRESHOLD:
                organism.develop_resistance(chemical.name, EXPOSURE_RESISTANCE_GAIN)
                result.adapted.append(organism)

        logger.info(f"{chemical.name} at ({center[0]:.0f}, {center[1]:.0f}) r={radius:.0f}: "
                    f"hit {len(result.affected)}, killed {len(result.killed)}, adapted {len(result.adapted)}")
        return result

    # -----------------------
    # Statistics
    # -----------------------
    def alive(self) -> List[Organism]:
        return [o for o in self.organisms if o.is_alive]

    def alive_count(self) -> int:
        return sum(1 for o in self.organisms if o.is_alive)

    def is_extinct(self) -> bool:
        return self.alive_count() == 0

    def average_resistance(self, chemical_name: str) -> float:
        """
        Mean resistance to a chemical over living organisms that carry it.

        Returns:
            float: 0.0 if no living organism has that resistance
        """
        values = [o.resistances[chemical_name] for o in self.organisms
                  if o.is_alive and chemical_name in o.resistances]
        if not values:
            return 0.0
        return float(np.mean(values))

    def resistance_stats(self) -> Dict[str, float]:
        """Average resistance for every chemical any living organism resists."""
        names: List[str] = []
        for organism in self.organisms:
            if organism.is_alive:
                names.extend(n for n in organism.resistances if n not in names)
        return {name: self.average_resistance(name) for name in names}

    def centroid(self) -> Optional[np.ndarray]:
        """Mean position of the living population, or None when extinct."""
        living = self.alive()
        if not living:
            return None
        return np.mean([o.pos for o in living], axis=0)

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the population for presentation layers."""
        return {
            "tick": self.tick,
            "alive": self.alive_count(),
            "total_created": self.total_created,
            "generations_evolved": self.generations_evolved,
            "resistance": self.resistance_stats(),
            "organisms": [o.to_dict() for o in self.organisms if o.is_alive],
        }

    def __repr__(self):
        return (f"PopulationSimulator(size={len(self.organisms)}, tick={self.tick}, "
                f"generations={self.generations_evolved})")
