from __future__ import annotations
from enum import Enum
from itertools import count
from typing import List, Optional
import numpy as np
import logging

from biochem.elements_data import DecayType, ElementSpecies, MaterialPhase

logger = logging.getLogger(__name__)

_uid_counter = count()


class AtomState(Enum):
    STABLE = "stable"
    EXCITED = "excited"
    IONIZED = "ionized"
    RADIOACTIVE = "radioactive"


class Atom:
    """
    Runtime instance of an element species placed in the sandbox.
    """

    def __init__(
        self,
        species: ElementSpecies,
        pos: Optional[np.ndarray] = None,
        uid: Optional[str] = None,
    ):
        """
        Initialize an Atom.

        Args:
            species (ElementSpecies): Immutable catalog entry this atom is an instance of.
            pos (np.ndarray, optional): 2D position vector. Defaults to origin.
            uid (str, optional): Unique identifier. Auto-generated if None.
        """
        self.species: ElementSpecies = species
        self.uid: str = uid or f"{species.symbol}_{next(_uid_counter)}"
        self.pos: np.ndarray = np.array(pos if pos is not None else np.zeros(2), dtype=float)
        self.state: AtomState = AtomState.RADIOACTIVE if species.is_radioactive else AtomState.STABLE

        # Bonds are shared with the atom on the other end
        self.bonds: List = []

        logger.debug(f"Created Atom {self.uid}: {self.symbol} at {self.pos}")

    # -----------------------
    # Species attributes
    # -----------------------
    @property
    def symbol(self) -> str:
        return self.species.symbol

    @property
    def name(self) -> str:
        return self.species.name

    @property
    def atomic_number(self) -> int:
        return self.species.atomic_number

    @property
    def mass(self) -> float:
        return self.species.atomic_mass

    @property
    def valence_electrons(self) -> int:
        return self.species.valence_electrons

    @property
    def max_bonds(self) -> int:
        return self.species.max_bonds

    @property
    def en(self) -> float:
        return self.species.electronegativity

    @property
    def color(self) -> str:
        return self.species.color

    @property
    def phase(self) -> MaterialPhase:
        return self.species.phase

    @property
    def is_radioactive(self) -> bool:
        return self.species.is_radioactive

    @property
    def half_life(self) -> float:
        return self.species.half_life

    @property
    def decay_type(self) -> DecayType:
        return self.species.decay_type

    @property
    def radiation_level(self) -> float:
        return self.species.radiation_level

    # -----------------------
    # Bonding
    # -----------------------
    def can_bond(self) -> bool:
        """True while the atom has a free bonding site."""
        return len(self.bonds) < self.max_bonds

    def available_bonding_sites(self) -> int:
        return self.max_bonds - len(self.bonds)

    def add_bond(self, bond):
        """
        Add a bond reference to this atom.

        Args:
            bond (Bond): Bond object connecting this atom to another.
        """
        if bond not in self.bonds:
            self.bonds.append(bond)

    def remove_bond(self, bond):
        """
        Remove a bond reference from this atom. Unknown bonds are ignored.

        Args:
            bond (Bond): Bond object to remove.
        """
        if bond in self.bonds:
            self.bonds.remove(bond)

    def is_bonded_to(self, other: Atom) -> bool:
        """
        Check if this atom is bonded to another.

        Args:
            other (Atom): Another atom to check.

        Returns:
            bool: True if bonded.
        """
        return any(b.atom1 is other or b.atom2 is other for b in self.bonds)

    def neighbours(self) -> List[Atom]:
        """Atoms directly bonded to this one, in bond order."""
        return [b.other(self) for b in self.bonds]

    def clone(self) -> Atom:
        """
        Copy of this atom at the same position. Bonds are never copied.
        """
        return Atom(self.species, pos=self.pos.copy())

    def __repr__(self) -> str:
        return (
            f"<Atom {self.uid} symbol={self.symbol} pos={self.pos} "
            f"bonds={len(self.bonds)}/{self.max_bonds}>"
        )
