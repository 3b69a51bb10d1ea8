from __future__ import annotations
from enum import Enum
from typing import Dict, FrozenSet, Optional
import numpy as np
import logging

from biochem.constants import (
    BOND_LENGTH_MIN,
    BOND_LENGTH_SPREAD,
    COVALENT_MAX_EN_DIFF,
    DEFAULT_BOND_ENERGY,
    IONIC_MIN_EN_DIFF,
)

logger = logging.getLogger(__name__)

# -----------------------
# Bond constants
# -----------------------

class BondOrder(Enum):
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    IONIC = "ionic"
    HYDROGEN = "hydrogen"
    METALLIC = "metallic"


# kJ/mol for a single bond between the two symbols, in either order.
# Keys are unordered: "H-O" resolves to the O-H energy instead of DEFAULT_BOND_ENERGY.
BOND_ENERGIES: Dict[FrozenSet[str], float] = {
    frozenset(("H",)): 436.0,
    frozenset(("O",)): 498.0,
    frozenset(("N",)): 945.0,
    frozenset(("C",)): 348.0,
    frozenset(("C", "H")): 413.0,
    frozenset(("O", "H")): 463.0,
    frozenset(("N", "H")): 391.0,
    frozenset(("C", "O")): 358.0,
    frozenset(("C", "N")): 305.0,
}

ORDER_ENERGY_FACTOR: Dict[BondOrder, float] = {
    BondOrder.DOUBLE: 2.0,
    BondOrder.TRIPLE: 3.0,
}

_default_rng = np.random.default_rng()


# -----------------------
# Bond object
# -----------------------

class Bond:
    """
    Represents a bond between two atoms.

    The same Bond object is held in both endpoints' ``bonds`` lists.
    """
    def __init__(self,
                 atom1,
                 atom2,
                 order: BondOrder = BondOrder.SINGLE,
                 energy: float = 0.0,
                 length: float = BOND_LENGTH_MIN,
                 is_stable: bool = True):
        """
        Initialize a bond. Does not register itself with the atoms; use
        `create_bond` for the capacity-checked path.

        Args:
            atom1 (Atom): First atom in the bond.
            atom2 (Atom): Second atom in the bond.
            order (BondOrder): Bond order.
            energy (float): Bond energy in kJ/mol.
            length (float): Bond length in angstroms.
            is_stable (bool): Whether the pairing is chemically plausible.
        """
        if atom1 is atom2:
            raise ValueError("Cannot bond an atom to itself")

        self.atom1 = atom1
        self.atom2 = atom2
        self.order: BondOrder = order
        self.energy: float = float(energy)
        self.length: float = float(length)
        self.is_stable: bool = bool(is_stable)

    def other(self, atom):
        """Return the endpoint that is not `atom`."""
        return self.atom2 if atom is self.atom1 else self.atom1

    def joins(self, symbol1: str, symbol2: str) -> bool:
        """True if the bond connects the two symbols in either order."""
        pair = (self.atom1.symbol, self.atom2.symbol)
        return pair == (symbol1, symbol2) or pair == (symbol2, symbol1)

    def __repr__(self):
        return (f"<Bond {self.atom1.uid}-{self.atom2.uid} order={self.order.value} "
                f"energy={self.energy:.0f} length={self.length:.3f}>")

# -----------------------
# Utility functions
# -----------------------

def bond_energy(symbol1: str, symbol2: str, order: BondOrder = BondOrder.SINGLE) -> float:
    """
    Tabulated bond energy (kJ/mol) for a pair of symbols, scaled by bond order.
    Unknown pairs use DEFAULT_BOND_ENERGY.
    """
    base = BOND_ENERGIES.get(frozenset((symbol1, symbol2)), DEFAULT_BOND_ENERGY)
    return base * ORDER_ENERGY_FACTOR.get(order, 1.0)


def is_bond_stable(atom1, atom2, order: BondOrder) -> bool:
    """
    Ionic bonds need a large electronegativity gap; every other order
    tolerates at most COVALENT_MAX_EN_DIFF.
    """
    en_diff = abs(atom1.en - atom2.en)
    if order is BondOrder.IONIC:
        return en_diff >= IONIC_MIN_EN_DIFF
    return en_diff <= COVALENT_MAX_EN_DIFF


def can_form_bond(atom1, atom2) -> bool:
    """Both atoms still have a free bonding site."""
    return atom1.can_bond() and atom2.can_bond()


def create_bond(atom1,
                atom2,
                order: BondOrder = BondOrder.SINGLE,
                rng: Optional[np.random.Generator] = None) -> Optional[Bond]:
    """
    Bond two atoms if both have capacity left.

    Returns None when either atom is saturated (or when both arguments are
    the same atom). On success the bond is appended to both atoms.
    """
    if atom1 is atom2:
        logger.debug(f"Refused to bond {atom1.uid} to itself")
        return None
    if not can_form_bond(atom1, atom2):
        logger.debug(f"Bond refused: {atom1.uid} ({len(atom1.bonds)}/{atom1.max_bonds}) "
                     f"- {atom2.uid} ({len(atom2.bonds)}/{atom2.max_bonds})")
        return None

    rng = rng if rng is not None else _default_rng
    bond = Bond(
        atom1,
        atom2,
        order=order,
        energy=bond_energy(atom1.symbol, atom2.symbol, order),
        length=BOND_LENGTH_MIN + rng.random() * BOND_LENGTH_SPREAD,
        is_stable=is_bond_stable(atom1, atom2, order),
    )
    atom1.add_bond(bond)
    atom2.add_bond(bond)

    logger.debug(f"Created {bond!r} stable={bond.is_stable}")
    return bond


def break_bond(bond: Bond) -> None:
    """Detach a bond from both of its atoms."""
    bond.atom1.remove_bond(bond)
    bond.atom2.remove_bond(bond)
    logger.debug(f"Removed {bond!r}")
