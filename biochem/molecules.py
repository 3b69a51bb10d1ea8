from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from itertools import count
from typing import Dict, List, Optional, Tuple
import logging

import numpy as np

from biochem.atoms import Atom
from biochem.bonds import Bond, BondOrder

logger = logging.getLogger(__name__)

_molecule_ids = count()

# Elements written first in a formula; everything else follows alphabetically
FORMULA_PRIORITY: Dict[str, int] = {"C": 0, "H": 1, "O": 2, "N": 3}


class MoleculeStability(Enum):
    STABLE = "stable"
    METASTABLE = "metastable"
    UNSTABLE = "unstable"
    HIGHLY_REACTIVE = "highly_reactive"
    EXPLOSIVE = "explosive"


class ReactionVisualEffect(Enum):
    NONE = "none"
    BUBBLING = "bubbling"
    FLASH = "flash"
    FIRE = "fire"
    EXPLOSION = "explosion"
    SPARK = "spark"
    COLOR_CHANGE = "color_change"


# -----------------------
# Graph -> Formula utilities
# -----------------------

def graph_to_formula(atoms: List[Atom]) -> Dict[str, int]:
    """
    Count atoms per element symbol.
    """
    counts: Dict[str, int] = defaultdict(int)
    for atom in atoms:
        counts[atom.symbol] += 1
    return dict(counts)


def formula_to_string(counts: Dict[str, int]) -> str:
    """
    Canonical formula string: C, H, O, N first, then the rest alphabetically.
    A count of one is omitted ("H2O", "CH4", "NaCl").
    """
    order = sorted(counts, key=lambda sym: (FORMULA_PRIORITY.get(sym, len(FORMULA_PRIORITY)), sym))
    return "".join(f"{sym}{counts[sym] if counts[sym] != 1 else ''}" for sym in order if counts[sym] > 0)


# -----------------------
# Connected components
# -----------------------

def extract_connected_components(atoms: List[Atom], bonds: List[Bond]) -> List[Tuple[List[Atom], List[Bond]]]:
    """
    Identify connected components (sub-molecules) from a list of atoms and bonds.
    Returns a list of tuples: (atoms_in_component, bonds_in_component).
    Atoms and bonds keep their input order inside each component.
    """
    adj: Dict[str, List[str]] = defaultdict(list)
    for bond in bonds:
        u1, u2 = bond.atom1.uid, bond.atom2.uid
        adj[u1].append(u2)
        adj[u2].append(u1)

    visited = set()
    components: List[Tuple[List[Atom], List[Bond]]] = []

    for atom in atoms:
        if atom.uid in visited:
            continue
        stack = [atom.uid]
        comp_uids = set()
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            comp_uids.add(current)
            for neighbor in adj.get(current, []):
                if neighbor not in visited:
                    stack.append(neighbor)
        comp_atoms = [a for a in atoms if a.uid in comp_uids]
        comp_bonds = [b for b in bonds if b.atom1.uid in comp_uids and b.atom2.uid in comp_uids]
        components.append((comp_atoms, comp_bonds))

    return components


# -----------------------
# Molecule
# -----------------------

class Molecule:
    """
    A set of atoms and the bonds between them, with derived formula and
    classification. The molecule aggregates references; it does not own
    copies of its atoms.
    """

    def __init__(self, atoms: Optional[List[Atom]] = None, bonds: Optional[List[Bond]] = None):
        self.uid: str = f"mol_{next(_molecule_ids)}"
        self.atoms: List[Atom] = list(atoms) if atoms else []
        self.bonds: List[Bond] = list(bonds) if bonds else []
        self.formula: str = ""
        self.name: str = "Unknown"
        self.stability: MoleculeStability = MoleculeStability.STABLE
        self.is_explosive: bool = False
        self.is_flammable: bool = False
        self.is_toxic: bool = False
        self.color: str = "#808080"

    @property
    def total_energy(self) -> float:
        """Sum of bond energies in kJ/mol."""
        return float(sum(b.energy for b in self.bonds))

    @property
    def center_of_mass(self) -> np.ndarray:
        """Mass-weighted mean atom position (origin for an empty molecule)."""
        if not self.atoms:
            return np.zeros(2)
        masses = np.array([a.mass for a in self.atoms], dtype=float)
        positions = np.array([a.pos for a in self.atoms], dtype=float)
        return (positions * masses[:, None]).sum(axis=0) / masses.sum()

    def calculate_formula(self) -> str:
        self.formula = formula_to_string(graph_to_formula(self.atoms))
        return self.formula

    def check_stability(self) -> MoleculeStability:
        """
        Classify the molecule. Over-bonded atoms or a dangerous substructure
        make it unstable; a loose atom in a multi-atom molecule makes it
        metastable.
        """
        overbonded = any(len(a.bonds) > a.max_bonds for a in self.atoms)
        dangerous = self._has_dangerous_combination()
        unbonded = len(self.atoms) > 1 and any(len(a.bonds) == 0 for a in self.atoms)

        if overbonded or dangerous:
            self.stability = MoleculeStability.UNSTABLE
        elif unbonded:
            self.stability = MoleculeStability.METASTABLE
        else:
            self.stability = MoleculeStability.STABLE
        return self.stability

    def _has_dangerous_combination(self) -> bool:
        for bond in self._all_bonds():
            peroxide = bond.order is BondOrder.SINGLE and bond.joins("O", "O")
            dinitrogen = bond.order is BondOrder.TRIPLE and bond.joins("N", "N")
            if peroxide or dinitrogen:
                self.is_explosive = True
                return True
        return False

    def _all_bonds(self) -> List[Bond]:
        # bonds held by the atoms count even when the caller did not pass them in
        seen = {id(b): b for b in self.bonds}
        for atom in self.atoms:
            for b in atom.bonds:
                seen.setdefault(id(b), b)
        return list(seen.values())

    def __repr__(self) -> str:
        return (f"<Molecule {self.uid} {self.formula or '?'} name={self.name!r} "
                f"stability={self.stability.value}>")


@dataclass(frozen=True)
class KnownMolecule:
    formula: str
    name: str
    stability: MoleculeStability = MoleculeStability.STABLE
    is_flammable: bool = False
    is_explosive: bool = False
    is_toxic: bool = False
    color: str = "#808080"


KNOWN_MOLECULES: Dict[str, KnownMolecule] = {
    m.formula: m for m in (
        KnownMolecule("H2O", "Water", color="#ADD8E6"),
        KnownMolecule("O2", "Oxygen Gas", is_flammable=True, color="#E0FFFF"),
        KnownMolecule("H2", "Hydrogen Gas", MoleculeStability.HIGHLY_REACTIVE,
                      is_flammable=True, is_explosive=True, color="#FFFFFF"),
        KnownMolecule("CO2", "Carbon Dioxide", color="#808080"),
        KnownMolecule("CH4", "Methane", is_flammable=True, color="#D3D3D3"),
        KnownMolecule("NH3", "Ammonia", is_toxic=True, color="#FFFFE0"),
        KnownMolecule("H2O2", "Hydrogen Peroxide", MoleculeStability.METASTABLE,
                      is_explosive=True, color="#AFEEEE"),
        KnownMolecule("NaCl", "Sodium Chloride", color="#FFFFFF"),
    )
}


@dataclass
class ReactionResult:
    """Outcome of combining two molecules."""
    success: bool = False
    products: List[Molecule] = field(default_factory=list)
    energy_released: float = 0.0  # kJ/mol
    description: str = ""
    is_explosive: bool = False
    is_vigorous: bool = False
    is_combustion: bool = False
    is_decomposition: bool = False
    visual_effect: ReactionVisualEffect = ReactionVisualEffect.NONE


# -----------------------
# Builder
# -----------------------

class MoleculeBuilder:
    """
    Turns atoms and bonds into classified molecules and resolves the small
    set of atomic-level reactions the sandbox knows about.
    """

    def __init__(self, known: Optional[Dict[str, KnownMolecule]] = None):
        self.known_molecules: Dict[str, KnownMolecule] = dict(known if known is not None else KNOWN_MOLECULES)

    def build(self, atoms: List[Atom], bonds: List[Bond]) -> Molecule:
        """
        Build a molecule: derive its formula, classify its stability and copy
        name, flags and colour from the known-molecule table when the formula matches.
        """
        molecule = Molecule(atoms, bonds)
        molecule.calculate_formula()
        molecule.check_stability()

        known = self.known_molecules.get(molecule.formula)
        if known is not None:
            molecule.name = known.name
            molecule.is_explosive = known.is_explosive
            molecule.is_flammable = known.is_flammable
            molecule.is_toxic = known.is_toxic
            molecule.color = known.color

        logger.debug(f"Built {molecule!r} from {len(atoms)} atoms / {len(bonds)} bonds")
        return molecule

    def build_all(self, atoms: List[Atom], bonds: List[Bond]) -> List[Molecule]:
        """One molecule per connected component of the scene."""
        return [self.build(a, b) for a, b in extract_connected_components(atoms, bonds)]

    def known(self, formula: str) -> Optional[Molecule]:
        """Atom-less product molecule for a known formula, or None."""
        entry = self.known_molecules.get(formula)
        if entry is None:
            return None
        molecule = Molecule()
        molecule.formula = entry.formula
        molecule.name = entry.name
        molecule.stability = entry.stability
        molecule.is_explosive = entry.is_explosive
        molecule.is_flammable = entry.is_flammable
        molecule.is_toxic = entry.is_toxic
        molecule.color = entry.color
        return molecule

    def try_react(self, mol1: Molecule, mol2: Molecule) -> ReactionResult:
        """
        Match an unordered pair of molecules against the known atomic reactions.
        Returns an unsuccessful, product-less result when nothing matches.
        """
        pair = {mol1.formula, mol2.formula}
        result = ReactionResult()

        if pair == {"H2", "O2"}:
            result.success = True
            result.is_explosive = True
            result.energy_released = 572.0
            result.description = ("EXPLOSIVE REACTION! Hydrogen and oxygen combine to form water "
                                  "with a massive release of energy!")
            result.visual_effect = ReactionVisualEffect.EXPLOSION
            result.products = [self.known("H2O"), self.known("H2O")]
        elif pair == {"Na", "Cl"}:
            result.success = True
            result.is_vigorous = True
            result.energy_released = 411.0
            result.description = "Vigorous reaction! Sodium and chlorine form table salt with heat and light."
            result.visual_effect = ReactionVisualEffect.FLASH
            result.products = [self.known("NaCl")]
        elif pair == {"C", "O2"}:
            result.success = True
            result.is_combustion = True
            result.energy_released = 393.0
            result.description = "Combustion! Carbon burns in oxygen to form carbon dioxide."
            result.visual_effect = ReactionVisualEffect.FIRE
            result.products = [self.known("CO2")]
        elif "H2O2" in pair:
            result.success = True
            result.is_decomposition = True
            result.energy_released = 98.0
            result.description = "Hydrogen peroxide decomposes into water and oxygen gas!"
            result.visual_effect = ReactionVisualEffect.BUBBLING
            result.products = [self.known("H2O"), self.known("O2")]
        else:
            logger.debug(f"No reaction between {mol1.formula} and {mol2.formula}")

        return result

    def analyze_hazard(self, molecules: List[Molecule]):
        """Hazard level and warnings for a set of molecules (see `biochem.hazards`)."""
        from biochem.hazards import analyze_hazard
        return analyze_hazard(molecules)
