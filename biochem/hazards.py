"""
Hazard assessment for the molecules currently on the workbench.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional
import logging

from biochem.atoms import Atom
from biochem.constants import RADIATION_EXTREME, RADIATION_HIGH, RADIATION_MODERATE
from biochem.molecules import Molecule, MoleculeStability

logger = logging.getLogger(__name__)


class HazardLevel(IntEnum):
    SAFE = 0
    LOW = 1
    MODERATE = 2
    HIGH = 3
    EXTREME = 4


@dataclass
class Hazard:
    level: HazardLevel = HazardLevel.SAFE
    warnings: List[str] = field(default_factory=list)


def format_half_life(years: float) -> str:
    """Human-readable half-life picking a sensible unit."""
    if years < 1e-6:
        return f"{years * 365.25 * 24 * 3600:.2f} seconds"
    if years < 1.0:
        return f"{years * 365.25:.1f} days"
    if years >= 1e6:
        return f"{years / 1e6:.1f} million years"
    return f"{years:,.0f} years"


def _radioactive_details(atoms: List[Atom]) -> List[str]:
    return [
        f"{a.name} ({a.symbol}): {a.decay_type.value} decay, half-life {format_half_life(a.half_life)}"
        for a in atoms
    ]


def analyze_hazard(molecules: Iterable[Molecule], loose_atoms: Optional[Iterable[Atom]] = None) -> Hazard:
    """
    Derive a hazard level from the flags of the given molecules and their atoms.

    The first matching rule wins, from most to least severe:
    radiation >= 9, explosive with flammable, radiation >= 7, flammable with
    an oxidizer (O2), radiation >= 4, explosive, any radioactive atom,
    unstable molecule.

    Args:
        molecules: Molecules to inspect.
        loose_atoms: Optional atoms not yet part of any molecule.

    Returns:
        Hazard: level plus the warnings explaining it.
    """
    molecules = list(molecules)
    atoms: List[Atom] = [a for m in molecules for a in m.atoms]
    if loose_atoms is not None:
        atoms.extend(loose_atoms)

    radioactive = [a for a in atoms if a.is_radioactive]
    max_radiation = max((a.radiation_level for a in radioactive), default=0.0)
    has_explosive = any(m.is_explosive for m in molecules)
    has_flammable = any(m.is_flammable for m in molecules)
    has_oxidizer = any(m.formula == "O2" for m in molecules)
    has_unstable = any(m.stability is MoleculeStability.UNSTABLE for m in molecules)

    hazard = Hazard()
    if max_radiation >= RADIATION_EXTREME:
        hazard.level = HazardLevel.EXTREME
        hazard.warnings.append(f"EXTREME DANGER: Lethal radiation level ({max_radiation:.1f}/10)!")
        hazard.warnings.extend(_radioactive_details(radioactive))
    elif has_explosive and has_flammable:
        hazard.level = HazardLevel.EXTREME
        hazard.warnings.append("EXTREME DANGER: Explosive and flammable materials in proximity!")
    elif max_radiation >= RADIATION_HIGH:
        hazard.level = HazardLevel.HIGH
        hazard.warnings.append(f"HIGH DANGER: Strong radiation source ({max_radiation:.1f}/10). Shielding required!")
        hazard.warnings.extend(_radioactive_details(radioactive))
    elif has_flammable and has_oxidizer:
        hazard.level = HazardLevel.HIGH
        hazard.warnings.append("HIGH DANGER: Flammable material with oxidizer - fire/explosion risk!")
    elif max_radiation >= RADIATION_MODERATE:
        hazard.level = HazardLevel.MODERATE
        hazard.warnings.append(f"CAUTION: Moderate radiation ({max_radiation:.1f}/10). Limit exposure time.")
        hazard.warnings.extend(_radioactive_details(radioactive))
    elif has_explosive:
        hazard.level = HazardLevel.MODERATE
        hazard.warnings.append("CAUTION: Explosive material present. Handle carefully.")
    elif radioactive:
        hazard.level = HazardLevel.LOW
        hazard.warnings.append("Warning: Radioactive material detected.")
        hazard.warnings.extend(_radioactive_details(radioactive))
    elif has_unstable:
        hazard.level = HazardLevel.LOW
        hazard.warnings.append("Warning: Unstable molecule detected.")

    if hazard.level is not HazardLevel.SAFE:
        logger.info(f"Hazard {hazard.level.name} across {len(molecules)} molecules")
    return hazard
