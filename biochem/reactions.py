from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import logging

from biochem.chemicals import Chemical, ChemicalCatalog, ChemicalType

logger = logging.getLogger(__name__)

CAUSTIC_DAMAGE_FACTOR = 1.5
OXIDIZER_DAMAGE_FACTOR = 1.3
TOXICITY_DAMAGE_SCALE = 10.0


@dataclass(frozen=True)
class ChemicalReaction:
    reactants: Tuple[Chemical, ...]
    products: Tuple[Chemical, ...]
    description: str = ""
    is_exothermic: bool = False
    energy_change: float = 0.0  # kJ/mol
    visual_effect: Optional[str] = None  # colour of the mixture
    visual_description: str = ""

    @property
    def reactant_names(self) -> List[str]:
        return [c.name for c in self.reactants]

    @property
    def product_names(self) -> List[str]:
        return [c.name for c in self.products]


def default_reactions(catalog: ChemicalCatalog) -> List[ChemicalReaction]:
    """Reaction table in matching order; the first match wins."""
    c = catalog
    return [
        ChemicalReaction(
            reactants=(c["HydrochloricAcid"], c["SodiumHydroxide"]),
            products=(c["SodiumChloride"], c["Water"]),
            description="Neutralization reaction produces salt and water",
            is_exothermic=True,
            energy_change=-57.3,
            visual_effect="#FFFFFF",
            visual_description="Solution becomes warm and clear",
        ),
        ChemicalReaction(
            reactants=(c["Glycine"], c["Alanine"], c["Cysteine"]),
            products=(c["Protein"],),
            description="Peptide bonds form between amino acids",
            visual_effect="#F5F5DC",
            visual_description="Amino acids link together forming a chain",
        ),
        ChemicalReaction(
            reactants=(c["Adenine"], c["Uracil"], c["Cytosine"], c["Guanine"]),
            products=(c["RNA"],),
            description="Nucleotides polymerize into RNA strand",
            visual_effect="#800080",
            visual_description="Nucleotides connect forming a twisted strand",
        ),
        ChemicalReaction(
            reactants=(c["Adenine"], c["Thymine"], c["Cytosine"], c["Guanine"]),
            products=(c["DNA"],),
            description="Nucleotides form double helix DNA",
            visual_effect="#0000FF",
            visual_description="Double helix structure emerges",
        ),
        ChemicalReaction(
            reactants=(c["Phospholipid"], c["Cholesterol"]),
            products=(c["CellMembrane"],),
            description="Phospholipids self-assemble into bilayer",
            visual_effect="#FFC0CB",
            visual_description="Lipids arrange into a flexible membrane",
        ),
        ChemicalReaction(
            reactants=(c["Bleach"], c["HydrochloricAcid"]),
            products=(c["Water"], c["SodiumChloride"]),
            description="DANGEROUS: Releases toxic chlorine gas!",
            is_exothermic=True,
            visual_effect="#9ACD32",
            visual_description="Toxic yellow-green gas forms - HAZARDOUS!",
        ),
    ]


class ReactionMatcher:
    """
    Matches a beaker of named chemicals against the reaction table and
    scores chemicals as weapons against organisms.
    """

    def __init__(self,
                 catalog: Optional[ChemicalCatalog] = None,
                 reactions: Optional[List[ChemicalReaction]] = None):
        self.catalog = catalog if catalog is not None else ChemicalCatalog()
        self.reactions: List[ChemicalReaction] = (
            list(reactions) if reactions is not None else default_reactions(self.catalog)
        )

    def try_react(self, chemicals: Iterable[Chemical]) -> Optional[ChemicalReaction]:
        """
        Return the first reaction whose reactant names equal the provided
        names as a multiset (order-free, count-sensitive), or None.
        """
        provided = Counter(c.name for c in chemicals)
        for reaction in self.reactions:
            if Counter(reaction.reactant_names) == provided:
                logger.debug(f"Reaction matched: {' + '.join(reaction.reactant_names)}")
                return reaction
        logger.debug(f"No reaction for {sorted(provided.elements())}")
        return None

    def reaction_color(self, chem1: Chemical, chem2: Chemical) -> Optional[str]:
        reaction = self.try_react([chem1, chem2])
        return reaction.visual_effect if reaction is not None else None

    @staticmethod
    def will_react_dangerously(chem1: Chemical, chem2: Chemical) -> bool:
        """Acid with bleach, or a caustic acid with a caustic base, in either order."""
        for a, b in ((chem1, chem2), (chem2, chem1)):
            if a.type is ChemicalType.ACID and b.name == "Bleach":
                return True
            if (a.is_caustic and a.type is ChemicalType.ACID
                    and b.is_caustic and b.type is ChemicalType.BASE):
                return True
        return False

    @staticmethod
    def calculate_damage(chemical: Chemical, organism) -> float:
        """
        Damage dealt by a full dose of `chemical` to `organism`.

        toxicity * 10, times 1.5 if caustic and 1.3 if an oxidizer, reduced by
        the organism's resistance to that chemical.
        """
        damage = chemical.toxicity * TOXICITY_DAMAGE_SCALE
        if chemical.is_caustic:
            damage *= CAUSTIC_DAMAGE_FACTOR
        if chemical.is_oxidizer:
            damage *= OXIDIZER_DAMAGE_FACTOR
        resistance = organism.resistances.get(chemical.name, 0.0)
        return damage * (1.0 - resistance)

    damage_to = calculate_damage
