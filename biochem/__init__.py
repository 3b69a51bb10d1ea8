# biochem/__init__.py
__all__ = [
    "ElementCatalog", "Atom", "Bond", "create_bond", "MoleculeBuilder",
    "analyze_hazard", "ChemicalCatalog", "ReactionMatcher", "Organism",
    "PopulationSimulator", "PopulationMetrics"
]

from biochem.elements_data import ElementCatalog
from biochem.atoms import Atom
from biochem.bonds import Bond, create_bond
from biochem.molecules import MoleculeBuilder
from biochem.hazards import analyze_hazard
from biochem.chemicals import ChemicalCatalog
from biochem.reactions import ReactionMatcher
from biochem.organisms import Organism
from biochem.population import PopulationSimulator
from biochem.metrics import PopulationMetrics
