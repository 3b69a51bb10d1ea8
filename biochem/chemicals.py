from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class ChemicalType(Enum):
    ACID = "acid"
    BASE = "base"
    SALT = "salt"
    ORGANIC_COMPOUND = "organic_compound"
    ENZYME = "enzyme"
    NUCLEOTIDE = "nucleotide"
    AMINO_ACID = "amino_acid"
    LIPID = "lipid"
    SUGAR = "sugar"
    PROTEIN = "protein"
    DISINFECTANT = "disinfectant"
    ANTIBIOTIC = "antibiotic"
    OXIDIZER = "oxidizer"
    REDUCER = "reducer"
    OTHER = "other"


class ExperimentPhase(Enum):
    # atomic
    BUILDING_ATOMS = "building_atoms"
    SIMPLE_MOLECULES = "simple_molecules"
    COMPLEX_MOLECULES = "complex_molecules"
    # biochemistry
    AMINO_ACIDS = "amino_acids"
    PROTEINS = "proteins"
    LIPIDS = "lipids"
    RNA = "rna"
    DNA = "dna"
    CELL_MEMBRANE = "cell_membrane"
    PRIMITIVE_CELL = "primitive_cell"
    LIVING_ORGANISM = "living_organism"


@dataclass(frozen=True)
class Chemical:
    """A named compound used on the bench and as a weapon against organisms."""
    name: str
    formula: str
    description: str
    type: ChemicalType
    ph: float = 7.0
    color: str = "#00000000"
    is_caustic: bool = False
    is_oxidizer: bool = False
    is_reducer: bool = False
    toxicity: float = 0.0  # 0-10 scale
    reactivity: float = 0.0  # 0-10 scale
    concentration: float = 1.0


def _default_chemicals() -> Dict[str, Chemical]:
    C = ChemicalType
    return {
        # basic bench chemicals
        "Water": Chemical("Water", "H₂O", "Universal solvent", C.OTHER, 7.0, "#ADD8E6"),
        "HydrochloricAcid": Chemical("Hydrochloric Acid", "HCl", "Strong acid", C.ACID, 1.0, "#FFFF00",
                                     is_caustic=True, toxicity=8.0),
        "SodiumHydroxide": Chemical("Sodium Hydroxide", "NaOH", "Strong base", C.BASE, 14.0, "#FFFFFF",
                                    is_caustic=True, toxicity=8.0),
        "SodiumChloride": Chemical("Sodium Chloride", "NaCl", "Table salt", C.SALT, 7.0, "#FFFFFF"),

        # amino acids
        "Glycine": Chemical("Glycine", "C₂H₅NO₂", "Simplest amino acid", C.AMINO_ACID, 6.0, "#D3D3D3"),
        "Alanine": Chemical("Alanine", "C₃H₇NO₂", "Non-polar amino acid", C.AMINO_ACID, 6.0, "#D3D3D3"),
        "Cysteine": Chemical("Cysteine", "C₃H₇NO₂S", "Contains sulfur", C.AMINO_ACID, 5.0, "#FFFFE0"),

        # nucleotides
        "Adenine": Chemical("Adenine", "C₅H₅N₅", "DNA/RNA base", C.NUCLEOTIDE, 7.0, "#90EE90"),
        "Thymine": Chemical("Thymine", "C₅H₆N₂O₂", "DNA base", C.NUCLEOTIDE, 7.0, "#90EE90"),
        "Cytosine": Chemical("Cytosine", "C₄H₅N₃O", "DNA/RNA base", C.NUCLEOTIDE, 7.0, "#90EE90"),
        "Guanine": Chemical("Guanine", "C₅H₅N₅O", "DNA/RNA base", C.NUCLEOTIDE, 7.0, "#90EE90"),
        "Uracil": Chemical("Uracil", "C₄H₄N₂O₂", "RNA base", C.NUCLEOTIDE, 7.0, "#90EE90"),

        # lipids
        "Phospholipid": Chemical("Phospholipid", "C₄₂H₈₂NO₈P", "Cell membrane component", C.LIPID, 7.0, "#FFC0CB"),
        "Cholesterol": Chemical("Cholesterol", "C₂₇H₄₆O", "Membrane stabilizer", C.LIPID, 7.0, "#FFB6C1"),

        # sugars and energy
        "Glucose": Chemical("Glucose", "C₆H₁₂O₆", "Simple sugar, energy source", C.SUGAR, 7.0, "#FAFAD2"),
        "ATP": Chemical("ATP", "C₁₀H₁₆N₅O₁₃P₃", "Cellular energy currency", C.ORGANIC_COMPOUND, 7.0, "#FFA500"),

        # polymers
        "Protein": Chemical("Protein", "Variable", "Polymer of amino acids", C.PROTEIN, 7.0, "#F5F5DC"),
        "RNA": Chemical("RNA", "Variable", "Ribonucleic acid", C.NUCLEOTIDE, 7.0, "#800080"),
        "DNA": Chemical("DNA", "Variable", "Deoxyribonucleic acid", C.NUCLEOTIDE, 7.0, "#0000FF"),
        "CellMembrane": Chemical("Cell Membrane", "Variable", "Lipid bilayer", C.LIPID, 7.0, "#FFC0CB"),

        # disinfectants and antibiotics
        "Bleach": Chemical("Bleach", "NaClO", "Sodium hypochlorite", C.DISINFECTANT, 12.0, "#EEE8AA",
                           is_caustic=True, is_oxidizer=True, toxicity=9.0, reactivity=8.0),
        "Ethanol": Chemical("Ethanol", "C₂H₅OH", "Alcohol disinfectant", C.DISINFECTANT, 7.0, "#00000000",
                            toxicity=5.0, reactivity=4.0),
        "HydrogenPeroxide": Chemical("Hydrogen Peroxide", "H₂O₂", "Oxidizing agent", C.OXIDIZER, 6.2, "#E0FFFF",
                                     is_oxidizer=True, toxicity=6.0, reactivity=7.0),
        "Penicillin": Chemical("Penicillin", "C₁₆H₁₈N₂O₄S", "Antibiotic", C.ANTIBIOTIC, 7.0, "#FFFFFF",
                               toxicity=2.0, reactivity=3.0),
        "Lysozyme": Chemical("Lysozyme", "C₆₁₃H₉₅₉N₁₉₃O₁₉₅S₁₀", "Enzyme that breaks cell walls", C.ENZYME, 7.0,
                             "#FFFFE0", toxicity=1.0, reactivity=5.0),

        # strong oxidizers and acids
        "PotassiumPermanganate": Chemical("Potassium Permanganate", "KMnO₄", "Strong oxidizer", C.OXIDIZER, 7.0,
                                          "#800080", is_oxidizer=True, toxicity=7.0, reactivity=9.0),
        "SulfuricAcid": Chemical("Sulfuric Acid", "H₂SO₄", "Very strong acid", C.ACID, 0.3, "#FFFF00",
                                 is_caustic=True, is_oxidizer=True, toxicity=10.0, reactivity=9.0),
    }


PHASE_CHEMICALS: Dict[ExperimentPhase, List[str]] = {
    ExperimentPhase.AMINO_ACIDS: ["Water", "Glycine", "Alanine", "Cysteine"],
    ExperimentPhase.PROTEINS: ["Glycine", "Alanine", "Cysteine"],
    ExperimentPhase.RNA: ["Adenine", "Uracil", "Cytosine", "Guanine"],
    ExperimentPhase.DNA: ["Adenine", "Thymine", "Cytosine", "Guanine"],
    ExperimentPhase.LIPIDS: ["Phospholipid", "Cholesterol"],
    ExperimentPhase.CELL_MEMBRANE: ["Phospholipid", "Cholesterol"],
}

DISINFECTANT_TYPES = (ChemicalType.DISINFECTANT, ChemicalType.ANTIBIOTIC, ChemicalType.OXIDIZER)


class ChemicalCatalog:
    """
    Fixed table of named chemicals.

    Entries are addressed by catalog key ("HydrochloricAcid") or by their
    display name ("Hydrochloric Acid").
    """

    def __init__(self, chemicals: Optional[Dict[str, Chemical]] = None):
        self._chemicals: Dict[str, Chemical] = dict(chemicals if chemicals is not None else _default_chemicals())
        self._by_name: Dict[str, Chemical] = {c.name: c for c in self._chemicals.values()}

    def get(self, name: str) -> Optional[Chemical]:
        chemical = self._chemicals.get(name) or self._by_name.get(name)
        if chemical is None:
            logger.debug(f"Unknown chemical {name!r}")
        return chemical

    def __getitem__(self, name: str) -> Chemical:
        chemical = self.get(name)
        if chemical is None:
            raise KeyError(name)
        return chemical

    def __contains__(self, name: object) -> bool:
        return name in self._chemicals or name in self._by_name

    def __len__(self) -> int:
        return len(self._chemicals)

    def all(self) -> List[Chemical]:
        return list(self._chemicals.values())

    def keys(self) -> List[str]:
        return list(self._chemicals.keys())

    def for_phase(self, phase: ExperimentPhase) -> List[Chemical]:
        """Chemicals offered during an experiment phase; empty for phases without a bench."""
        return [self._chemicals[k] for k in PHASE_CHEMICALS.get(phase, [])]

    def disinfectants(self) -> List[Chemical]:
        """Everything usable against organisms: disinfectants, antibiotics, oxidizers and caustics."""
        return [c for c in self._chemicals.values() if c.type in DISINFECTANT_TYPES or c.is_caustic]
