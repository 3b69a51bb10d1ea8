from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union
import json
import logging

logger = logging.getLogger(__name__)

# Default path to elements.json shipped inside the package
ELEMENTS_JSON: Path = Path(__file__).parent / "data" / "elements.json"


class MaterialPhase(Enum):
    SOLID = "solid"
    LIQUID = "liquid"
    GAS = "gas"
    PLASMA = "plasma"


class DecayType(Enum):
    NONE = "none"
    ALPHA = "alpha"        # emits a helium nucleus
    BETA = "beta"          # electron emission
    GAMMA = "gamma"        # electromagnetic radiation
    POSITRON = "positron"  # beta+ decay
    FISSION = "fission"


@dataclass(frozen=True)
class ElementSpecies:
    """
    Immutable template for one chemical element.

    Runtime atoms reference a species instead of copying it, so the catalog
    can never be modified through an atom handed out by `ElementCatalog.lookup`.
    """
    symbol: str
    name: str
    atomic_number: int
    atomic_mass: float
    valence_electrons: int = 0
    max_bonds: int = 0
    electron_shells: Tuple[int, ...] = ()
    color: str = "#808080"
    electronegativity: float = 0.0
    reactivity: float = 0.0
    phase: MaterialPhase = MaterialPhase.SOLID

    # radiological
    is_radioactive: bool = False
    half_life: float = 0.0  # years, 0 = stable
    decay_type: DecayType = DecayType.NONE
    radiation_level: float = 0.0  # 0-10 scale

    # electrical
    electrical_conductivity: float = 0.0  # S/m
    ionization_energy: float = 0.0  # eV
    ion_charge: int = 0
    is_conductor: bool = False
    is_insulator: bool = False

    # thermal
    melting_point: float = 0.0  # Celsius
    boiling_point: float = 0.0  # Celsius
    thermal_conductivity: float = 0.0  # W/(m*K)
    heat_capacity: float = 0.0  # J/(mol*K)

    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def protons(self) -> int:
        return self.atomic_number

    @property
    def electrons(self) -> int:
        return self.atomic_number

    @property
    def neutrons(self) -> int:
        return int(self.atomic_mass - self.atomic_number)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ElementSpecies":
        """
        Build a species from one elements.json entry.

        Raises
        ------
        KeyError
            If symbol, name, atomic_number or atomic_mass is missing.
        ValueError
            If a phase or decay type is not recognised.
        """
        known = {
            "symbol", "name", "atomic_number", "atomic_mass", "valence_electrons",
            "max_bonds", "electron_shells", "cpk-hex", "electronegativity",
            "reactivity", "phase", "is_radioactive", "half_life", "decay_type",
            "radiation_level", "electrical_conductivity", "ionization_energy",
            "ion_charge", "is_conductor", "is_insulator", "melting_point",
            "boiling_point", "thermal_conductivity", "heat_capacity",
        }
        return cls(
            symbol=str(raw["symbol"]),
            name=str(raw["name"]),
            atomic_number=int(raw["atomic_number"]),
            atomic_mass=float(raw["atomic_mass"]),
            valence_electrons=int(raw.get("valence_electrons", 0)),
            max_bonds=int(raw.get("max_bonds", 0)),
            electron_shells=tuple(int(s) for s in raw.get("electron_shells", [])),
            color=str(raw.get("cpk-hex", "#808080")),
            electronegativity=float(raw.get("electronegativity", 0.0)),
            reactivity=float(raw.get("reactivity", 0.0)),
            phase=MaterialPhase(str(raw.get("phase", "solid")).lower()),
            is_radioactive=bool(raw.get("is_radioactive", False)),
            half_life=float(raw.get("half_life", 0.0)),
            decay_type=DecayType(str(raw.get("decay_type", "none")).lower()),
            radiation_level=float(raw.get("radiation_level", 0.0)),
            electrical_conductivity=float(raw.get("electrical_conductivity", 0.0)),
            ionization_energy=float(raw.get("ionization_energy", 0.0)),
            ion_charge=int(raw.get("ion_charge", 0)),
            is_conductor=bool(raw.get("is_conductor", False)),
            is_insulator=bool(raw.get("is_insulator", False)),
            melting_point=float(raw.get("melting_point", 0.0)),
            boiling_point=float(raw.get("boiling_point", 0.0)),
            thermal_conductivity=float(raw.get("thermal_conductivity", 0.0)),
            heat_capacity=float(raw.get("heat_capacity", 0.0)),
            extra={k: v for k, v in raw.items() if k not in known},
        )


def load_elements(path: Union[Path, str, None] = None) -> Dict[str, ElementSpecies]:
    """
    Load an elements JSON file into an ordered symbol -> species mapping.
    If path is not provided, uses the default ELEMENTS_JSON.

    Supports ``{"elements": [...]}``, a bare ``[...]`` list and ``{"H": {...}, ...}`` layouts.
    Entries that cannot be parsed are logged and skipped.

    Returns
    -------
    Dict[str, ElementSpecies]
        Mapping keyed by the element symbol exactly as written in the file.
    """
    if path is None:
        path = ELEMENTS_JSON
    path = Path(path)

    with open(path, "r", encoding="utf-8") as fh:
        raw = json.load(fh)

    entries: List[Dict[str, Any]] = []
    if isinstance(raw, dict) and "elements" in raw:
        entries = list(raw["elements"])
    elif isinstance(raw, dict):
        for k, v in raw.items():
            if isinstance(v, dict):
                entries.append({"symbol": k, **v})
    elif isinstance(raw, list):
        entries = list(raw)
    else:
        raise ValueError(f"Elements file {path} must contain a list or mapping at the root.")

    out: Dict[str, ElementSpecies] = {}
    for el in entries:
        try:
            species = ElementSpecies.from_dict(el)
        except (KeyError, TypeError, ValueError):
            logger.exception(f"Skipping malformed element entry in {path}: {el!r}")
            continue
        out[species.symbol] = species

    logger.info(f"Loaded {len(out)} elements from {path}")
    return out


class ElementCatalog:
    """
    Read-only table of element species.

    `lookup` hands out fresh `Atom` instances; the species table itself is
    never mutated after loading.
    """

    def __init__(self, path: Union[Path, str, None] = None):
        self._species: Dict[str, ElementSpecies] = load_elements(path)

    def species(self, symbol: str) -> Optional[ElementSpecies]:
        """Return the immutable species for a symbol, or None if unknown."""
        return self._species.get(symbol)

    def lookup(self, symbol: str):
        """
        Return a new Atom cloned from the catalog entry, or None if the symbol is unknown.

        Args:
            symbol (str): Element symbol, case-sensitive ("Na", not "NA").

        Returns:
            Optional[Atom]: Fresh atom with no bonds.
        """
        # Delay import to avoid circular dependency
        from biochem.atoms import Atom

        species = self._species.get(symbol)
        if species is None:
            logger.debug(f"Unknown element symbol {symbol!r}")
            return None
        return Atom(species)

    def all_species(self) -> List:
        """Fresh atoms for every species, in catalog order."""
        from biochem.atoms import Atom
        return [Atom(s) for s in self._species.values()]

    def basic_atoms(self) -> List:
        """The four building blocks offered first: H, C, N, O."""
        return [a for a in (self.lookup(s) for s in ("H", "C", "N", "O")) if a is not None]

    def symbols(self) -> List[str]:
        return list(self._species.keys())

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._species

    def __len__(self) -> int:
        return len(self._species)

    def __iter__(self) -> Iterator[ElementSpecies]:
        return iter(self._species.values())
