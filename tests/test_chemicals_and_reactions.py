import numpy as np
import pytest

from biochem.chemicals import Chemical, ChemicalCatalog, ChemicalType, ExperimentPhase
from biochem.organisms import Organism
from biochem.reactions import ReactionMatcher


@pytest.fixture(scope="module")
def catalog():
    return ChemicalCatalog()


@pytest.fixture(scope="module")
def matcher(catalog):
    return ReactionMatcher(catalog)


def test_catalog_lookup_by_key_and_name(catalog):
    assert catalog.get("HydrochloricAcid") is catalog.get("Hydrochloric Acid")
    assert catalog["Bleach"].is_oxidizer
    assert catalog.get("Unobtainium") is None
    with pytest.raises(KeyError):
        catalog["Unobtainium"]
    assert "Sodium Hydroxide" in catalog


def test_catalog_phase_and_disinfectants(catalog):
    assert [c.name for c in catalog.for_phase(ExperimentPhase.RNA)] == ["Adenine", "Uracil", "Cytosine", "Guanine"]
    assert catalog.for_phase(ExperimentPhase.BUILDING_ATOMS) == []
    names = {c.name for c in catalog.disinfectants()}
    assert {"Bleach", "Penicillin", "Hydrochloric Acid"} <= names
    assert "Glucose" not in names


def test_neutralization(catalog, matcher):
    reaction = matcher.try_react([catalog["HydrochloricAcid"], catalog["SodiumHydroxide"]])
    assert reaction is not None
    assert reaction.product_names == ["Sodium Chloride", "Water"]
    assert reaction.is_exothermic
    assert reaction.energy_change == pytest.approx(-57.3)


def test_matching_ignores_order_but_not_counts(catalog, matcher):
    acid, base = catalog["HydrochloricAcid"], catalog["SodiumHydroxide"]
    assert matcher.try_react([base, acid]) is not None
    assert matcher.try_react([acid, base, base]) is None
    assert matcher.try_react([acid]) is None
    assert matcher.try_react([]) is None


def test_nucleotides_pick_rna_or_dna(catalog, matcher):
    rna = matcher.try_react([catalog[n] for n in ("Guanine", "Cytosine", "Uracil", "Adenine")])
    dna = matcher.try_react([catalog[n] for n in ("Adenine", "Thymine", "Cytosine", "Guanine")])
    assert rna.product_names == ["RNA"]
    assert dna.product_names == ["DNA"]


def test_reaction_color(catalog, matcher):
    assert matcher.reaction_color(catalog["Bleach"], catalog["HydrochloricAcid"]) == "#9ACD32"
    assert matcher.reaction_color(catalog["Water"], catalog["Glucose"]) is None


def test_dangerous_combinations(catalog):
    acid, base, bleach = catalog["HydrochloricAcid"], catalog["SodiumHydroxide"], catalog["Bleach"]
    assert ReactionMatcher.will_react_dangerously(acid, bleach)
    assert ReactionMatcher.will_react_dangerously(bleach, acid)
    assert ReactionMatcher.will_react_dangerously(base, acid)
    assert not ReactionMatcher.will_react_dangerously(catalog["Water"], bleach)
    assert not ReactionMatcher.will_react_dangerously(catalog["Glucose"], catalog["Ethanol"])


def test_damage_formula(catalog):
    organism = Organism()
    caustic = Chemical("Test Caustic", "X", "", ChemicalType.ACID, toxicity=5.0, is_caustic=True)
    assert ReactionMatcher.calculate_damage(caustic, organism) == pytest.approx(75.0)
    assert ReactionMatcher.calculate_damage(catalog["Bleach"], organism) == pytest.approx(9 * 10 * 1.5 * 1.3)
    assert ReactionMatcher.calculate_damage(catalog["Water"], organism) == 0.0


def test_damage_reduced_by_resistance(catalog):
    organism = Organism(resistances={"Bleach": 0.5})
    full = ReactionMatcher.calculate_damage(catalog["Bleach"], Organism())
    assert ReactionMatcher.calculate_damage(catalog["Bleach"], organism) == pytest.approx(full / 2)


def test_damage_strictly_increases_with_toxicity():
    organism = Organism(resistances={"Test Agent": 0.3})
    for caustic in (False, True):
        for oxidizer in (False, True):
            damages = [
                ReactionMatcher.calculate_damage(
                    Chemical("Test Agent", "X", "", ChemicalType.OTHER, toxicity=t,
                             is_caustic=caustic, is_oxidizer=oxidizer),
                    organism)
                for t in np.linspace(0.0, 10.0, 21)
            ]
            assert all(b > a for a, b in zip(damages, damages[1:]))
