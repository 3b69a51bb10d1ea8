import json

import numpy as np
import pytest

from biochem.atoms import AtomState
from biochem.bonds import Bond, BondOrder, bond_energy, break_bond, create_bond
from biochem.elements_data import DecayType, ElementCatalog, MaterialPhase, load_elements


@pytest.fixture(scope="module")
def catalog():
    return ElementCatalog()


def test_catalog_lookup_returns_fresh_atoms(catalog):
    a = catalog.lookup("H")
    b = catalog.lookup("H")
    assert a is not b
    assert a.uid != b.uid
    assert a.species is b.species
    assert a.bonds == [] and b.bonds == []
    assert a.max_bonds == 1


def test_catalog_lookup_unknown_and_case_sensitive(catalog):
    assert catalog.lookup("Xx") is None
    assert catalog.lookup("NA") is None
    assert catalog.lookup("Na").name == "Sodium"


def test_catalog_basic_atoms_and_radioactive(catalog):
    assert [a.symbol for a in catalog.basic_atoms()] == ["H", "C", "N", "O"]
    u = catalog.lookup("U")
    assert u.is_radioactive
    assert u.state is AtomState.RADIOACTIVE
    assert u.decay_type is DecayType.ALPHA
    assert catalog.species("Rn").phase is MaterialPhase.GAS
    assert catalog.species("Fe").neutrons == 29


def test_mutating_atom_leaves_catalog_untouched(catalog):
    a = catalog.lookup("O")
    a.pos += 5.0
    create_bond(a, catalog.lookup("H"))
    fresh = catalog.lookup("O")
    assert fresh.bonds == []
    assert np.allclose(fresh.pos, [0.0, 0.0])


def test_create_bond_respects_capacity(catalog):
    rng = np.random.default_rng(1)
    h1, h2, h3 = catalog.lookup("H"), catalog.lookup("H"), catalog.lookup("H")
    bond = create_bond(h1, h2, rng=rng)
    assert bond is not None
    assert bond in h1.bonds and bond in h2.bonds
    assert bond.energy == 436.0
    assert 1.0 <= bond.length < 1.5

    assert create_bond(h1, h3, rng=rng) is None
    assert len(h1.bonds) == 1
    assert h3.bonds == []


def test_bond_counts_never_exceed_max_bonds(catalog):
    rng = np.random.default_rng(7)
    carbon = catalog.lookup("C")
    hydrogens = [catalog.lookup("H") for _ in range(6)]
    made = [create_bond(carbon, h, rng=rng) for h in hydrogens]
    assert sum(b is not None for b in made) == 4
    assert len(carbon.bonds) == carbon.max_bonds
    assert not carbon.can_bond()


def test_self_bond_refused(catalog):
    o = catalog.lookup("O")
    assert create_bond(o, o) is None
    with pytest.raises(ValueError):
        Bond(o, o)


def test_bond_energy_lookup_is_order_free():
    assert bond_energy("O", "H") == bond_energy("H", "O") == 463.0
    assert bond_energy("Fe", "Cu") == 300.0
    assert bond_energy("N", "N", BondOrder.TRIPLE) == 945.0 * 3


def test_ionic_stability_depends_on_electronegativity(catalog):
    na_cl = create_bond(catalog.lookup("Na"), catalog.lookup("Cl"), BondOrder.IONIC)
    assert na_cl.is_stable
    c_h = create_bond(catalog.lookup("C"), catalog.lookup("H"), BondOrder.IONIC)
    assert not c_h.is_stable
    na_f = create_bond(catalog.lookup("Na"), catalog.lookup("F"))
    assert not na_f.is_stable


def test_break_bond_detaches_both_sides(catalog):
    c, o = catalog.lookup("C"), catalog.lookup("O")
    bond = create_bond(c, o)
    assert c.is_bonded_to(o)
    assert c.neighbours() == [o]
    break_bond(bond)
    assert c.bonds == [] and o.bonds == []


def test_load_elements_skips_malformed_entries(tmp_path):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"elements": [
        {"symbol": "Xe", "name": "Xenon", "atomic_number": 54, "atomic_mass": 131.29, "phase": "gas"},
        {"symbol": "Bad", "name": "Broken"},
    ]}), encoding="utf-8")
    species = load_elements(path)
    assert list(species) == ["Xe"]
    assert species["Xe"].max_bonds == 0


def test_load_elements_accepts_mapping_layout(tmp_path):
    path = tmp_path / "mapping.json"
    path.write_text(json.dumps({
        "Ne": {"name": "Neon", "atomic_number": 10, "atomic_mass": 20.18, "phase": "gas"},
    }), encoding="utf-8")
    assert len(ElementCatalog(path)) == 1


def test_load_elements_accepts_list_root(tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([
        {"symbol": "Xe", "name": "Xenon", "atomic_number": 54, "atomic_mass": 131.29, "phase": "gas"},
        "not an element",
    ]), encoding="utf-8")
    species = load_elements(path)
    assert list(species) == ["Xe"]
    assert species["Xe"].phase is MaterialPhase.GAS


def test_load_elements_rejects_scalar_root(tmp_path):
    path = tmp_path / "scalar.json"
    path.write_text("42", encoding="utf-8")
    with pytest.raises(ValueError):
        load_elements(path)
