import numpy as np
import pytest

from biochem.organisms import Organism, OrganismType


def test_damage_kills_at_zero():
    organism = Organism(health=50.0)
    taken = organism.take_damage(60.0)
    assert taken == 60.0
    assert organism.health == 0.0
    assert not organism.is_alive


def test_damage_below_health_keeps_alive():
    organism = Organism()
    organism.take_damage(99.0)
    assert organism.is_alive
    assert organism.health == pytest.approx(1.0)


def test_named_damage_uses_own_resistance():
    organism = Organism(resistances={"Bleach": 0.25})
    assert organism.take_damage(40.0, "Bleach") == pytest.approx(30.0)
    assert organism.take_damage(40.0, "Ethanol") == pytest.approx(40.0)
    assert organism.health == pytest.approx(30.0)


def test_resistance_is_monotonic_and_capped():
    organism = Organism()
    history = []
    for _ in range(30):
        organism.develop_resistance("Bleach", 0.05)
        history.append(organism.resistances["Bleach"])
    assert all(b >= a for a, b in zip(history, history[1:]))
    assert max(history) == pytest.approx(0.95)


def test_clone_without_mutation():
    parent = Organism(pos=(10, 20), generation=3, organism_type=OrganismType.VIRUS,
                      resistances={"Bleach": 0.3}, color=(10, 20, 30), size=12.0)
    child = parent.clone()
    assert child.uid != parent.uid
    assert child.generation == 4
    assert child.type is OrganismType.VIRUS
    assert child.resistances == {"Bleach": 0.3}
    assert child.color == (10, 20, 30) and child.size == 12.0
    assert np.allclose(child.pos, parent.pos)

    child.resistances["Bleach"] = 0.9
    child.pos += 1.0
    assert parent.resistances["Bleach"] == 0.3
    assert np.allclose(parent.pos, [10, 20])


def test_mutation_raises_resistance_up_to_one():
    parent = Organism(mutation_rate=1.0, resistances={"Bleach": 0.95})
    child = parent.clone(mutate=True, rng=np.random.default_rng(3))
    assert child.resistances["Bleach"] == pytest.approx(1.0)
    assert all(0 <= c <= 255 for c in child.color)


def test_zero_mutation_rate_changes_nothing():
    parent = Organism(mutation_rate=0.0, resistances={"Bleach": 0.5}, color=(1, 2, 3), size=9.0)
    child = parent.clone(mutate=True, rng=np.random.default_rng(0))
    assert child.resistances == {"Bleach": 0.5}
    assert child.color == (1, 2, 3)
    assert child.size == 9.0


def test_distance_and_snapshot():
    organism = Organism(pos=(3, 4))
    assert organism.distance_to((0, 0)) == pytest.approx(5.0)
    data = organism.to_dict()
    assert data["pos"] == [3.0, 4.0]
    assert data["type"] == "single_cell"
    assert data["is_alive"] is True
