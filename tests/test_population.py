import numpy as np
import pytest

from biochem.chemicals import Chemical, ChemicalCatalog, ChemicalType
from biochem.organisms import Organism, OrganismType
from biochem.population import PopulationSimulator


@pytest.fixture
def caustic():
    return Chemical("Test Caustic", "X", "", ChemicalType.ACID, toxicity=5.0, is_caustic=True)


def make_sim(**kwargs):
    kwargs.setdefault("seed", 42)
    return PopulationSimulator(**kwargs)


def test_initialize_outbreak():
    sim = make_sim()
    founders = sim.initialize_outbreak(10)
    assert len(founders) == 10
    assert sim.alive_count() == 10
    assert sim.total_created == 10
    for o in sim.organisms:
        assert o.type is OrganismType.VIRUS
        assert o.generation == 1
        assert 15.0 <= o.size < 25.0
        assert 0 <= o.pos[0] <= sim.width and 0 <= o.pos[1] <= sim.height

    sim.initialize_outbreak(5)
    assert len(sim.organisms) == 5
    assert sim.total_created == 15


def test_spray_at_center_deals_full_damage(caustic):
    sim = make_sim()
    organism = sim.add_organism(Organism(pos=(100, 100)))
    affected = sim.apply_chemical(caustic, (100, 100), 100.0)
    assert affected == [organism]
    assert organism.health == pytest.approx(25.0)
    assert organism.resistances["Test Caustic"] == pytest.approx(0.05)


def test_falloff_reaches_zero_at_radius(caustic):
    sim = make_sim()
    edge = sim.add_organism(Organism(pos=(200, 100)))
    outside = sim.add_organism(Organism(pos=(201, 100)))
    affected = sim.apply_chemical(caustic, (100, 100), 100.0)
    assert affected == [edge]
    assert edge.health == 100.0
    assert "Test Caustic" not in edge.resistances
    assert outside.health == 100.0


def test_damage_decreases_with_distance(caustic):
    sim = make_sim()
    near = sim.add_organism(Organism(pos=(110, 100)))
    far = sim.add_organism(Organism(pos=(150, 100)))
    sim.apply_chemical(caustic, (100, 100), 100.0)
    assert near.health < far.health < 100.0


def test_lethal_spray_kills_without_adapting(caustic):
    sim = make_sim()
    weak = sim.add_organism(Organism(pos=(0, 0), health=50.0))
    result = sim.apply_chemical_detailed(caustic, (0, 0), 50.0)
    assert result.killed == [weak]
    assert result.adapted == []
    assert not weak.is_alive
    assert "Test Caustic" not in weak.resistances

    tick = sim.update(0.0)
    assert tick.removed_dead == 1
    assert sim.organisms == []
    assert sim.is_extinct()


def test_dead_organisms_are_not_sprayed(caustic):
    sim = make_sim()
    dead = sim.add_organism(Organism(pos=(0, 0)))
    dead.take_damage(100.0)
    assert sim.apply_chemical(caustic, (0, 0), 10.0) == []


def test_resistance_under_repeated_spraying_is_capped():
    sim = make_sim()
    bleach = ChemicalCatalog()["Bleach"]
    tough = sim.add_organism(Organism(pos=(50, 50), health=1e9))
    seen = []
    for _ in range(40):
        sim.apply_chemical(bleach, (50, 50), 100.0)
        seen.append(tough.resistances.get("Bleach", 0.0))
    assert all(b >= a for a, b in zip(seen, seen[1:]))
    assert max(seen) <= 0.95
    assert sim.average_resistance("Bleach") == pytest.approx(seen[-1])
    assert sim.average_resistance("Ethanol") == 0.0


def test_population_never_exceeds_cap():
    sim = make_sim(max_population=50)
    for i in range(60):
        sim.add_organism(Organism(pos=(i * 10, 300), reproduction_rate=1.0))
    for _ in range(5):
        result = sim.update(1.0)
        assert len(sim.organisms) <= 50
        assert result.alive <= 50
    assert sim.tick == 5


def test_cap_keeps_highest_generation_in_stable_order():
    sim = make_sim(max_population=5)
    old = [sim.add_organism(Organism(generation=1, health=50.0, reproduction_rate=0.0)) for _ in range(3)]
    new = [sim.add_organism(Organism(generation=3, health=50.0, reproduction_rate=0.0)) for _ in range(4)]
    result = sim.update(1.0)
    assert result.culled == 2
    assert sim.organisms == new + old[:1]


def test_healthy_organisms_reproduce():
    sim = make_sim()
    for i in range(20):
        sim.add_organism(Organism(pos=(300 + i, 300), reproduction_rate=0.0))
    result = sim.update(1.0)
    assert result.spread == 0
    assert result.reproduced == 2
    assert len(sim.organisms) == 22
    assert sim.total_created == 22
    assert sim.generations_evolved == 2


def test_single_healthy_organism_does_not_reproduce():
    sim = make_sim()
    sim.add_organism(Organism(reproduction_rate=0.0))
    sim.add_organism(Organism(reproduction_rate=0.0, health=60.0))
    assert sim.update(1.0).reproduced == 0


def test_spread_lands_on_screen_and_moves_stay_in_bounds():
    sim = make_sim(width=200, height=100)
    sim.add_organism(Organism(pos=(0, 0), reproduction_rate=1.0, health=50.0))
    for _ in range(30):
        sim.update(1.0)
    assert sim.generations_evolved > 1
    for o in sim.organisms:
        assert 0.0 <= o.pos[0] <= 200.0
        assert 0.0 <= o.pos[1] <= 100.0


def test_seeded_runs_are_reproducible():
    def run():
        sim = make_sim(seed=7)
        sim.initialize_outbreak(10)
        for _ in range(40):
            sim.update(0.5)
        return [tuple(o.pos) for o in sim.organisms], sim.total_created

    assert run() == run()


def test_history_and_snapshot(caustic):
    sim = make_sim()
    sim.initialize_outbreak(10)
    sim.update(0.5)
    sim.apply_chemical(caustic, sim.centroid(), 1000.0)
    sim.update(0.5)

    assert len(sim.history) == 2
    assert "Test Caustic" in sim.resistance_stats()
    summary = sim.history.get_current_summary()
    assert summary["alive"] == sim.alive_count()
    assert summary["resistance"]["Test Caustic"] > 0.0

    snap = sim.snapshot()
    assert snap["tick"] == 2
    assert snap["alive"] == len(snap["organisms"])


def test_set_screen_size():
    sim = make_sim()
    sim.set_screen_size(1024, 768)
    assert (sim.width, sim.height) == (1024.0, 768.0)
    assert sim.centroid() is None
    assert np.allclose(sim._clamp(np.array([2000.0, -5.0])), [1024.0, 0.0])


def test_spread_clones_land_in_annulus_around_parent():
    sim = make_sim()
    parent_pos = np.array([400.0, 300.0])
    for _ in range(20):
        sim.add_organism(Organism(pos=parent_pos, reproduction_rate=1.0, health=50.0))

    spawned = sim._spread(1.0)
    assert spawned == 20
    for child in sim.organisms[20:]:
        distance = child.distance_to(parent_pos)
        assert 50.0 <= distance < 150.0
        assert child.generation == 2
