import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from biochem.bonds import create_bond
from biochem.chemicals import ChemicalCatalog
from biochem.constants import DEFAULT_OUTBREAK_SIZE, LOGGING_LEVEL
from biochem.elements_data import ElementCatalog
from biochem.molecules import MoleculeBuilder
from biochem.population import PopulationSimulator
from biochem.reactions import ReactionMatcher

logger = logging.getLogger("biochem.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a headless outbreak simulation.")
    parser.add_argument("--outbreak", type=int, default=DEFAULT_OUTBREAK_SIZE, help="Number of founding organisms")
    parser.add_argument("--ticks", type=int, default=200, help="Number of update ticks")
    parser.add_argument("--dt", type=float, default=0.5, help="Delta time per tick")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible run")
    parser.add_argument("--chemical", type=str, default="Bleach", help="Chemical key or name to spray")
    parser.add_argument("--spray-every", type=int, default=20, help="Spray every N ticks (0 disables)")
    parser.add_argument("--radius", type=float, default=150.0, help="Spray radius in pixels")
    parser.add_argument("--elements", type=str, default=None, help="Custom elements JSON file")
    parser.add_argument("--atoms", type=str, default=None,
                        help="Comma-separated symbols bonded as a chain and analysed, e.g. H,O,H")
    parser.add_argument("--plot", type=str, default=None, help="Filename prefix for history plots")
    parser.add_argument("--log-level", type=str, default=LOGGING_LEVEL, help="Logging level")
    return parser


def analyse_chain(catalog: ElementCatalog, symbols: List[str], rng: np.random.Generator):
    """Bond the given atoms in order, then report the resulting molecules and hazard."""
    atoms = []
    for symbol in symbols:
        atom = catalog.lookup(symbol)
        if atom is None:
            logger.warning(f"Unknown element {symbol!r} skipped")
            continue
        atoms.append(atom)

    bonds = []
    for a, b in zip(atoms, atoms[1:]):
        bond = create_bond(a, b, rng=rng)
        if bond is not None:
            bonds.append(bond)

    builder = MoleculeBuilder()
    molecules = builder.build_all(atoms, bonds)
    for molecule in molecules:
        logger.info(f"Molecule {molecule.formula} ({molecule.name}): {molecule.stability.value}")

    hazard = builder.analyze_hazard(molecules)
    logger.info(f"Hazard: {hazard.level.name}")
    for warning in hazard.warnings:
        logger.info(f"  {warning}")
    return molecules, hazard


def run_outbreak(args) -> PopulationSimulator:
    catalog = ChemicalCatalog()
    chemical = catalog.get(args.chemical)
    if chemical is None:
        logger.warning(f"Unknown chemical {args.chemical!r}; outbreak will run unopposed")

    sim = PopulationSimulator(matcher=ReactionMatcher(catalog), seed=args.seed)
    sim.initialize_outbreak(args.outbreak)

    spray_ticks = []
    for _ in range(args.ticks):
        result = sim.update(args.dt)

        if chemical is not None and args.spray_every > 0 and sim.tick % args.spray_every == 0:
            center = sim.centroid()
            if center is not None:
                sim.apply_chemical(chemical, center, args.radius)
                spray_ticks.append(sim.tick)

        if sim.tick % 10 == 0:
            logger.info(f"Tick {sim.tick}: alive={result.alive} born={result.born} "
                        f"culled={result.culled} generation={sim.generations_evolved}")
        if sim.is_extinct():
            logger.info(f"Population extinct at tick {sim.tick}")
            break

    summary = sim.history.get_current_summary()
    logger.info(f"Finished: {summary['alive']} alive, peak {summary['peak_alive']}, "
                f"{sim.total_created} created, {sim.generations_evolved} generations")
    for name, value in sim.resistance_stats().items():
        logger.info(f"  resistance to {name}: {value:.3f}")

    if args.plot:
        from analysis.plots import plot_history  # delayed so matplotlib loads only when needed
        plot_history(sim.history, args.plot, spray_ticks=spray_ticks)

    return sim


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="[%(levelname)s] %(name)s: %(message)s")

    elements = ElementCatalog(args.elements)
    if args.atoms:
        rng = np.random.default_rng(args.seed)
        analyse_chain(elements, [s.strip() for s in args.atoms.split(",") if s.strip()], rng)

    run_outbreak(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
