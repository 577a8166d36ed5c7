#!/usr/bin/env python3
"""
Synthetic SVG vault generator for testing and benchmarking.
Generates nested icon folders with varied palettes, path counts and sizes.
"""

import random
import time
from pathlib import Path
from typing import Dict, List, Optional
import click
from faker import Faker
from loguru import logger

fake = Faker()


class VaultGenerator:
    """Generate synthetic SVG vault data."""

    # Palette mixes hex, named and functional colors
    PALETTE = [
        "#000000", "#ffffff", "#FF0000", "#00a8e8", "#ffb400", "#2ecc71",
        "#8e44ad", "#34495e", "currentColor", "none", "red", "teal",
        "rgb(12, 34, 56)", "hsl(210, 50%, 40%)",
    ]

    SIZES = [16, 20, 24, 32, 48, 64]

    def __init__(self, vault_path: Path, rng: Optional[random.Random] = None):
        self.vault_path = vault_path
        self.vault_path.mkdir(parents=True, exist_ok=True)
        self.rng = rng or random.Random()

    def folder_names(self, count: int) -> List[str]:
        """Distinct folder names like 'Social Media' or 'arrows_2'."""
        names = set()
        while len(names) < count:
            names.add(fake.word().capitalize() + self.rng.choice(["", " Icons", "_" + str(len(names))]))
        return sorted(names)

    def generate_svg(self) -> str:
        size = self.rng.choice(self.SIZES)
        paths = self.rng.randint(0, 8)
        stroke = self.rng.choice(self.PALETTE)

        body = []
        for _ in range(paths):
            fill = self.rng.choice(self.PALETTE)
            x, y = self.rng.randint(0, size), self.rng.randint(0, size)
            body.append(f'  <path d="M{x} {y}L{size} {size}Z" fill="{fill}"/>')
        if self.rng.random() < 0.3:
            body.append(f'  <circle cx="{size // 2}" cy="{size // 2}" r="{size // 4}" stroke="{stroke}"/>')

        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
            f'viewBox="0 0 {size} {size}">\n' + "\n".join(body) + "\n</svg>\n"
        )

    def generate(self, num_icons: int = 500, depth: int = 3, fanout: int = 4) -> Dict[str, float]:
        """Spread `num_icons` SVG files over a folder tree `depth` levels deep."""
        stats = {"icons": 0, "folders": 0, "total_size_kb": 0.0}

        folders = [self.vault_path]
        frontier = [self.vault_path]
        for _ in range(depth):
            next_frontier = []
            for parent in frontier:
                for name in self.folder_names(fanout):
                    child = parent / name
                    child.mkdir(exist_ok=True)
                    next_frontier.append(child)
            folders.extend(next_frontier)
            frontier = next_frontier
        stats["folders"] = len(folders) - 1

        logger.info(f"Generating {num_icons} icons in {stats['folders']} folders...")
        for i in range(num_icons):
            folder = self.rng.choice(folders)
            slug = fake.word().lower()
            svg = self.generate_svg()
            (folder / f"{slug}-{i}.svg").write_text(svg, encoding="utf-8")

            stats["icons"] += 1
            stats["total_size_kb"] += len(svg) / 1024

            if (i + 1) % 1000 == 0:
                logger.debug(f"  Generated {i + 1} icons")

        return stats


@click.command()
@click.option("--icons", default=500, help="Number of SVG files to generate")
@click.option("--depth", default=3, help="Folder nesting depth")
@click.option("--fanout", default=4, help="Sub-folders per folder")
@click.option("--out", type=click.Path(), required=True, help="Output vault path")
@click.option("--seed", type=int, help="Random seed for reproducibility")
@click.option("--index", "run_index", is_flag=True, help="Index the vault after generating it")
def main(icons: int, depth: int, fanout: int, out: str, seed: Optional[int], run_index: bool):
    """Generate a synthetic SVG vault for testing and benchmarking."""
    rng = random.Random(seed)
    if seed is not None:
        Faker.seed(seed)

    vault_path = Path(out)
    logger.info(f"Generating synthetic vault at {vault_path}")

    generator = VaultGenerator(vault_path, rng)
    stats = generator.generate(num_icons=icons, depth=depth, fanout=fanout)

    logger.success("Vault generated successfully!")
    logger.info(f"  Icons: {stats['icons']}")
    logger.info(f"  Folders: {stats['folders']}")
    logger.info(f"  Total size: {stats['total_size_kb']:.1f} KB")

    if run_index:
        from svgvault.daemon.indexers import VaultIndexer

        indexer = VaultIndexer()
        start = time.perf_counter()
        index = indexer.index(vault_path)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(f"Indexed {index.count} items in {elapsed:.1f}ms")


if __name__ == "__main__":
    main()
