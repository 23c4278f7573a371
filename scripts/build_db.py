#!/usr/bin/env python3
"""
Build do banco SQLite a partir dos seeds em data/seed/.

Uso:
    python scripts/build_db.py
    python scripts/build_db.py --tier free --db-path /tmp/lexcn.db

O banco anterior so e substituido se o build terminar sem erro.
"""
from __future__ import annotations

import sys
import os
import logging
import argparse

# Adiciona raiz do projeto ao path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from lexcn.config import settings
from lexcn.db.builder import build_database


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    parser = argparse.ArgumentParser(description="Build do banco de legislacao")
    parser.add_argument("--seed-dir", type=str, default=settings.SEED_DIR)
    parser.add_argument("--db-path", type=str, default=settings.DB_PATH)
    parser.add_argument("--tier", type=str, default=settings.TIER, choices=settings.VALID_TIERS)
    args = parser.parse_args()

    stats = build_database(seed_dir=args.seed_dir, db_path=args.db_path, tier=args.tier)

    size_mb = os.path.getsize(args.db_path) / 1024 / 1024
    print(f"\n{'='*60}")
    print("Build completo")
    print(f"{'='*60}")
    for key, value in stats.to_dict().items():
        print(f"  {key:<24} {value}")
    print(f"  Output: {args.db_path} ({size_mb:.1f} MB)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
