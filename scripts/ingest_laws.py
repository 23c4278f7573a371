#!/usr/bin/env python3
"""
Ingestao de legislacao chinesa: npc.gov.cn → seed JSON (1 por lei).

Uso:
    python scripts/ingest_laws.py                 # todas as leis do registry
    python scripts/ingest_laws.py --limit 2       # primeiras 2
    python scripts/ingest_laws.py --law-id pipl-2021

Leis com seed ja gravado sao puladas (execucao retomavel).
"""
from __future__ import annotations

import sys
import os
import json
import logging
import argparse

# Adiciona raiz do projeto ao path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from lexcn.config import settings
from lexcn.config.law_registry import enabled_laws, get_law
from lexcn.legal.ingest import ingest_laws


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    parser = argparse.ArgumentParser(description="Ingestao de legislacao chinesa (npc.gov.cn)")
    parser.add_argument("--limit", type=int, default=0, help="Max leis a processar (0=todas)")
    parser.add_argument("--law-id", type=str, default=None, help="Processar apenas uma lei")
    parser.add_argument("--seed-dir", type=str, default=settings.SEED_DIR, help="Diretorio dos seeds")
    parser.add_argument("--output", type=str, default=None, help="Path para salvar relatorio JSON")
    args = parser.parse_args()

    ok, msg = settings.validate_config()
    if not ok:
        print(f"Config invalida: {msg}")
        return 2

    laws = [get_law(args.law_id)] if args.law_id else enabled_laws()

    report = ingest_laws(laws=laws, seed_dir=args.seed_dir, limit=args.limit or None)

    print(f"\n{'='*60}")
    print("Resultado da ingestao")
    print(f"{'='*60}")
    print(f"  Processadas:     {report['processed']}")
    print(f"  Skipped:         {report['skipped']}")
    print(f"  Falhas:          {report['failed']}")
    print(f"  Total artigos:   {report['provisions']}")

    for r in report["results"]:
        print(f"  [{r['status']}] {r['law_id']}: {r.get('provisions', 0)} artigos")

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False, default=str)
        print(f"\nRelatorio salvo em: {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
