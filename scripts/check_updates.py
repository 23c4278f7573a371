#!/usr/bin/env python3
"""
Confere npc.gov.cn contra o banco local.

Uso:
    python scripts/check_updates.py
    python scripts/check_updates.py --report-md out/updates.md

Exit codes:
    0 = nada pendente
    1 = pendencias (lei ausente, URL com HTTP != 200, erro de rede)
    2 = checagem falhou (banco inexistente, erro inesperado)
"""
from __future__ import annotations

import sys
import os
import logging
import argparse

# Adiciona raiz do projeto ao path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from lexcn.config import settings
from lexcn.legal.update_checker import check_for_updates, exit_code, generate_report_md

logger = logging.getLogger("check_updates")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    parser = argparse.ArgumentParser(description="Verifica atualizacoes em npc.gov.cn")
    parser.add_argument("--db-path", type=str, default=settings.DB_PATH)
    parser.add_argument("--report-md", type=str, default=None, help="Path para salvar relatorio Markdown")
    args = parser.parse_args()

    try:
        report = check_for_updates(db_path=args.db_path)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 2
    except Exception:
        logger.exception("Verificacao falhou")
        return 2

    if args.report_md:
        with open(args.report_md, "w", encoding="utf-8") as f:
            f.write(generate_report_md(report))
        print(f"Relatorio salvo em: {args.report_md}")

    if report["issues"]:
        print(f"\n{report['issues']} pendencia(s) detectada(s).")
    else:
        print("\nTodas as URLs acessiveis e presentes no banco local.")
    return exit_code(report)


if __name__ == "__main__":
    sys.exit(main())
