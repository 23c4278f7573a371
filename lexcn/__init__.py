"""
lexcn - Base de legislacao chinesa (npc.gov.cn / gov.cn)

Ingestao → extracao de artigos → dedup → indice SQLite FTS5.

IMPORTANT: Este arquivo deve ser side-effect free.
Use imports explicitos nos modulos:
  from lexcn.utils.chinese_numerals import chinese_to_arabic
  from lexcn.db.builder import build_database
"""

__all__ = []
