# lexcn/db/schema.py
"""
Schema SQLite do banco de legislacao.

Tabelas principais + indices FTS5 (content externo) mantidos por triggers:
todo INSERT/UPDATE/DELETE em legal_provisions/definitions atualiza o indice
na mesma transacao.

Tokenizer unicode61: sequencias CJK sem espaco viram um token so, entao a
busca por prefixo ("个人信息"*) casa inicio de token.
"""
from __future__ import annotations

SCHEMA_VERSION = "3"

SCHEMA = """
-- Leis e regulamentos
CREATE TABLE IF NOT EXISTS legal_documents (
  id TEXT PRIMARY KEY,
  type TEXT NOT NULL CHECK(type IN ('statute', 'administrative_regulation', 'judicial_interpretation')),
  title TEXT NOT NULL,
  title_en TEXT,
  short_name TEXT,
  status TEXT NOT NULL DEFAULT 'in_force'
    CHECK(status IN ('in_force', 'amended', 'repealed', 'not_yet_in_force')),
  issued_date TEXT,
  in_force_date TEXT,
  url TEXT,
  description TEXT,
  last_updated TEXT DEFAULT (datetime('now'))
);

-- Artigos (条)
CREATE TABLE IF NOT EXISTS legal_provisions (
  id INTEGER PRIMARY KEY,
  document_id TEXT NOT NULL REFERENCES legal_documents(id),
  provision_ref TEXT NOT NULL,
  chapter TEXT,
  section TEXT NOT NULL,
  title TEXT,
  content TEXT NOT NULL,
  language TEXT NOT NULL DEFAULT 'zh',
  metadata TEXT,
  UNIQUE(document_id, provision_ref, language)
);

CREATE INDEX IF NOT EXISTS idx_provisions_doc ON legal_provisions(document_id);
CREATE INDEX IF NOT EXISTS idx_provisions_chapter ON legal_provisions(document_id, chapter);
CREATE INDEX IF NOT EXISTS idx_provisions_lang ON legal_provisions(language);

CREATE VIRTUAL TABLE IF NOT EXISTS provisions_fts USING fts5(
  content, title,
  content='legal_provisions',
  content_rowid='id',
  tokenize='unicode61'
);

CREATE TRIGGER IF NOT EXISTS provisions_ai AFTER INSERT ON legal_provisions BEGIN
  INSERT INTO provisions_fts(rowid, content, title)
  VALUES (new.id, new.content, new.title);
END;

CREATE TRIGGER IF NOT EXISTS provisions_ad AFTER DELETE ON legal_provisions BEGIN
  INSERT INTO provisions_fts(provisions_fts, rowid, content, title)
  VALUES ('delete', old.id, old.content, old.title);
END;

CREATE TRIGGER IF NOT EXISTS provisions_au AFTER UPDATE ON legal_provisions BEGIN
  INSERT INTO provisions_fts(provisions_fts, rowid, content, title)
  VALUES ('delete', old.id, old.content, old.title);
  INSERT INTO provisions_fts(rowid, content, title)
  VALUES (new.id, new.content, new.title);
END;

-- Definicoes legais
CREATE TABLE IF NOT EXISTS definitions (
  id INTEGER PRIMARY KEY,
  document_id TEXT NOT NULL REFERENCES legal_documents(id),
  term TEXT NOT NULL,
  term_en TEXT,
  definition TEXT NOT NULL,
  source_provision TEXT,
  UNIQUE(document_id, term)
);

CREATE VIRTUAL TABLE IF NOT EXISTS definitions_fts USING fts5(
  term, definition,
  content='definitions',
  content_rowid='id',
  tokenize='unicode61'
);

CREATE TRIGGER IF NOT EXISTS definitions_ai AFTER INSERT ON definitions BEGIN
  INSERT INTO definitions_fts(rowid, term, definition)
  VALUES (new.id, new.term, new.definition);
END;

CREATE TRIGGER IF NOT EXISTS definitions_ad AFTER DELETE ON definitions BEGIN
  INSERT INTO definitions_fts(definitions_fts, rowid, term, definition)
  VALUES ('delete', old.id, old.term, old.definition);
END;

CREATE TRIGGER IF NOT EXISTS definitions_au AFTER UPDATE ON definitions BEGIN
  INSERT INTO definitions_fts(definitions_fts, rowid, term, definition)
  VALUES ('delete', old.id, old.term, old.definition);
  INSERT INTO definitions_fts(rowid, term, definition)
  VALUES (new.id, new.term, new.definition);
END;

-- Instrumentos estrangeiros (UE) citados pelas leis
CREATE TABLE IF NOT EXISTS external_documents (
  id TEXT PRIMARY KEY,
  type TEXT NOT NULL CHECK (type IN ('directive', 'regulation')),
  year INTEGER NOT NULL CHECK (year >= 1957 AND year <= 2100),
  number INTEGER NOT NULL CHECK (number > 0),
  community TEXT CHECK (community IN ('EU', 'EC', 'EEC', 'Euratom')),
  title TEXT,
  short_name TEXT,
  url TEXT,
  description TEXT,
  last_updated TEXT DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_external_documents_type_year ON external_documents(type, year DESC);

CREATE TABLE IF NOT EXISTS external_references (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  source_type TEXT NOT NULL CHECK (source_type IN ('provision', 'document')),
  source_id TEXT NOT NULL,
  document_id TEXT NOT NULL REFERENCES legal_documents(id),
  provision_id INTEGER REFERENCES legal_provisions(id),
  external_document_id TEXT NOT NULL REFERENCES external_documents(id),
  article TEXT,
  reference_type TEXT NOT NULL CHECK (reference_type IN (
    'implements', 'supplements', 'applies', 'references', 'complies_with',
    'derogates_from', 'amended_by', 'repealed_by', 'cites_article', 'see_also'
  )),
  reference_context TEXT,
  full_citation TEXT,
  is_primary_implementation INTEGER DEFAULT 0,
  implementation_status TEXT CHECK (implementation_status IN ('complete', 'partial', 'pending', 'unknown')),
  created_at TEXT DEFAULT CURRENT_TIMESTAMP,
  last_verified TEXT
);

-- article NULL conta como valor para unicidade (UNIQUE comum deixaria duplicar)
CREATE UNIQUE INDEX IF NOT EXISTS uq_external_references_edge
  ON external_references(source_id, external_document_id, IFNULL(article, ''));
CREATE INDEX IF NOT EXISTS idx_external_references_document
  ON external_references(document_id, external_document_id);
CREATE INDEX IF NOT EXISTS idx_external_references_provision
  ON external_references(provision_id, external_document_id);

-- Metadata do build
CREATE TABLE IF NOT EXISTS db_metadata (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);
"""


def init_schema(conn) -> None:
    """Cria tabelas, indices e triggers (idempotente)."""
    conn.executescript(SCHEMA)
