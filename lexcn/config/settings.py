# lexcn/config/settings.py
"""
Configuracao centralizada do pipeline de legislacao.

Tudo via env vars com defaults seguros para rodar local sem setup.
Valores lidos no import; scripts podem sobrescrever por argumento de CLI.
"""
import os
import logging

logger = logging.getLogger(__name__)

# ─── Diretorios ────────────────────────────────────────────────────
DATA_DIR = os.environ.get("LEXCN_DATA_DIR", os.path.join(os.getcwd(), "data"))
SEED_DIR = os.environ.get("LEXCN_SEED_DIR", os.path.join(DATA_DIR, "seed"))
DB_PATH = os.environ.get("LEXCN_DB_PATH", os.path.join(DATA_DIR, "database.db"))

# ─── HTTP (portais .gov.cn sao lentos, ser educado) ───────────────
MIN_DELAY_SECONDS = float(os.environ.get("LEXCN_MIN_DELAY_SECONDS", "1.0"))
REQUEST_TIMEOUT_SECONDS = float(os.environ.get("LEXCN_REQUEST_TIMEOUT_SECONDS", "30"))
MAX_RETRIES = int(os.environ.get("LEXCN_MAX_RETRIES", "3"))
USER_AGENT = os.environ.get(
    "LEXCN_USER_AGENT",
    "lexcn-legislation-ingest/1.0 (legal research; respectful crawling)",
)

# ─── Build ─────────────────────────────────────────────────────────
TIER = os.environ.get("LEXCN_TIER", "professional")
VALID_TIERS = ("free", "professional")


def validate_config() -> tuple:
    """
    Valida configuracao carregada do ambiente.
    Returns: (ok: bool, error_message: str)
    """
    if MIN_DELAY_SECONDS < 0:
        msg = f"LEXCN_MIN_DELAY_SECONDS negativo: {MIN_DELAY_SECONDS}"
        logger.error(msg)
        return False, msg

    if REQUEST_TIMEOUT_SECONDS <= 0:
        msg = f"LEXCN_REQUEST_TIMEOUT_SECONDS deve ser > 0: {REQUEST_TIMEOUT_SECONDS}"
        logger.error(msg)
        return False, msg

    if MAX_RETRIES < 0:
        msg = f"LEXCN_MAX_RETRIES negativo: {MAX_RETRIES}"
        logger.error(msg)
        return False, msg

    if TIER not in VALID_TIERS:
        msg = f"LEXCN_TIER invalido: '{TIER}' (aceitos: {', '.join(VALID_TIERS)})"
        logger.error(msg)
        return False, msg

    logger.info(
        "lexcn config: seed_dir=%s db=%s delay=%.1fs retries=%d",
        SEED_DIR, DB_PATH, MIN_DELAY_SECONDS, MAX_RETRIES,
    )
    return True, ""
