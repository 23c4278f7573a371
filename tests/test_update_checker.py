# tests/test_update_checker.py
"""
Testes para lexcn.legal.update_checker (HEAD mockado, banco local em tmp).
"""
from __future__ import annotations

import pytest

from lexcn.config.law_registry import get_law
from lexcn.db.builder import load_documents
from lexcn.db.connection import open_db
from lexcn.db.schema import init_schema
from lexcn.legal.fetcher import FetchError, FetchResult
from lexcn.legal.update_checker import (
    STATUS_ERROR,
    STATUS_LOCAL,
    STATUS_MISSING,
    STATUS_WARN,
    check_for_updates,
    exit_code,
    generate_report_md,
)


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "database.db")
    conn = open_db(path)
    init_schema(conn)
    load_documents(conn, [get_law("pipl-2021").to_law_shell()])
    conn.commit()
    conn.close()
    return path


class FakeHead:
    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.calls = []

    def __call__(self, url, limiter, session=None, **kwargs):
        self.calls.append((url, kwargs))
        outcome = self.outcomes[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _ok():
    return FetchResult(200, "", "text/html")


class TestCheckForUpdates:
    def test_classificacao(self, db_path):
        pipl, dsl, csl, aml = (get_law(i) for i in ("pipl-2021", "dsl-2021", "csl-2016", "aml-2022"))
        fetch = FakeHead({
            pipl.url: _ok(),
            dsl.url: _ok(),
            csl.url: FetchResult(404, "", "text/html"),
            aml.url: FetchError(aml.url, attempts=1, reason="connection reset"),
        })

        report = check_for_updates([pipl, dsl, csl, aml], db_path=db_path, fetch=fetch)

        statuses = {r["law_id"]: r["status"] for r in report["results"]}
        assert statuses == {
            "pipl-2021": STATUS_LOCAL,
            "dsl-2021": STATUS_MISSING,
            "csl-2016": STATUS_WARN,
            "aml-2022": STATUS_ERROR,
        }
        assert report["issues"] == 3
        assert "timestamp" in report

    def test_head_sem_retry(self, db_path):
        pipl = get_law("pipl-2021")
        fetch = FakeHead({pipl.url: _ok()})
        check_for_updates([pipl], db_path=db_path, fetch=fetch)
        _, kwargs = fetch.calls[0]
        assert kwargs["method"] == "HEAD"
        assert kwargs["max_retries"] == 0

    def test_fetch_error_com_status_vira_warn(self, db_path):
        pipl = get_law("pipl-2021")
        fetch = FakeHead({pipl.url: FetchError(pipl.url, attempts=1, last_status=503)})
        report = check_for_updates([pipl], db_path=db_path, fetch=fetch)
        assert report["results"][0]["status"] == STATUS_WARN
        assert report["results"][0]["http_status"] == 503

    def test_banco_inexistente(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            check_for_updates([get_law("pipl-2021")], db_path=str(tmp_path / "nada.db"), fetch=FakeHead({}))


class TestExitCode:
    def test_sem_pendencias(self):
        assert exit_code({"issues": 0, "results": []}) == 0

    def test_com_pendencias(self):
        assert exit_code({"issues": 2, "results": []}) == 1


class TestGenerateReportMd:
    def test_tabela(self):
        report = {
            "timestamp": "2026-01-01T00:00:00+00:00",
            "issues": 1,
            "results": [
                {"law_id": "pipl-2021", "status": "local", "http_status": 200, "detail": ""},
                {"law_id": "aml-2022", "status": "error", "http_status": None, "detail": "timeout"},
            ],
        }
        md = generate_report_md(report)
        assert "| pipl-2021 | local | 200 |  |" in md
        assert "| aml-2022 | error | - | timeout |" in md
        assert "1 pendencia(s)" in md

    def test_sem_pendencias(self):
        md = generate_report_md({"timestamp": "t", "issues": 0, "results": []})
        assert "Todas as URLs acessiveis" in md
