# lexcn/legal/fetcher.py
"""
Cliente HTTP com rate limit para portais de legislacao chineses (npc.gov.cn, gov.cn).

- Intervalo minimo entre requests (sites do governo chines sao lentos)
- User-Agent identificando o projeto
- Retry com backoff exponencial em 429/5xx e erros de transporte
- Timeout por request

O RateLimiter e um objeto explicito: o mesmo limiter deve ser passado para
todas as chamadas de um processo para compartilhar o relogio de "ultimo request".
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from lexcn.config import settings

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "text/html, application/xhtml+xml, application/xml;q=0.9, */*;q=0.8",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
}

RETRYABLE_STATUS = 429


class FetchError(RuntimeError):
    """Falha terminal apos esgotar os retries."""

    def __init__(self, url: str, attempts: int, last_status: Optional[int] = None, reason: str = ""):
        self.url = url
        self.attempts = attempts
        self.last_status = last_status
        detail = f"HTTP {last_status}" if last_status is not None else reason
        super().__init__(f"Falha ao baixar {url} apos {attempts} tentativas: {detail}")


@dataclass
class FetchResult:
    status: int
    body: str
    content_type: str


class RateLimiter:
    """Intervalo minimo entre requests, compartilhado por todas as chamadas que o recebem."""

    def __init__(
        self,
        min_delay_seconds: float = settings.MIN_DELAY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.min_delay_seconds = min_delay_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_request = None
        self._lock = threading.Lock()

    def wait(self) -> float:
        """Bloqueia ate o intervalo minimo passar. Retorna o tempo dormido."""
        with self._lock:
            slept = 0.0
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                if elapsed < self.min_delay_seconds:
                    slept = self.min_delay_seconds - elapsed
                    self._sleep(slept)
            # timestamp atualizado depois da espera
            self._last_request = self._clock()
            return slept


def _is_retryable(status: int) -> bool:
    return status == RETRYABLE_STATUS or status >= 500


def _backoff_seconds(attempt: int) -> float:
    return float(2 ** (attempt + 1))


def build_session(user_agent: str = settings.USER_AGENT) -> requests.Session:
    session = requests.Session()
    session.headers.update(DEFAULT_HEADERS)
    session.headers["User-Agent"] = user_agent
    return session


def fetch_with_rate_limit(
    url: str,
    limiter: RateLimiter,
    session: Optional[requests.Session] = None,
    max_retries: int = settings.MAX_RETRIES,
    timeout: float = settings.REQUEST_TIMEOUT_SECONDS,
    method: str = "GET",
    sleep: Callable[[float], None] = time.sleep,
) -> FetchResult:
    """
    Baixa URL respeitando rate limit, com retry e timeout.

    Args:
        url: URL do documento
        limiter: RateLimiter compartilhado do processo
        session: requests.Session (criada se None)
        max_retries: retries alem da primeira tentativa (3 → ate 4 requests)
        timeout: timeout por request (segundos)
        method: 'GET' ou 'HEAD'
        sleep: funcao de espera do backoff (injetavel para testes)

    Returns:
        FetchResult (inclusive status 4xx nao-retryable, para quem chama decidir)

    Raises:
        FetchError: 429/5xx ou erro de transporte em todas as tentativas
    """
    session = session or build_session()
    last_status = None

    for attempt in range(max_retries + 1):
        limiter.wait()
        try:
            resp = session.request(method, url, timeout=timeout)
        except requests.RequestException as e:
            if attempt < max_retries:
                backoff = _backoff_seconds(attempt)
                logger.warning("Erro ao baixar %s: %s, retry em %.0fs", url, e, backoff)
                sleep(backoff)
                continue
            raise FetchError(url, attempt + 1, reason=str(e)) from e

        last_status = resp.status_code
        if _is_retryable(resp.status_code):
            if attempt < max_retries:
                backoff = _backoff_seconds(attempt)
                logger.warning("HTTP %d para %s, retry em %.0fs", resp.status_code, url, backoff)
                sleep(backoff)
                continue
            raise FetchError(url, attempt + 1, last_status=last_status)

        if resp.encoding is None or resp.encoding.lower() == "iso-8859-1":
            # portais .cn costumam omitir charset no header
            resp.encoding = resp.apparent_encoding or "utf-8"

        return FetchResult(
            status=resp.status_code,
            body=resp.text if method != "HEAD" else "",
            content_type=resp.headers.get("content-type", ""),
        )

    raise FetchError(url, max_retries + 1, last_status=last_status)
