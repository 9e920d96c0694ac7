import json
import logging
import random
import time
from typing import Any, Callable, Optional

import requests

logger = logging.getLogger(__name__)

# Shared defaults
DEFAULT_UAS: list[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.0 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0 Safari/537.36",
]
BROWSER_HEADERS: dict[str, str] = {
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": "https://www.google.com/",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}
DEFAULT_TIMEOUT = 30.0
MAX_JITTER_SECONDS = 1.5


class FetchError(Exception):
    """Raised once every attempt for a URL has failed."""

    def __init__(self, url: str, attempts: int, last_error: Optional[str]):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"GET {url} failed after {attempts} attempt(s): {last_error}")


def build_headers(user_agent: str, *, accept_json: bool = False) -> dict[str, str]:
    headers = {"User-Agent": user_agent, **BROWSER_HEADERS}
    if accept_json:
        headers["Accept"] = "application/json, text/plain, */*"
    return headers


def backoff_delay(attempt_index: int, *, rng: Optional[random.Random] = None) -> float:
    """Seconds to wait after the zero-based ``attempt_index`` failed.

    ``2 ** attempt_index`` plus up to ``MAX_JITTER_SECONDS`` of jitter.
    """
    uniform = rng.uniform if rng else random.uniform
    return float(2**attempt_index) + uniform(0, MAX_JITTER_SECONDS)


def _get_with_retries(
    url: str,
    *,
    max_attempts: int,
    timeout: float,
    session: Optional[requests.Session],
    user_agents: Optional[list[str]],
    proxy: Optional[str],
    sleep: Callable[[float], None],
    rng: Optional[random.Random],
    metrics: Any,
    accept_json: bool,
) -> requests.Response:
    if session is None:
        # one-off session, closed once the retries are done
        with requests.Session() as own_session:
            return _get_with_retries(
                url,
                max_attempts=max_attempts,
                timeout=timeout,
                session=own_session,
                user_agents=user_agents,
                proxy=proxy,
                sleep=sleep,
                rng=rng,
                metrics=metrics,
                accept_json=accept_json,
            )
    proxies = {"http": proxy, "https": proxy} if proxy else None
    ua_pool = user_agents or DEFAULT_UAS
    choice = rng.choice if rng else random.choice
    attempts = max(1, max_attempts)
    last_error: Optional[str] = None

    for attempt in range(attempts):
        headers = build_headers(choice(ua_pool), accept_json=accept_json)
        logger.info("GET %s [attempt %d/%d]", url, attempt + 1, attempts)
        try:
            r = session.get(url, timeout=timeout, proxies=proxies, headers=headers)
            if r.status_code == 200:
                if metrics:
                    metrics.record_fetch_attempt("success")
                return r
            last_error = f"HTTP {r.status_code}"
            outcome = "bad_status"
        except requests.RequestException as e:
            last_error = str(e) or e.__class__.__name__
            outcome = "transport_error"

        if metrics:
            metrics.record_fetch_attempt(outcome)
        if attempt + 1 >= attempts:
            break
        delay = backoff_delay(attempt, rng=rng)
        logger.warning(
            "Attempt %d for %s failed: %s -> sleep %.2fs", attempt + 1, url, last_error, delay
        )
        sleep(delay)

    logger.error("Giving up on %s after %d attempt(s): %s", url, attempts, last_error)
    raise FetchError(url, attempts, last_error)


def fetch_html(
    url: str,
    *,
    max_attempts: int,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
    user_agents: Optional[list[str]] = None,
    proxy: Optional[str] = None,
    sleep: Callable[[float], None] = time.sleep,
    rng: Optional[random.Random] = None,
    metrics: Any = None,
) -> str:
    """GET ``url`` and return the body of the first 200 response.

    Makes at most ``max_attempts`` requests, rotating the user agent each
    time and backing off between attempts (never after the last one).
    Raises :class:`FetchError` when the budget is exhausted.
    """
    r = _get_with_retries(
        url,
        max_attempts=max_attempts,
        timeout=timeout,
        session=session,
        user_agents=user_agents,
        proxy=proxy,
        sleep=sleep,
        rng=rng,
        metrics=metrics,
        accept_json=False,
    )
    return r.text


def fetch_json(
    url: str,
    *,
    max_attempts: int = 1,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
    user_agents: Optional[list[str]] = None,
    proxy: Optional[str] = None,
    sleep: Callable[[float], None] = time.sleep,
    rng: Optional[random.Random] = None,
    metrics: Any = None,
) -> Any:
    r = _get_with_retries(
        url,
        max_attempts=max_attempts,
        timeout=timeout,
        session=session,
        user_agents=user_agents,
        proxy=proxy,
        sleep=sleep,
        rng=rng,
        metrics=metrics,
        accept_json=True,
    )
    try:
        return json.loads(r.text)
    except ValueError as e:
        raise FetchError(url, max(1, max_attempts), f"invalid JSON: {e}") from e


__all__ = [
    "DEFAULT_UAS",
    "BROWSER_HEADERS",
    "FetchError",
    "backoff_delay",
    "build_headers",
    "fetch_html",
    "fetch_json",
]
