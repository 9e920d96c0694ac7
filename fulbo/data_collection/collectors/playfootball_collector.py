"""
Collector for numbered JSON documents from playfootball.games
(football bingo boards and quiz questions).
"""

import json
from pathlib import Path
from typing import Callable, List, Optional, Union

from pydantic import ValidationError

from fulbo.common.http import FetchError, fetch_html
from fulbo.common.logging_utils import get_logger
from fulbo.domain.models import QuestionsCollection, QuizQuestion

BINGO_URL_TEMPLATE = "https://playfootball.games/api/football-bingo/{game_id}.json"
QUESTIONS_URL_TEMPLATE = "https://playfootball.games/api/futbol-list-a/{game_id}.json"

PathLike = Union[str, Path]


class PlayfootballCollector:
    """Downloads an inclusive id range of JSON documents into a directory."""

    def __init__(
        self,
        name: str,
        url_template: str,
        out_dir: PathLike,
        *,
        fetch: Callable[..., str] = fetch_html,
        timeout: float = 30.0,
    ):
        self.name = name
        self.url_template = url_template
        self.out_dir = Path(out_dir)
        self.fetch = fetch
        self.timeout = timeout
        self.logger = get_logger(f"collector.{name}")

    def download(self, start: int, end: int) -> List[Path]:
        """Fetch ids ``start..end`` and save each valid JSON body as ``<id>.json``.

        Failed fetches, invalid JSON and write errors skip that id. Raises
        OSError only when the output directory cannot be created.
        """
        self.out_dir.mkdir(parents=True, exist_ok=True)
        saved: List[Path] = []
        for game_id in range(start, end + 1):
            url = self.url_template.format(game_id=game_id)
            try:
                body = self.fetch(url, max_attempts=1, timeout=self.timeout)
            except FetchError as e:
                self.logger.warning(f"skip {game_id}: {e.last_error}")
                continue
            try:
                json.loads(body)
            except ValueError as e:
                self.logger.warning(f"invalid json {game_id}: {e}")
                continue
            path = self.out_dir / f"{game_id}.json"
            try:
                path.write_text(body, encoding="utf-8")
            except OSError as e:
                self.logger.error(f"failed write {path}: {e}")
                continue
            self.logger.info(f"Saved {path}")
            saved.append(path)
        return saved


def _numeric_first(path: Path):
    return (0, int(path.stem), path.name) if path.stem.isdigit() else (1, 0, path.name)


def combine_questions(source_dir: PathLike, output_file: Optional[PathLike] = None) -> int:
    """Merge every question document in ``source_dir`` into one collection.

    Unreadable or malformed files are skipped. Writes ``all_questions.json``
    next to ``source_dir`` unless ``output_file`` is given; returns the
    number of questions written.
    """
    logger = get_logger("collector.questions")
    source = Path(source_dir)
    target = Path(output_file) if output_file else source.parent / "all_questions.json"

    collection = QuestionsCollection()
    for path in sorted(source.glob("*.json"), key=_numeric_first):
        try:
            question = QuizQuestion.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Skipping {path.name}: {e}")
            continue
        collection.questions.append(question)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        json.dumps(collection.model_dump(by_alias=True), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    logger.info(f"Combined {len(collection.questions)} questions into {target}")
    return len(collection.questions)


def bingo_collector(out_dir: PathLike, **kwargs) -> PlayfootballCollector:
    return PlayfootballCollector("bingo", BINGO_URL_TEMPLATE, out_dir, **kwargs)


def questions_collector(out_dir: PathLike, **kwargs) -> PlayfootballCollector:
    return PlayfootballCollector("questions", QUESTIONS_URL_TEMPLATE, out_dir, **kwargs)
