import json

from fulbo.common.http import FetchError
from fulbo.data_collection.collectors.playfootball_collector import (
    BINGO_URL_TEMPLATE,
    bingo_collector,
    combine_questions,
    questions_collector,
)


def question(text, *answers):
    return {"gameData": {"question": text, "answers": list(answers)}}


class FakeFetch:
    def __init__(self, bodies):
        self.bodies = bodies
        self.calls = []

    def __call__(self, url, *, max_attempts, **kwargs):
        self.calls.append((url, max_attempts))
        game_id = int(url.rsplit("/", 1)[-1].split(".")[0])
        body = self.bodies.get(game_id)
        if body is None:
            raise FetchError(url, max_attempts, "HTTP 404")
        return body


def test_download_saves_valid_documents_and_skips_failures(tmp_path):
    fetch = FakeFetch({720: '{"gameData": {}}', 721: "<html>oops</html>", 723: '{"ok": true}'})
    collector = bingo_collector(tmp_path / "bingo", fetch=fetch)

    saved = collector.download(720, 723)

    assert [p.name for p in saved] == ["720.json", "723.json"]
    assert sorted(p.name for p in (tmp_path / "bingo").iterdir()) == ["720.json", "723.json"]
    # raw body written unchanged
    assert (tmp_path / "bingo" / "720.json").read_text(encoding="utf-8") == '{"gameData": {}}'
    assert fetch.calls[0] == (BINGO_URL_TEMPLATE.format(game_id=720), 1)
    assert len(fetch.calls) == 4


def test_download_empty_range(tmp_path):
    fetch = FakeFetch({})
    assert questions_collector(tmp_path / "q", fetch=fetch).download(5, 4) == []
    assert fetch.calls == []


def test_combine_questions_skips_invalid_files(tmp_path):
    source = tmp_path / "remote_q"
    source.mkdir()
    (source / "10.json").write_text(json.dumps(question("¿Diez?", "a")), encoding="utf-8")
    (source / "9.json").write_text(json.dumps(question("Nine?", "b", "c")), encoding="utf-8")
    (source / "11.json").write_text("{not json", encoding="utf-8")
    (source / "12.json").write_text(json.dumps({"unexpected": 1}), encoding="utf-8")

    total = combine_questions(source)

    assert total == 2
    raw = (tmp_path / "all_questions.json").read_text(encoding="utf-8")
    assert "¿Diez?" in raw
    data = json.loads(raw)
    # numeric order, not lexical
    assert [q["gameData"]["question"] for q in data["questions"]] == ["Nine?", "¿Diez?"]


def test_combine_questions_explicit_output(tmp_path):
    source = tmp_path / "src"
    source.mkdir()
    target = tmp_path / "out" / "combined.json"

    assert combine_questions(source, target) == 0
    assert json.loads(target.read_text(encoding="utf-8")) == {"questions": []}
