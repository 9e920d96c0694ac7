"""
Unit tests for the Transfermarkt squad parser
"""

from fulbo.data_collection.scrapers.transfermarkt_squad_scraper import parse_squad_table, scrape_squad


def _table(*rows: str) -> str:
    return '<table class="items"><tbody>' + "".join(rows) + "</tbody></table>"


def test_minimal_row_positional_columns():
    html = _table(
        "<tr><td>7</td>"
        '<td class="posrela"><a href="/profil/spieler/123-j-doe">J. Doe</a></td>'
        "<td>24</td><td></td><td>2026</td><td>€10m</td></tr>"
    )

    players = parse_squad_table(html)

    assert len(players) == 1
    doc = players[0].to_document()
    assert doc == {
        "id": "123",
        "name": "J. Doe",
        "number": "7",
        "age": "24",
        "nationalities": [],
        "contract": "2026",
        "market_value": "€10m",
    }


def test_full_squad_page(squad_html):
    players = parse_squad_table(squad_html)

    assert [p.identity for p in players] == ["74857", "937958"]
    keeper, winger = players
    assert keeper.display_name == "Marc-André ter Stegen"
    assert keeper.shirt_number == "1"
    assert keeper.age == "33"
    assert keeper.nationalities == ["Alemania"]
    assert keeper.flag_image_url.endswith("/flagge/verysmall/40.png")
    assert keeper.photo_image_url == "https://img.example/portrait/1.jpg"
    assert keeper.contract_expiry == "30/06/2028"
    assert keeper.market_value == "4,00 mill. €"

    assert winger.nationalities == ["España", "Marruecos"]
    assert winger.flag_image_url.endswith("/157.png")
    assert winger.photo_image_url == "https://img.example/portrait/19.jpg"


def test_rows_without_name_or_link_are_dropped():
    html = _table("<tr><td>1</td><td><span>nobody</span></td></tr>", "<tr></tr>")
    assert parse_squad_table(html) == []


def test_falls_back_to_generic_rows_without_items_table():
    html = (
        "<table><tr><td>9</td>"
        '<td><a href="/x/profil/spieler/555">Striker</a></td><td>29</td></tr></table>'
    )
    players = parse_squad_table(html)
    assert len(players) == 1
    assert players[0].identity == "555"
    assert players[0].shirt_number == "9"
    assert players[0].age == "29"


def test_first_link_fallback_when_primary_cells_missing():
    html = _table('<tr><td>3</td><td><a href="/name/profil/spieler/42">Defender</a></td></tr>')
    player = parse_squad_table(html)[0]
    assert player.display_name == "Defender"
    assert player.identity == "42"


def test_name_without_profile_link_keeps_empty_identity():
    html = _table('<tr><td>5</td><td class="posrela"><a href="/verein/1">Trialist</a></td></tr>')
    player = parse_squad_table(html)[0]
    assert player.display_name == "Trialist"
    assert player.identity == ""


def test_flag_cell_prefers_alt_over_title():
    html = _table(
        '<tr><td>1</td><td class="posrela"><a href="/p/profil/spieler/1">A</a></td><td>20</td>'
        '<td><img src="/flagge/1.png" alt="Argentina" title="Argentinien" /></td></tr>'
    )
    assert parse_squad_table(html)[0].nationalities == ["Argentina"]


def test_flag_cell_file_name_when_no_alt_or_title():
    html = _table(
        '<tr><td>1</td><td class="posrela"><a href="/p/profil/spieler/1">A</a></td><td>20</td>'
        '<td><img src="https://tmssl.akamaized.net/images/flagge/tiny/9.png?lm=1" /></td></tr>'
    )
    player = parse_squad_table(html)[0]
    assert player.nationalities == ["9.png"]
    assert player.flag_image_url.endswith("9.png?lm=1")


def test_any_flag_image_prefers_title_over_alt():
    html = _table(
        '<tr><td class="posrela"><a href="/p/profil/spieler/2">B</a>'
        '<img class="flaggenrahmen" data-src="https://cdn/flag/3.png" src="x.gif" alt="Brasil" title="Brasilien" /></td></tr>'
    )
    player = parse_squad_table(html)[0]
    assert player.nationalities == ["Brasilien"]
    assert player.flag_image_url == "https://cdn/flag/3.png"


def test_raw_markup_flag_when_image_has_no_flag_class_or_src():
    # lazy image outside the nationality cell: only its data-src names the flag
    html = _table(
        "<tr><td>7</td>"
        '<td class="posrela"><a href="/a-sanchez/profil/spieler/40433">Alexis Sánchez</a>'
        '<img data-src="https://tmssl.akamaized.net/images/flagge/verysmall/33.png" src="data:x" title="Chile" /></td>'
        "<td>36</td><td></td><td>30/06/2026</td><td>1,00 mill. €</td></tr>"
    )

    player = parse_squad_table(html)[0]

    assert player.nationalities == ["Chile"]
    assert player.flag_image_url == "https://tmssl.akamaized.net/images/flagge/verysmall/33.png"
    assert player.identity == "40433"


def test_never_raises_on_garbage():
    assert parse_squad_table("") == []
    assert parse_squad_table("<tr><td><a>") == []
    assert parse_squad_table("<table class=\"items\"><tbody><tr><td>only text</td></tr>") == []


def test_scrape_squad_uses_fetch_with_budget():
    calls = []

    def fake_fetch(url, *, max_attempts, **kwargs):
        calls.append((url, max_attempts))
        return _table('<tr><td>1</td><td class="posrela"><a href="/p/profil/spieler/8">C</a></td></tr>')

    players = scrape_squad("https://tm.test/kader", max_attempts=5, fetch=fake_fetch)

    assert calls == [("https://tm.test/kader", 5)]
    assert players[0].identity == "8"
