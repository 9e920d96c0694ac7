"""Global pytest fixtures for the test suite.

Centralizes:
 - Project root path insertion (so individual tests don't repeat sys.path hacks)
 - Reusable HTML sample snippets for Transfermarkt league and squad pages
 - Fake clock / sleep helpers for retry and politeness tests
"""

import sys
from pathlib import Path

import pytest

# Ensure project root (containing fulbo/) is on sys.path once
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fulbo.core.config import Settings  # noqa: E402


# -------------------- Time Fixtures -------------------- #

class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        data_dir=str(tmp_path / "leagues"),
        bingo_data_dir=str(tmp_path / "remote_bingo"),
        bingo_extra_dirs=[],
        questions_dir=str(tmp_path / "remote_q"),
        questions_file=str(tmp_path / "all_questions.json"),
        scrape_all=False,
        enable_metrics=True,
    )


# -------------------- HTML Fixtures -------------------- #

@pytest.fixture
def squad_html():
    return (
        """
        <html>
        <body>
        <table class="items">
          <thead><tr><th>#</th><th>Jugador</th><th>Edad</th><th>Nac.</th><th>Contrato</th><th>Valor</th></tr></thead>
          <tbody>
            <tr class="odd">
              <td class="zentriert rueckennummer"><div class="rn_nummer">1</div></td>
              <td class="posrela">
                <table class="inline-table"><tr>
                  <td rowspan="2"><img class="bilderrahmen-fixed" data-src="https://img.example/portrait/1.jpg" src="data:image/gif;base64,R0lGOD" /></td>
                  <td class="hauptlink"><a href="/marc-andre-ter-stegen/profil/spieler/74857">Marc-André ter Stegen</a></td>
                </tr><tr><td>Portero</td></tr></table>
              </td>
              <td class="zentriert">33</td>
              <td class="zentriert"><img class="flaggenrahmen" src="https://tmssl.akamaized.net/images/flagge/verysmall/40.png" alt="Alemania" title="Alemania" /></td>
              <td class="zentriert">30/06/2028</td>
              <td class="rechts hauptlink">4,00 mill. €</td>
            </tr>
            <tr class="even">
              <td class="zentriert rueckennummer"><div class="rn_nummer">19</div></td>
              <td class="posrela">
                <table class="inline-table"><tr>
                  <td rowspan="2"><img class="bilderrahmen-fixed" src="https://img.example/portrait/19.jpg" /></td>
                  <td class="hauptlink"><a href="/lamine-yamal/profil/spieler/937958">Lamine Yamal</a></td>
                </tr><tr><td>Extremo derecho</td></tr></table>
              </td>
              <td class="zentriert">18</td>
              <td class="zentriert"><img class="flaggenrahmen" src="https://tmssl.akamaized.net/images/flagge/verysmall/157.png" alt="España" title="España" /><br /><img class="flaggenrahmen" src="https://tmssl.akamaized.net/images/flagge/verysmall/107.png" alt="Marruecos" title="Marruecos" /></td>
              <td class="zentriert">30/06/2031</td>
              <td class="rechts hauptlink">200,00 mill. €</td>
            </tr>
            <tr class="odd">
              <td class="zentriert">&nbsp;</td>
              <td class="posrela"><span>Sin enlace</span></td>
              <td></td><td></td><td></td><td></td>
            </tr>
          </tbody>
        </table>
        </body>
        </html>
        """
    )


@pytest.fixture
def league_html():
    return (
        """
        <html>
        <body>
        <table class="items"><tbody>
          <tr>
            <td><a href="/fc-barcelona/startseite/verein/131/saison_id/2025" title="FC Barcelona"><img src="/wappen/131.png" /></a></td>
            <td class="hauptlink"><a href="/fc-barcelona/startseite/verein/131/saison_id/2025">FC Barcelona</a></td>
          </tr>
          <tr>
            <td class="hauptlink"><a href="/real-madrid/startseite/verein/418/saison_id/2025">Real Madrid CF</a></td>
          </tr>
          <tr>
            <td class="hauptlink"><a href="/celta-vigo/startseite/verein/940">RC Celta de Vigo</a></td>
          </tr>
          <tr>
            <td class="hauptlink"><a href="/atletico-madrid/startseite/verein/13" title="Atlético de Madrid"></a></td>
          </tr>
        </tbody></table>
        <a href="/laliga/startseite/wettbewerb/ES1">LaLiga</a>
        <a href="/lamine-yamal/profil/spieler/937958">Lamine Yamal</a>
        </body>
        </html>
        """
    )
