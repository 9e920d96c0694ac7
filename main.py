"""
Fulbo Data - Hauptanwendung

Zentraler Einstiegspunkt: delegiert an die Click-CLI
(scrape, bingo, questions, serve, leagues).
"""

from fulbo.apps.cli import cli

if __name__ == "__main__":
    cli()
