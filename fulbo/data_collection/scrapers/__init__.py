"""
Data Collection Scrapers Package

Transfermarkt league discovery, squad parsing and the per-league orchestrator.
Import concrete scrapers from their modules directly, e.g.:

    from fulbo.data_collection.scrapers.transfermarkt_squad_scraper import parse_squad_table
"""

__all__ = []
