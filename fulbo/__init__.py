"""
Fulbo Data
Scraping-Pipeline für Kaderdaten und statische JSON-API
"""

__version__ = "1.0.0"
__author__ = "Fulbo Data Team"

# NOTE:
# Avoid importing configuration at package import time to keep "import fulbo"
# lightweight and side-effect free, particularly for unit tests that only need
# the parsers.

__all__ = []
