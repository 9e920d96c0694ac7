"""
Storage Module
Flat JSON files per team
"""

from .team_files import PersistenceError, load_team_document, read_team_label, save_team_document

__all__ = ["PersistenceError", "save_team_document", "load_team_document", "read_team_label"]
