"""
Applications Package für Fulbo Data

Enthält die Kommandozeilen-Einstiegspunkte.
"""
