"""
Games Package
Daten für Football Bingo
"""
