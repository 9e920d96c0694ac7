"""
Collectors for auxiliary game content (bingo boards, quiz questions).
"""

__all__: list[str] = []
