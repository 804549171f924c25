"""
Doomspire - Turn resolution engine for the Lords of Doomspire board game.

A deterministic, seedable engine that turns player intent into fully
resolved game state. The engine provides:
- Board, player and card state
- Dice pools, movement, harvest and combat resolution
- The ordered tile arrival pipeline and card dispatcher
- A game master driving player agents turn by turn
"""

__version__ = "0.1.0"
