"""
Bots module - Player agents.

Provides:
- PlayerAgent: Interface every player (bot or remote human) implements
- TurnContext: What an agent knows about the turn in progress
- RandomAgent: Seeded random choice among legal actions and options
- FirstLegalAgent: Always takes the first legal action and option
"""

from .agent import PlayerAgent, TurnContext, RandomAgent, FirstLegalAgent

__all__ = [
    "PlayerAgent",
    "TurnContext",
    "RandomAgent",
    "FirstLegalAgent",
]
