"""
Tenpair - Number Pairing Puzzle Engine

An authoritative rules engine for the "take ten" tile puzzle plus the
machinery that keeps a presentation layer in step with it:
- Board and tile state management
- Pair matching, row removal and generation append
- Snapshot diffing into ordered structural edits
- A cooperative scheduler that delivers edits one tick at a time
"""

__version__ = "0.1.0"
