"""
Gridlock core Python package.

Pure puzzle logic for the conduit-sorting game, free of any presentation code.
Modules:
- layout.py: Color, LevelDefinition, Move, HintMove and layout helpers
- moves.py: move legality and enumeration over detached layouts
- state.py: ConduitState, the live stacks of one session
- rules.py: completion rule
- deal.py / levels.py: deterministic generator and the level catalog
- hint.py: bounded-depth hint search
- engine.py: PuzzleEngine, the session facade used by the CLI and the Flask app
"""
