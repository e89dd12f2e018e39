"""
Pyrasol core Python package.

Pure-logic building blocks of the Pyramid Solitaire solver:
- card.py: raw cards, ranks, MatchType, Move
- blocks.py: blocking tables derived from the pyramid shape
- board.py: Board state and its transitions
- moves.py: move generation
- solver.py: depth-bucketed search
- parse.py / deal.py / render.py: text in, random deals, text out
"""
