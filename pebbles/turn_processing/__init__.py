"""Turn/action processing helpers.

This package holds the rules of a round: the program's strategy, the
validators an incoming action must pass, and the half-move bookkeeping.
Nothing in here touches Redis; `pebbles.actions` wires it to the store.
"""
