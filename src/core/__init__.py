"""
Core primitives of the fee-decay ledger.

Checked integer math, the decay algorithm, units, events, snapshot models,
JSON contracts, the undo journal and the injectable clock. Nothing here knows about roles,
whitelists or the token facade.
"""
