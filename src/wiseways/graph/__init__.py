"""The question graph: nodes, weighted links and thinking rooms.

Links and rooms are always rebuilt from scratch over the full node set; the
store swaps in the new collections only once a rebuild has completed.
"""
