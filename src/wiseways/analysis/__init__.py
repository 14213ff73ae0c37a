"""Text analysis for submitted questions.

Everything here is a pure function of the input text: key-term weighting,
need/dimension classification, similarity measures and causal pattern
detection. Nothing touches the graph state; the heuristics are keyword based
so they work offline and are fully deterministic.
"""
