"""WiseWays: classify questions, link related ones, and group them into thinking rooms."""

__version__ = "0.1.0"
