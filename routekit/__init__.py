"""Graph routing primitives: Dijkstra and A* search, visibility graphs, queues, permutations and nested dissection orders."""

__version__ = "0.1.0"