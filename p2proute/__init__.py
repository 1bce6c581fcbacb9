"""Road routing with k shortest paths and a peer-to-peer parking information cache."""

__version__ = "0.1.0"