"""Product search with parallel recall and three-stage ranking over a SQLite catalogue."""

__version__ = "0.1.0"