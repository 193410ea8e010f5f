"""Planet Wars: a deterministic forward model and search agents."""

__version__ = "0.1.0"
