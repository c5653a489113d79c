"""crates.io proxy + dependency graph API."""

__version__ = "0.1.0"
