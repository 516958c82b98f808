"""tilewm - Tiling window management core with a pluggable host adapter."""

__version__ = "0.1.0"
