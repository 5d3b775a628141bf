"""Video trimmer: bounded-loop preview and thumbnail strips."""

__version__ = "0.1.0"
