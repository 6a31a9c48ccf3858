"""vidpipe — EDL compiler for automated video editing."""

__version__ = "0.1.0"
