"""捲簾報價系統 - roller blind quoting core."""

__version__ = "0.1.0"
