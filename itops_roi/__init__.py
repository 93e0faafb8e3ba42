"""IT operations ROI calculator."""

__version__ = "0.1.0"
