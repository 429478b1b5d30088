"""Meteoride: weather-based ride-safety assessments for bikes and motorcycles."""

__version__ = "0.1.0"
