"""Casper FFG justification, rewards, RANDAO and committee shuffling for a beacon-style chain."""

__version__ = "0.1.0"