"""Decoder for Catena 5230 environmental sensor payloads."""

__version__ = "0.1.0"
