"""Data models for lofigps."""

from lofigps.models.point import GpsPoint

__all__ = ["GpsPoint"]
