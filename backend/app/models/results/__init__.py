"""Result models for service operations."""

from app.models.results.generator import RestoredImage

__all__ = ["RestoredImage"]
