"""Two-player bitboard chess in a pygame window whose board flips to the side to move."""

__version__ = "0.1.0"
__all__ = ["__version__"]