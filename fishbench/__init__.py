"""Chess bitboards, magic attack tables, benchmark command lists and debug statistics."""

__version__ = "0.1.0"
__all__ = ["benchmark", "bitboard", "debug", "positions", "utils"]