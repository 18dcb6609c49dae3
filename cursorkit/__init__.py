"""Read and write Windows static (.cur) and animated (.ani) cursor files, with a small command-line tool."""

__version__ = "0.1.0"
__all__ = ["ani", "cli", "cur"]