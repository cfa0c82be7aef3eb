"""NiceGUI pages. Importing this package registers the routes."""

from dragboard.pages import board, index

__all__ = ["board", "index"]
