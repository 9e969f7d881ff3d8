"""cafebot - multi-turn conversation dispatcher for the Contoso Cafe assistant."""

__version__ = "0.1.0"
