"""BoatSafe marine forecast dashboard for Alaska coastal waters."""

__version__ = "1.0.0"
