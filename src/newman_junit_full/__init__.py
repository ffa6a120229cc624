"""Newman JUnit full reporter - convert a finished collection run into JUnit XML."""

__version__ = "1.0.0"
