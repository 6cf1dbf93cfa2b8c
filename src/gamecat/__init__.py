"""gamecat: polymorphic validation of game catalog asset records."""

__version__ = "0.1.0"
