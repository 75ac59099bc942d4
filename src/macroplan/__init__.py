"""macroplan: multi-day meal planning against a daily macro target."""

__version__ = "0.1.0"
