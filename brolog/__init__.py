"""brolog: parse Bro/Zeek ASCII logs and summarize them by configured fields."""

__version__ = "1.0.0"
