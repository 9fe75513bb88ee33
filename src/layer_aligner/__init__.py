"""Layer Aligner - align portrait layers on a shared canvas using marked reference points."""

__version__ = "1.0.0"
