"""
tfscan: look-ahead PWM scanning for transcription factor binding sites

Finds motif occurrences on a DNA sequence with branch-and-bound pruning
of the log-likelihood ratio score, and measures spacing constraints
between the binding sites of two motifs.
"""

__version__ = "0.1.0"
