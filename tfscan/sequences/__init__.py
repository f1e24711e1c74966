"""Sequence alphabet and generation modules for tfscan."""

from .alphabet import encode_sequence, reverse_complement, sample_iupac, IUPAC_CODES
from .generator import SequenceGenerator, PlantedPair
