"""Synthetic sequences with planted binding sites."""

import random
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

from .alphabet import reverse_complement, sample_iupac
from ..utils.config import NUCLEOTIDES, RANDOM_SEED


@dataclass
class PlantedPair:
    """A sequence carrying one site of each of two motifs."""
    sequence: str
    site_1: str
    site_2: str
    position_1: int  # 0-indexed start of site 1
    position_2: int  # 0-indexed start of site 2 (as written on the + strand)
    offset: int  # position_2 - position_1
    opposite: bool  # site 2 planted as its reverse complement
    metadata: Dict

    def to_dict(self) -> Dict:
        return asdict(self)


class SequenceGenerator:
    """Generate background sequences and plant motif sites into them.

    Background composition is controlled through ``alphabet`` and
    ``weights``; an A/T-only background guarantees that a site rich in
    G/C can only match where it was planted.
    """

    def __init__(self, seed: int = RANDOM_SEED):
        """Initialize the generator.

        Args:
            seed: Random seed for reproducibility
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def random_sequence(
        self,
        length: int,
        alphabet: str = NUCLEOTIDES,
        weights: Optional[List[float]] = None,
    ) -> str:
        """Generate a random DNA sequence.

        Args:
            length: Sequence length
            alphabet: Bases to draw from
            weights: Relative base weights (uniform if None)

        Returns:
            Random DNA sequence
        """
        return ''.join(self.rng.choices(alphabet, weights=weights, k=length))

    @staticmethod
    def plant(sequence: str, site: str, position: int) -> str:
        """Overwrite ``sequence`` with ``site`` starting at ``position``."""
        if position < 0 or position + len(site) > len(sequence):
            raise ValueError(
                f"Site of length {len(site)} at {position} does not fit "
                f"in sequence of length {len(sequence)}"
            )
        return sequence[:position] + site + sequence[position + len(site):]

    def planted_pair(
        self,
        site_1: str,
        site_2: str,
        position_1: int,
        offset: int,
        length: int = 200,
        opposite: bool = False,
        background_alphabet: str = "AT",
    ) -> PlantedPair:
        """Build a sequence with two sites at a fixed relative offset.

        IUPAC codes in the sites are sampled into concrete bases.

        Args:
            site_1: Site (or IUPAC pattern) of motif 1
            site_2: Site (or IUPAC pattern) of motif 2
            position_1: Start of site 1
            offset: Start of site 2 relative to start of site 1
            length: Total sequence length
            opposite: Plant site 2 on the reverse strand
            background_alphabet: Bases the background is drawn from

        Returns:
            PlantedPair describing the sequence
        """
        concrete_1 = sample_iupac(site_1, self.rng)
        concrete_2 = sample_iupac(site_2, self.rng)
        written_2 = reverse_complement(concrete_2) if opposite else concrete_2

        position_2 = position_1 + offset
        lo, hi = sorted([(position_1, len(concrete_1)), (position_2, len(written_2))])
        if lo[0] + lo[1] > hi[0]:
            raise ValueError(f"Sites overlap at offset {offset}")

        sequence = self.random_sequence(length, alphabet=background_alphabet)
        sequence = self.plant(sequence, concrete_1, position_1)
        sequence = self.plant(sequence, written_2, position_2)

        return PlantedPair(
            sequence=sequence,
            site_1=concrete_1,
            site_2=concrete_2,
            position_1=position_1,
            position_2=position_2,
            offset=offset,
            opposite=opposite,
            metadata={"seed": self.seed, "background": background_alphabet},
        )
