"""
Diploid genotype state space (GT10).

Ten unphased genotypes over the four nucleotides, in the fixed order

    AA CC GG TT AC AG AT CG CT GT

Each genotype carries an explicit zygosity tag derived from its alleles;
the error-model formulas branch on that tag, never on the index value.
The mutation distance table gives the number of single-allele changes
separating two genotypes.
"""

from typing import Dict, List, Tuple

import numpy as np

from seqerr.core.states import StateSpace
from seqerr.states.nucleotides import NUCLEOTIDES


GENOTYPES: List[Tuple[str, str]] = [
    ('A', 'A'), ('C', 'C'), ('G', 'G'), ('T', 'T'),
    ('A', 'C'), ('A', 'G'), ('A', 'T'), ('C', 'G'), ('C', 'T'), ('G', 'T'),
]

GENOTYPE_NAMES: List[str] = [a + b for a, b in GENOTYPES]

N_GENOTYPES = len(GENOTYPES)

HOMOZYGOUS = "homozygous"
HETEROZYGOUS = "heterozygous"

ZYGOSITY: Tuple[str, ...] = tuple(
    HOMOZYGOUS if a == b else HETEROZYGOUS for a, b in GENOTYPES
)

# One-letter GT10 codes: plain bases for homozygotes, IUPAC pair codes for
# heterozygotes.
GT10_CODES: Dict[str, str] = {
    'A': 'AA', 'C': 'CC', 'G': 'GG', 'T': 'TT',
    'M': 'AC', 'R': 'AG', 'W': 'AT', 'S': 'CG', 'Y': 'CT', 'K': 'GT',
}

UNDEFINED_CODES = ('N', '-', '?')

#                              AA CC GG TT AC AG AT CG CT GT
MUTATION_DISTANCE = np.array([[0, 2, 2, 2, 1, 1, 1, 2, 2, 2],   # AA
                              [2, 0, 2, 2, 1, 2, 2, 1, 1, 2],   # CC
                              [2, 2, 0, 2, 2, 1, 2, 1, 2, 1],   # GG
                              [2, 2, 2, 0, 2, 2, 1, 2, 1, 1],   # TT
                              [1, 1, 2, 2, 0, 1, 1, 1, 1, 2],   # AC
                              [1, 2, 1, 2, 1, 0, 1, 1, 2, 1],   # AG
                              [1, 2, 2, 1, 1, 1, 0, 2, 1, 1],   # AT
                              [2, 1, 1, 2, 1, 1, 2, 0, 1, 1],   # CG
                              [2, 1, 2, 1, 1, 2, 1, 1, 0, 1],   # CT
                              [2, 2, 1, 1, 2, 1, 1, 1, 1, 0]],  # GT
                             dtype=np.int8)
MUTATION_DISTANCE.setflags(write=False)


def is_homozygous(state: int) -> bool:
    """True if genotype state index carries two identical alleles."""
    return ZYGOSITY[state] == HOMOZYGOUS


def is_heterozygous(state: int) -> bool:
    """True if genotype state index carries two different alleles."""
    return ZYGOSITY[state] == HETEROZYGOUS


def mutation_distance(i: int, j: int) -> int:
    """Number of allele substitutions between genotype states i and j."""
    return int(MUTATION_DISTANCE[i, j])


def genotype_index(alleles: str) -> int:
    """
    Index of an unphased genotype given as two alleles.

    Accepts "AC", "CA", "A/C" and "A|C".
    """
    bases = alleles.upper().replace('/', '').replace('|', '')
    if len(bases) != 2 or any(b not in NUCLEOTIDES for b in bases):
        raise KeyError(alleles)
    pair = tuple(sorted(bases, key=NUCLEOTIDES.index))
    return GENOTYPES.index(pair)


def _genotype_masks() -> Dict[str, int]:
    masks = {code: 1 << GENOTYPE_NAMES.index(name) for code, name in GT10_CODES.items()}
    for code in UNDEFINED_CODES:
        masks[code] = (1 << N_GENOTYPES) - 1
    return masks


class GenotypeStateSpace(StateSpace):
    """
    State space of the ten diploid genotypes.

    Observations may be written as one-letter GT10 codes (A, M, R, ...)
    or as allele pairs ("AC", "C/A"); N, '-' and '?' are fully unknown.
    """

    def __init__(self):
        super().__init__(
            states=GENOTYPE_NAMES.copy(),
            symbols=_genotype_masks(),
            metadata={"type": "genotypes", "ploidy": 2},
        )

    def encode(self, symbol: str) -> int:
        if len(symbol) > 1:
            try:
                return 1 << genotype_index(symbol)
            except KeyError:
                pass
        return super().encode(symbol)

    def genotype(self, index: int) -> str:
        """Two-letter name of genotype state index."""
        return GENOTYPE_NAMES[index]

    def is_homozygous(self, index: int) -> bool:
        return is_homozygous(index)

    def __repr__(self) -> str:
        return "GenotypeStateSpace(GT10)"
