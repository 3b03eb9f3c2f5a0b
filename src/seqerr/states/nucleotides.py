"""Nucleotide state space with IUPAC ambiguity codes."""

from typing import Dict

from seqerr.core.states import StateSpace


NUCLEOTIDES = ['A', 'C', 'G', 'T']

# IUPAC code -> bases it stands for
IUPAC_CODES: Dict[str, str] = {
    'A': 'A',
    'C': 'C',
    'G': 'G',
    'T': 'T',
    'U': 'T',
    'R': 'AG',
    'Y': 'CT',
    'S': 'CG',
    'W': 'AT',
    'K': 'GT',
    'M': 'AC',
    'B': 'CGT',
    'D': 'AGT',
    'H': 'ACT',
    'V': 'ACG',
    'N': 'ACGT',
    '-': 'ACGT',
    '?': 'ACGT',
}


def _nucleotide_masks() -> Dict[str, int]:
    masks = {}
    for code, bases in IUPAC_CODES.items():
        mask = 0
        for nt in bases:
            mask |= 1 << NUCLEOTIDES.index(nt)
        masks[code] = mask
    return masks


class NucleotideStateSpace(StateSpace):
    """
    State space of nucleotides (A, C, G, T).

    Observed characters use the IUPAC alphabet: R (A/G), Y (C/T) and the
    other two- and three-base codes encode partial ambiguity, while N, '-'
    and '?' encode the completely unknown state (mask 0b1111).
    """

    def __init__(self):
        super().__init__(
            states=NUCLEOTIDES.copy(),
            symbols=_nucleotide_masks(),
            metadata={"type": "nucleotides"},
        )

    def __repr__(self) -> str:
        return "NucleotideStateSpace(ACGT)"
