"""Alphabets and ambiguity codes."""

from seqerr.states.nucleotides import NucleotideStateSpace
from seqerr.states.genotypes import (
    GenotypeStateSpace,
    MUTATION_DISTANCE,
    is_homozygous,
    is_heterozygous,
    mutation_distance,
)

__all__ = [
    "NucleotideStateSpace",
    "GenotypeStateSpace",
    "MUTATION_DISTANCE",
    "is_homozygous",
    "is_heterozygous",
    "mutation_distance",
]
