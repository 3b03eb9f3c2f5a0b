"""Genotype error model variants."""

from seqerr.models.genotype import (
    GenotypeErrorModel,
    P17GenotypeErrorModel,
    PT19GenotypeErrorModel,
)

__all__ = [
    "GenotypeErrorModel",
    "P17GenotypeErrorModel",
    "PT19GenotypeErrorModel",
]
