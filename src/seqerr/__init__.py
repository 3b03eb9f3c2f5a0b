"""
seqerr: sequencing-error and genotype-error models for phylogenetic tip likelihoods.

Maps an observed, possibly ambiguous, state at a tree tip to relative
likelihoods over the true states, for nucleotide, amino-acid or diploid
genotype alphabets.
"""

__version__ = "0.1.0"

from seqerr.core import (
    ErrorModel,
    UniformErrorModel,
    InvalidArgument,
    InternalInconsistency,
    available_models,
    create_error_model,
    parse_error_model,
    from_dict,
    format_error_model,
)
from seqerr.models import P17GenotypeErrorModel, PT19GenotypeErrorModel
from seqerr.states import NucleotideStateSpace, GenotypeStateSpace

__all__ = [
    "ErrorModel",
    "UniformErrorModel",
    "P17GenotypeErrorModel",
    "PT19GenotypeErrorModel",
    "InvalidArgument",
    "InternalInconsistency",
    "available_models",
    "create_error_model",
    "parse_error_model",
    "from_dict",
    "format_error_model",
    "NucleotideStateSpace",
    "GenotypeStateSpace",
    "__version__",
]
