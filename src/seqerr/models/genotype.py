"""
Genotype error models for single-cell diploid data.

Two sources of error turn a true genotype into a different observed one:
- amplification/sequencing error (rate e), which changes alleles
- allelic dropout (rate d), where one allele of a heterozygote is lost
  and the genotype reads as homozygous

Dropout only ever turns a heterozygous truth into a homozygous-looking
observation, so every formula branches on the zygosity of the observed
genotype and of the candidate true genotype, and on the mutation
distance between them (0, 1 or 2 allele changes).

Variants:
- P17: closed-form coefficients of the 2017 single-cell error model
- PT19: refined coefficients with extra error/dropout interaction terms

References:
- Kozlov et al. (2022) "CellPhy: accurate and fast probabilistic inference
  of single-cell phylogenies from scDNA-seq data", Genome Biology
"""

from abc import abstractmethod
from typing import Any, Dict, Sequence, Optional, Tuple

import numpy as np

from seqerr.core.error_models import ErrorModel, SEQ_ERROR, ADO_RATE
from seqerr.core.errors import InvalidArgument
from seqerr.core.states import lowest_set_bit, popcount
from seqerr.states.genotypes import (
    MUTATION_DISTANCE,
    N_GENOTYPES,
    is_homozygous,
)


ONE_3 = 1. / 3.
ONE_6 = 1. / 6.
ONE_8 = 1. / 8.
THREE_8 = 3. / 8.
ONE_12 = 1. / 12.


class GenotypeErrorModel(ErrorModel):
    """
    Base class for error models over the ten-state genotype alphabet.

    Parameters are [SEQ_ERROR, ADO_RATE]. A one-value update changes the
    error rate only and keeps the current dropout rate.

    Masks with more than one (but not all) bits set have no closed form;
    by default the lowest set genotype is taken as the observation. With
    ``strict_ambiguity=True`` such masks are rejected instead.
    """

    param_specs = (SEQ_ERROR, ADO_RATE)
    min_params = 1
    options = ("strict_ambiguity",)

    def __init__(
        self,
        states: int = N_GENOTYPES,
        params: Optional[Sequence[float]] = None,
        strict_ambiguity: bool = False,
    ):
        if int(states) != N_GENOTYPES:
            raise InvalidArgument(
                f"{self.name} is defined for {N_GENOTYPES} genotype states, got {states}",
                details={"model": self.name, "states": states},
            )
        self.strict_ambiguity = strict_ambiguity
        super().__init__(states, params)

    @property
    def seq_error_rate(self) -> float:
        return self._values[0]

    @property
    def dropout_rate(self) -> float:
        return self._values[1]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["strict_ambiguity"] = self.strict_ambiguity
        return data

    def _fill_state_probs(self, state: int, out: np.ndarray, values: Tuple[float, ...]) -> None:
        if self.strict_ambiguity and popcount(state) != 1:
            raise InvalidArgument(
                f"{self.name} has no formula for partially ambiguous genotype mask {state:#x}",
                details={"model": self.name, "state": state},
            )

        seq_error, dropout = values
        state_id = lowest_set_bit(state)
        distances = MUTATION_DISTANCE[state_id]
        hom_origin = is_homozygous(state_id)

        # relative likelihoods, left unnormalized
        for k in range(self._states):
            out[k] = self._genotype_prob(
                int(distances[k]), hom_origin, is_homozygous(k), seq_error, dropout
            )

    @abstractmethod
    def _genotype_prob(
        self,
        distance: int,
        hom_origin: bool,
        hom_target: bool,
        e: float,
        d: float,
    ) -> float:
        """
        Likelihood for one (observed, true) genotype pair.

        Args:
            distance: Mutation distance between the two genotypes
            hom_origin: Observed genotype is homozygous
            hom_target: Candidate true genotype is homozygous
            e: Sequencing error rate
            d: Allelic dropout rate
        """
        pass


class P17GenotypeErrorModel(GenotypeErrorModel):
    """Genotype error model with the P17 coefficients."""

    name = "P17"

    def _genotype_prob(self, distance, hom_origin, hom_target, e, d):
        if distance == 0:
            if hom_origin:
                return 1. - e + 0.5 * e * d
            return 1. - e - d + e * d

        if distance == 1:
            if hom_target:
                return (1. - d) * e * ONE_3
            if hom_origin:
                return 0.5 * d + ONE_6 * e - ONE_3 * e * d
            return (1. - d) * e * ONE_6

        if hom_origin:
            return ONE_6 * e * d
        return 0.


class PT19GenotypeErrorModel(GenotypeErrorModel):
    """Genotype error model with the PT19 coefficients."""

    name = "PT19"

    def _genotype_prob(self, distance, hom_origin, hom_target, e, d):
        # 0 letters away
        if distance == 0:
            if hom_origin:
                return 1. - e + 0.5 * e * d
            return (1. - d) * (1. - e) + ONE_12 * e * d

        # 1 letter away
        if distance == 1:
            if hom_target:
                return ONE_12 * e * d + ONE_3 * (1. - d) * e
            if hom_origin:
                return 0.5 * d + ONE_6 * e - THREE_8 * e * d
            return ONE_6 * e - ONE_8 * e * d

        # 2 letters away
        if hom_origin:
            return ONE_12 * e * d
        return 0.
