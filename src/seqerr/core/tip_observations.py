"""Tip-observation adapters that seed tip likelihood vectors from error models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from seqerr.core.error_models import ErrorModel
from seqerr.core.errors import InvalidArgument


@dataclass
class ErrorModelTipObservation:
    """Observation that returns error-model likelihood vectors for state masks."""

    model: ErrorModel

    @property
    def n_states(self) -> int:
        return self.model.states

    def get_tip_likelihood(self, observed_state: int) -> np.ndarray:
        return self.model.compute_state_probs(int(observed_state))

    def get_tip_likelihoods_matrix(self, observed_states: np.ndarray) -> np.ndarray:
        return self.model.compute_tip_clv(observed_states)


class ErrorModelTipConditionalProvider:
    """
    Tip conditional provider backed by a matrix of observed state masks.

    data[taxon_idx, site_idx] holds the ambiguity mask observed for a taxon
    at a site; conditionals are produced by the partition's error model.
    """

    def __init__(
        self,
        data: np.ndarray,
        taxon_names: List[str],
        model: ErrorModel,
    ):
        """
        Initialize from data array.

        Args:
            data: (n_taxa, n_sites) array of observed state masks; kept as
                Python ints so alphabets of 63+ states do not overflow
            taxon_names: List of taxon names matching row order
            model: Error model for the partition
        """
        self.data = np.asarray(data, dtype=object)
        if self.data.ndim != 2 or self.data.shape[0] != len(taxon_names):
            raise InvalidArgument(
                f"data must be (n_taxa, n_sites) with {len(taxon_names)} rows, "
                f"got shape {self.data.shape}",
                details={"shape": self.data.shape, "n_taxa": len(taxon_names)},
            )
        self.taxon_names = taxon_names
        self.taxon_to_idx = {name: i for i, name in enumerate(taxon_names)}
        self.model = model

    @property
    def n_states(self) -> int:
        return self.model.states

    @property
    def n_sites(self) -> int:
        return self.data.shape[1]

    def get_tip_conditional(self, tip_name: str, site_idx: int) -> np.ndarray:
        """
        Get conditional likelihood at tip.

        Unknown taxa are treated as completely unobserved.
        """
        taxon_idx = self.taxon_to_idx.get(tip_name)

        if taxon_idx is None:
            return np.ones(self.n_states)

        return self.model.compute_state_probs(int(self.data[taxon_idx, site_idx]))

    def get_tip_clv(self, tip_name: str) -> np.ndarray:
        """(n_sites, n_states) conditionals for every site of one tip."""
        taxon_idx = self.taxon_to_idx.get(tip_name)
        if taxon_idx is None:
            return np.ones((self.n_sites, self.n_states))
        return self.model.compute_tip_clv(self.data[taxon_idx])
