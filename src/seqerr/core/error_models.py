"""
Error model abstractions for seeding tip conditional likelihoods.

An error model maps an observed (possibly ambiguous) state mask to a
vector of relative likelihoods P(observation | true state). Separate from:
- StateSpace (alphabet and ambiguity codes)
- the likelihood engine that propagates tip vectors up a tree
- the optimizer that tunes the model parameters

Models expose their tunable rates through a narrow parameter-vector
interface (ids, names, values, bounds) so an external optimizer can
register and update them without knowing the model variant.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

import numpy as np

from seqerr.core.errors import InvalidArgument
from seqerr.core.states import full_mask, lowest_set_bit, popcount

logger = logging.getLogger(__name__)


# First optimizer parameter bit reserved for user-defined parameters
OPT_PARAM_USER = 1 << 16

OPT_PARAM_SEQ_ERROR = OPT_PARAM_USER << 0
OPT_PARAM_ADO_RATE = OPT_PARAM_USER << 1

SEQ_ERROR_MIN = 1.e-9
SEQ_ERROR_MAX = 0.5

ADO_RATE_MIN = 1.e-9
ADO_RATE_MAX = 0.7

DEFAULT_SEQ_ERROR = 0.01
DEFAULT_ADO_RATE = 0.05


@dataclass(frozen=True)
class ParamSpec:
    """
    Description of one tunable model parameter.

    Attributes:
        param_id: Optimizer parameter tag
        name: Display name used in reports
        lower: Lower bound the optimizer should respect
        upper: Upper bound the optimizer should respect
        default: Initial value for a freshly built model
    """

    param_id: int
    name: str
    lower: float
    upper: float
    default: float


SEQ_ERROR = ParamSpec(
    OPT_PARAM_SEQ_ERROR, "SEQ_ERROR", SEQ_ERROR_MIN, SEQ_ERROR_MAX, DEFAULT_SEQ_ERROR
)
ADO_RATE = ParamSpec(
    OPT_PARAM_ADO_RATE, "ADO_RATE", ADO_RATE_MIN, ADO_RATE_MAX, DEFAULT_ADO_RATE
)


class ErrorModel(ABC):
    """
    Abstract base class for error models.

    Subclasses declare their parameters in ``param_specs`` and implement
    ``_fill_state_probs`` for the masks that are not fully ambiguous.

    Parameter values are held in an immutable tuple that ``set_params``
    replaces in one assignment; each computation reads a single snapshot,
    so concurrent readers never see a half-applied update. Callers must
    still serialize writers.

    Attributes:
        name: Stable model identifier
        param_specs: Ordered parameter descriptions
        min_params: Shortest vector accepted by set_params
        options: Keyword options the constructor accepts beyond states and params
    """

    name: str = ""
    param_specs: Tuple[ParamSpec, ...] = ()
    min_params: int = 1
    options: Tuple[str, ...] = ()

    def __init__(self, states: int, params: Optional[Sequence[float]] = None):
        """
        Args:
            states: Number of true states (alphabet size)
            params: Optional initial parameter values (defaults otherwise)
        """
        states = int(states)
        if states <= 0:
            raise InvalidArgument(f"states must be positive, got {states}")
        self._states = states
        self._undef_state = full_mask(states)
        self._values: Tuple[float, ...] = tuple(spec.default for spec in self.param_specs)

        if params is not None:
            self.set_params(params)

    @property
    def states(self) -> int:
        """Number of true states."""
        return self._states

    @property
    def undefined_state(self) -> int:
        """All-ones mask (completely unknown observation)."""
        return self._undef_state

    def param_ids(self) -> List[int]:
        return [spec.param_id for spec in self.param_specs]

    def param_names(self) -> List[str]:
        return [spec.name for spec in self.param_specs]

    def param_bounds(self) -> List[Tuple[float, float]]:
        """(lower, upper) bounds per parameter; not enforced by the model."""
        return [(spec.lower, spec.upper) for spec in self.param_specs]

    def params(self) -> List[float]:
        return list(self._values)

    def set_params(self, values: Sequence[float]) -> None:
        """
        Replace parameter values in declaration order.

        Values beyond the number of declared parameters are ignored;
        parameters not covered by a shorter vector keep their current value.

        Args:
            values: New parameter values

        Raises:
            InvalidArgument: If fewer than ``min_params`` values are given
        """
        values = [float(v) for v in values]
        if len(values) < self.min_params:
            raise InvalidArgument(
                f"{self.name} needs at least {self.min_params} parameter value(s), "
                f"got {len(values)}",
                details={"model": self.name, "n_values": len(values)},
            )

        merged = list(self._values)
        n = min(len(values), len(merged))
        merged[:n] = values[:n]
        self._values = tuple(merged)

        logger.debug("%s parameters set to %s", self.name, self._values)

    def compute_state_probs(self, state: int, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Compute P(observed state | true state) for every true state.

        The fully ambiguous mask (and the empty mask, which carries no
        information) yields all ones. Values are relative likelihoods and
        are not normalized.

        Args:
            state: Observed state bitmask
            out: Optional buffer of length ``states`` to overwrite

        Returns:
            The filled buffer

        Raises:
            InvalidArgument: If state lies outside [0, undefined_state] or
                out has the wrong length
        """
        state = int(state)
        if state < 0 or state > self._undef_state:
            raise InvalidArgument(
                f"State mask {state} outside [0, {self._undef_state}]",
                details={"state": state, "states": self._states},
            )

        if out is None:
            out = np.empty(self._states, dtype=np.float64)
        elif len(out) != self._states:
            raise InvalidArgument(
                f"Output buffer has length {len(out)}, expected {self._states}"
            )

        if state == self._undef_state or state == 0:
            out[:] = 1.
            return out

        self._fill_state_probs(state, out, self._values)
        return out

    def compute_tip_clv(self, states: Sequence[int]) -> np.ndarray:
        """
        Tip vectors for a row of observed masks.

        Returns:
            (n, states) array, row i = compute_state_probs(states[i])
        """
        # object dtype keeps masks of 63+ states as Python ints
        masks = [int(m) for m in np.ravel(np.asarray(states, dtype=object))]
        clv = np.empty((len(masks), self._states), dtype=np.float64)
        for idx, mask in enumerate(masks):
            self.compute_state_probs(mask, clv[idx])
        return clv

    @abstractmethod
    def _fill_state_probs(self, state: int, out: np.ndarray, values: Tuple[float, ...]) -> None:
        """Fill out for a mask that is neither empty nor fully ambiguous."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Name, state count and parameter values, enough to rebuild the model."""
        return {
            "name": self.name,
            "states": self._states,
            "params": self.params(),
        }

    def __repr__(self) -> str:
        values = ", ".join(
            f"{spec.name}={value:g}" for spec, value in zip(self.param_specs, self._values)
        )
        return f"{self.__class__.__name__}(states={self._states}, {values})"


class UniformErrorModel(ErrorModel):
    """
    Uniform sequencing-error model for any alphabet.

    The observed (lowest set) state keeps 1 - e of the mass, split over
    the number of set bits; the error mass e is spread evenly over every
    state outside the mask. Works for nucleotides, amino acids or any
    other fixed state count.
    """

    name = "UNIFORM"
    param_specs = (SEQ_ERROR,)
    min_params = 1

    def _fill_state_probs(self, state: int, out: np.ndarray, values: Tuple[float, ...]) -> None:
        seq_error = values[0]
        state_id = lowest_set_bit(state)
        bitset = popcount(state)
        bitunset = self._states - bitset

        out[:] = seq_error / bitunset
        out[state_id] = (1. - seq_error) / bitset
