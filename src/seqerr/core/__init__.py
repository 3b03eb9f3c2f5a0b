"""Core abstractions for state masks, error models and reporting."""

from seqerr.core.errors import SeqErrError, InvalidArgument, InternalInconsistency
from seqerr.core.states import StateSpace, full_mask, lowest_set_bit, popcount
from seqerr.core.error_models import (
    ErrorModel,
    UniformErrorModel,
    ParamSpec,
    SEQ_ERROR,
    ADO_RATE,
    OPT_PARAM_SEQ_ERROR,
    OPT_PARAM_ADO_RATE,
)
from seqerr.core.reporting import format_error_model, log_error_model
from seqerr.core.tip_observations import (
    ErrorModelTipObservation,
    ErrorModelTipConditionalProvider,
)
from seqerr.core.registry import (
    available_models,
    create_error_model,
    parse_error_model,
    from_dict,
)

__all__ = [
    "SeqErrError",
    "InvalidArgument",
    "InternalInconsistency",
    "StateSpace",
    "full_mask",
    "lowest_set_bit",
    "popcount",
    "ErrorModel",
    "UniformErrorModel",
    "ParamSpec",
    "SEQ_ERROR",
    "ADO_RATE",
    "OPT_PARAM_SEQ_ERROR",
    "OPT_PARAM_ADO_RATE",
    "format_error_model",
    "log_error_model",
    "ErrorModelTipObservation",
    "ErrorModelTipConditionalProvider",
    "available_models",
    "create_error_model",
    "parse_error_model",
    "from_dict",
]
