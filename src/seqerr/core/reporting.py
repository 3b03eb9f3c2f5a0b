"""Human-readable summaries of error models."""

from typing import Optional
import logging

from seqerr.core.error_models import ErrorModel
from seqerr.core.errors import InternalInconsistency

logger = logging.getLogger(__name__)


def format_error_model(model: ErrorModel) -> str:
    """
    Render a model as one log line.

    Example:
        >>> format_error_model(P17GenotypeErrorModel(params=[0.1, 0.2]))
        'P17,  SEQ_ERROR: 0.1,  ADO_RATE: 0.2'

    Raises:
        InternalInconsistency: If the model reports a different number of
            parameter names and values
    """
    names = model.param_names()
    values = model.params()
    if len(names) != len(values):
        raise InternalInconsistency(
            f"{model.name} reports {len(names)} parameter names but {len(values)} values",
            details={"names": names, "values": values},
        )

    line = model.name
    for name, value in zip(names, values):
        line += f",  {name}: {value:g}"
    return line


def log_error_model(
    model: ErrorModel,
    log: Optional[logging.Logger] = None,
    level: int = logging.INFO,
) -> str:
    """Write the model summary to a logger and return it."""
    line = format_error_model(model)
    (log or logger).log(level, line)
    return line
