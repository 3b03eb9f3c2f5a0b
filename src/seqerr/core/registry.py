"""
Error model lookup, construction and model-string parsing.

The model family is closed: UNIFORM, P17 and PT19. Model strings name a
variant and optionally its initial values in braces, e.g.

    P17
    PT19{0.01/0.05}
    uniform{0.002}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type
import logging
import re

from seqerr.core.error_models import ErrorModel, UniformErrorModel
from seqerr.core.errors import InvalidArgument
from seqerr.models.genotype import P17GenotypeErrorModel, PT19GenotypeErrorModel
from seqerr.states.genotypes import N_GENOTYPES

logger = logging.getLogger(__name__)


ERROR_MODELS: Dict[str, Type[ErrorModel]] = {
    UniformErrorModel.name: UniformErrorModel,
    P17GenotypeErrorModel.name: P17GenotypeErrorModel,
    PT19GenotypeErrorModel.name: PT19GenotypeErrorModel,
}

ALIASES: Dict[str, str] = {
    "E": UniformErrorModel.name,
    "UNIERR": UniformErrorModel.name,
}

DEFAULT_STATES: Dict[str, int] = {
    UniformErrorModel.name: 4,
    P17GenotypeErrorModel.name: N_GENOTYPES,
    PT19GenotypeErrorModel.name: N_GENOTYPES,
}

_MODEL_STRING = re.compile(r"^\s*([A-Za-z][A-Za-z0-9_]*)\s*(?:\{([^}]*)\})?\s*$")


@dataclass
class ErrorModelSpec:
    """
    Parsed error model string.

    Attributes:
        name: Canonical model name
        params: Initial values given in the string (may be empty)
    """

    name: str
    params: List[float] = field(default_factory=list)


def available_models() -> List[str]:
    """Canonical names of all error models."""
    return list(ERROR_MODELS.keys())


def resolve_name(name: str) -> str:
    """
    Canonical model name for a (case-insensitive) name or alias.

    Raises:
        InvalidArgument: If the name is unknown
    """
    key = name.strip().upper()
    key = ALIASES.get(key, key)
    if key not in ERROR_MODELS:
        available = ", ".join(available_models())
        raise InvalidArgument(
            f"Unknown error model '{name}'. Available models: {available}",
            details={"name": name},
        )
    return key


def parse_model_string(text: str) -> ErrorModelSpec:
    """
    Split a model string into name and initial values.

    Values inside braces may be separated by '/' or ','.

    Raises:
        InvalidArgument: If the string or one of its values is malformed
    """
    match = _MODEL_STRING.match(text)
    if match is None:
        raise InvalidArgument(f"Malformed error model string: '{text}'")

    name = resolve_name(match.group(1))
    params: List[float] = []
    if match.group(2) is not None:
        for token in re.split(r"[/,]", match.group(2)):
            token = token.strip()
            try:
                params.append(float(token))
            except ValueError:
                raise InvalidArgument(
                    f"Invalid parameter value '{token}' in error model string '{text}'"
                ) from None

    return ErrorModelSpec(name=name, params=params)


def create_error_model(
    name: str,
    states: Optional[int] = None,
    params: Optional[Sequence[float]] = None,
    **kwargs: Any,
) -> ErrorModel:
    """
    Build an error model by name.

    Args:
        name: Model name or alias (case-insensitive)
        states: Alphabet size (4 for UNIFORM, 10 for genotype models if omitted)
        params: Optional initial parameter values
        **kwargs: Extra keyword arguments for the model class

    Returns:
        ErrorModel instance

    Raises:
        InvalidArgument: If the name is unknown or the model does not take
            one of the given options
    """
    key = resolve_name(name)
    if states is None:
        states = DEFAULT_STATES[key]

    cls = ERROR_MODELS[key]
    unknown = sorted(set(kwargs) - set(cls.options))
    if unknown:
        raise InvalidArgument(
            f"{key} does not accept option(s): {', '.join(unknown)}",
            details={"model": key, "options": unknown},
        )

    model = cls(states, params=params, **kwargs)
    logger.debug("Created %r", model)
    return model


def parse_error_model(text: str, states: Optional[int] = None, **kwargs: Any) -> ErrorModel:
    """Build an error model from a model string such as 'PT19{0.01/0.05}'."""
    spec = parse_model_string(text)
    return create_error_model(
        spec.name, states=states, params=spec.params or None, **kwargs
    )


def from_dict(data: Mapping[str, Any]) -> ErrorModel:
    """
    Rebuild a model from ErrorModel.to_dict() output.

    Keys other than name, states and params are passed on as model options.

    Raises:
        InvalidArgument: If a required key is missing
    """
    try:
        name = data["name"]
        states = int(data["states"])
        params = list(data["params"])
    except KeyError as e:
        raise InvalidArgument(f"Error model record is missing {e}") from None

    options = {k: v for k, v in data.items() if k not in ("name", "states", "params")}
    model = create_error_model(name, states=states, **options)
    model.set_params(params)
    return model
