"""State spaces and ambiguity-mask helpers."""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from seqerr.core.errors import InvalidArgument


def full_mask(n_states: int) -> int:
    """Return the all-ones mask (completely unknown state) for n_states."""
    return (1 << n_states) - 1


def popcount(mask: int) -> int:
    """Number of set bits in a state mask."""
    return bin(mask).count("1")


def lowest_set_bit(mask: int) -> int:
    """
    Index of the lowest set bit of a non-zero mask.

    Raises:
        InvalidArgument: If mask is zero or negative
    """
    if mask <= 0:
        raise InvalidArgument(f"Mask must be positive, got {mask}")
    return (mask & -mask).bit_length() - 1


def state_mask(index: int) -> int:
    """Single-bit mask for the state at index."""
    return 1 << index


@dataclass
class StateSpace:
    """
    Enumerated alphabet of true states with an ambiguity-code table.

    States are indexed in enumeration order; an observation is encoded
    as a bitmask over those indices. A single set bit is an unambiguous
    observation, the all-ones mask means "completely unknown".

    Attributes:
        states: Enumerated state identifiers (order defines bit positions)
        symbols: Observed symbol -> bitmask (ambiguity codes included)
        metadata: Domain-specific metadata (not interpreted by base class)
    """

    states: List[Any]
    symbols: Dict[str, int] = field(default_factory=dict)
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        if not self.states:
            raise InvalidArgument("State space needs at least one state")
        if not self.symbols:
            self.symbols = {
                str(s): state_mask(i) for i, s in enumerate(self.states)
            }

    @classmethod
    def from_list(
        cls,
        states: List[Any],
        symbols: Optional[Dict[str, int]] = None,
        metadata: Optional[dict] = None,
    ) -> "StateSpace":
        """
        Create state space from explicit list.

        Args:
            states: List of state identifiers
            symbols: Optional symbol -> mask table (defaults to one symbol per state)
            metadata: Optional domain-specific metadata

        Returns:
            StateSpace with pre-enumerated states
        """
        return cls(states=list(states), symbols=dict(symbols or {}), metadata=metadata or {})

    @property
    def dimension(self) -> int:
        return len(self.states)

    @property
    def undefined_state(self) -> int:
        """Mask with every state bit set."""
        return full_mask(self.dimension)

    def encode(self, symbol: str) -> int:
        """
        Map an observed symbol to its state mask.

        Raises:
            InvalidArgument: If the symbol is not part of the alphabet
        """
        key = symbol.upper()
        if key in self.symbols:
            return self.symbols[key]
        if symbol in self.symbols:
            return self.symbols[symbol]
        raise InvalidArgument(
            f"Unknown symbol {symbol!r} for {self!r}",
            details={"symbol": symbol},
        )

    def encode_sequence(self, symbols) -> List[int]:
        """Encode an iterable of symbols (e.g. one alignment row)."""
        return [self.encode(s) for s in symbols]

    def decode(self, mask: int) -> List[Any]:
        """States whose bits are set in mask, in enumeration order."""
        self.check_mask(mask)
        return [s for i, s in enumerate(self.states) if mask & (1 << i)]

    def is_ambiguous(self, mask: int) -> bool:
        """True for any mask that does not name exactly one state."""
        self.check_mask(mask)
        return popcount(mask) != 1

    def check_mask(self, mask: int) -> None:
        if mask < 0 or mask > self.undefined_state:
            raise InvalidArgument(
                f"Mask {mask} outside [0, {self.undefined_state}] for {self.dimension} states"
            )

    def __len__(self) -> int:
        return self.dimension

    def __getitem__(self, idx: int) -> Any:
        return self.states[idx]

    def __repr__(self) -> str:
        return f"StateSpace(dimension={self.dimension})"
