"""
Registry mapping attribute names to disjoint single-bit masks
"""
import logging
from types import MappingProxyType
from typing import Iterable, Iterator, List, Sequence

from ..exceptions import ConfigError, UnknownAttributeError
from ..models.registry import AttributeDefinition
from ..utils.bitwise import BitArithmetic
from ..utils.validators import validate_attribute_names

logger = logging.getLogger(__name__)


class AttributeRegistry:
    """
    Immutable name -> bit mapping built once from an ordered list of names.

    Bit ``i`` is assigned to ``names[i]``. Masks are signed values of the
    registry's width, so a name registered at the top bit maps to the
    negative minimum of that width.
    """

    __slots__ = ("_arithmetic", "_names", "_masks")

    def __init__(self, names: Sequence[str], width: int = 256):
        arithmetic = BitArithmetic(width)
        names = list(names) if not isinstance(names, (str, bytes)) else names

        errors = validate_attribute_names(names, width)
        if errors:
            logger.error(f"Invalid attribute registry: {'; '.join(errors)}")
            raise ConfigError(f"Invalid attribute registry: {'; '.join(errors)}")

        self._arithmetic = arithmetic
        self._names = tuple(names)
        self._masks = MappingProxyType({
            name: arithmetic.single_bit(position) for position, name in enumerate(names)
        })
        logger.info(f"Registered {len(names)} attributes in a {width}-bit mask")

    def __setattr__(self, key, value):
        if hasattr(self, "_masks"):
            raise AttributeError("AttributeRegistry is immutable")
        super().__setattr__(key, value)

    def __contains__(self, name) -> bool:
        return name in self._masks

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self):
        return f"AttributeRegistry({list(self._names)!r}, width={self.width})"

    @property
    def names(self) -> tuple:
        return self._names

    @property
    def width(self) -> int:
        return self._arithmetic.width

    @property
    def arithmetic(self) -> BitArithmetic:
        return self._arithmetic

    def mask_of(self, name: str) -> int:
        """
        Look up the single-bit mask for an attribute

        Args:
            name: Registered attribute name

        Returns:
            Signed mask with exactly one bit set

        Raises:
            UnknownAttributeError: if the name was never registered
        """
        try:
            return self._masks[name]
        except (KeyError, TypeError):
            raise UnknownAttributeError(name) from None

    def combined_mask(self, names: Iterable[str]) -> int:
        """OR-combine the masks of every named attribute"""
        combined = 0
        for name in names:
            combined = self._arithmetic.bit_or(combined, self.mask_of(name))
        return combined

    def decode(self, mask: int) -> List[str]:
        """Names whose bits are set in ``mask``, in registration order"""
        return [
            self._names[position]
            for position in self._arithmetic.bit_positions(mask)
            if position < len(self._names)
        ]

    def definitions(self) -> List[AttributeDefinition]:
        return [
            AttributeDefinition(name=name, bit=position, mask=self._masks[name])
            for position, name in enumerate(self._names)
        ]
