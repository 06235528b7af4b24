"""
Fixed-width two's-complement bit arithmetic

Python integers are unbounded, so every operation here reduces its result to a
chosen width W and reinterprets the pattern as a signed W-bit value.
"""
from typing import Iterator

from ..exceptions import ConfigError


def to_unsigned(value: int, width: int) -> int:
    """Raw W-bit pattern of ``value`` as a non-negative integer"""
    return value & ((1 << width) - 1)


def to_signed(value: int, width: int) -> int:
    """
    Interpret the low ``width`` bits of ``value`` as a two's-complement number

    Args:
        value: Any integer; bits above ``width`` are discarded
        width: Number of bits in the word

    Returns:
        Signed value in ``[-2**(width-1), 2**(width-1) - 1]``
    """
    pattern = to_unsigned(value, width)
    if pattern >> (width - 1):
        return pattern - (1 << width)
    return pattern


class BitArithmetic:
    """Signed bitwise operations over a single fixed width"""

    def __init__(self, width: int = 256):
        if not isinstance(width, int) or isinstance(width, bool) or width < 1:
            raise ConfigError(f"Bit width must be a positive integer, got {width!r}")
        self.width = width
        self.mask = (1 << width) - 1
        self.min_value = -(1 << (width - 1))
        self.max_value = (1 << (width - 1)) - 1

    def __repr__(self):
        return f"BitArithmetic(width={self.width})"

    def __eq__(self, other):
        return isinstance(other, BitArithmetic) and other.width == self.width

    def __hash__(self):
        return hash(self.width)

    def contains(self, value: int) -> bool:
        """Whether ``value`` is representable as a signed W-bit integer"""
        return self.min_value <= value <= self.max_value

    def wrap(self, value: int) -> int:
        """Reduce an arbitrary integer into the signed W-bit range"""
        return to_signed(value, self.width)

    def single_bit(self, position: int) -> int:
        """Mask with only ``position`` set, as a signed W-bit value"""
        self._check_position(position)
        return self.wrap(1 << position)

    def bit_positions(self, value: int) -> Iterator[int]:
        """Yield the indexes of the set bits of ``value``'s W-bit pattern, lowest first"""
        self._check_value(value)

        def positions(pattern):
            index = 0
            while pattern:
                if pattern & 1:
                    yield index
                pattern >>= 1
                index += 1

        return positions(to_unsigned(value, self.width))

    def shift_left(self, value: int, positions: int) -> int:
        """
        Logical left shift

        Bits shifted past the top are discarded and the result is read back
        as a signed W-bit value, so its sign may differ from
        ``value * 2**positions``. Shifting by W or more yields 0.
        """
        self._check_value(value)
        self._check_count(positions)
        if positions >= self.width:
            return 0
        return self.wrap(value << positions)

    def shift_right(self, value: int, positions: int) -> int:
        """
        Arithmetic right shift, equal to ``floor(value / 2**positions)``

        Shifting by W or more saturates to 0 for non-negative values and -1
        for negative ones.
        """
        self._check_value(value)
        self._check_count(positions)
        if positions >= self.width:
            return -1 if value < 0 else 0
        # Python's >> on ints already propagates the sign (floor division)
        return value >> positions

    def bit_and(self, a: int, b: int) -> int:
        self._check_value(a)
        self._check_value(b)
        return a & b

    def bit_or(self, a: int, b: int) -> int:
        self._check_value(a)
        self._check_value(b)
        return a | b

    def bit_xor(self, a: int, b: int) -> int:
        self._check_value(a)
        self._check_value(b)
        return a ^ b

    def bit_not(self, value: int) -> int:
        """Complement at this instance's width; always ``-value - 1``"""
        self._check_value(value)
        return self.wrap(~value)

    def clear_bits(self, base: int, remove: int) -> int:
        """``base`` with every bit of ``remove`` cleared, whatever its current state"""
        return self.bit_and(base, self.bit_not(remove))

    def _check_value(self, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        if not self.contains(value):
            raise ValueError(f"{value} does not fit in a signed {self.width}-bit integer")

    def _check_count(self, positions: int) -> None:
        if not isinstance(positions, int) or isinstance(positions, bool):
            raise TypeError(f"Shift count must be an int, got {type(positions).__name__}")
        if positions < 0:
            raise ValueError(f"Shift count must be non-negative, got {positions}")

    def _check_position(self, position: int) -> None:
        self._check_count(position)
        if position >= self.width:
            raise ValueError(f"Bit position {position} out of range for width {self.width}")
