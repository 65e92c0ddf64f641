import enum
import math
from decimal import Decimal


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def format_number(value: float) -> str:
    """Shortest digits that round-trip, exponent form below 1e-4 and from 1e6 on

    4.0 => '4', 2.5 => '2.5', 2000000.0 => '2e+06', 0.00001 => '1e-05', -0.0 => '-0'
    """
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"

    _, digits, digits_exp = Decimal(repr(abs(value))).normalize().as_tuple()
    mantissa = "".join(str(d) for d in digits)
    exp = len(mantissa) + digits_exp - 1

    if exp < -4 or exp >= 6:
        fraction = "." + mantissa[1:] if len(mantissa) > 1 else ""
        return f"{sign}{mantissa[0]}{fraction}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if exp < 0:
        return f"{sign}0.{'0' * (-exp - 1)}{mantissa}"
    integral = mantissa[: exp + 1].ljust(exp + 1, "0")
    fraction = "." + mantissa[exp + 1 :] if len(mantissa) > exp + 1 else ""
    return sign + integral + fraction
