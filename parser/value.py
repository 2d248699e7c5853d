import math
from typing import Union


class Nil:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "nil"

    def __bool__(self):
        return False


NIL = Nil()

Value = Union[str, float, bool, Nil]


def is_equal(a: Value, b: Value) -> bool:
    # bool is an int subclass, so `True == 1.0` must not leak through
    if type(a) is not type(b):
        return False
    return a == b


def type_name(value: Value) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    return "nil"


def stringify(value: Value) -> str:
    """Render a value the way the language shows it to users."""
    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        text = repr(value)
        if "e" in text:
            # 1e16 and 1e-7, not 1e+16 and 1e-07
            mantissa, exponent = text.split("e")
            text = f"{mantissa}e{int(exponent)}"
        return text

    if isinstance(value, Nil):
        return "nil"

    return value
