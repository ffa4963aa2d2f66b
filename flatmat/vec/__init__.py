"""One-dimensional float64 vector helpers."""

from flatmat.vec.vector import (
    add,
    all,
    any,
    as_vector,
    avg,
    cut,
    div,
    dot,
    equal,
    foreach,
    inc,
    mul,
    norm,
    ones,
    pop,
    prod,
    push,
    set_all,
    shift,
    sub,
    sum,
    unshift,
    zeros,
)

__all__ = [
    "add",
    "all",
    "any",
    "as_vector",
    "avg",
    "cut",
    "div",
    "dot",
    "equal",
    "foreach",
    "inc",
    "mul",
    "norm",
    "ones",
    "pop",
    "prod",
    "push",
    "set_all",
    "shift",
    "sub",
    "sum",
    "unshift",
    "zeros",
]
