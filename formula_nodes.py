"""Nodos del árbol de expresión producido por el parser."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Literal:
    value: float
    text: str = ""


@dataclass(frozen=True)
class Reference:
    name: str


@dataclass(frozen=True)
class UnaryOp:
    # "-" y "+" prefijos, o los marcadores angulares postfijos "deg" y "rad"
    op: str
    operand: "Node"


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"


@dataclass(frozen=True)
class Call:
    name: str
    argument: "Node"


Node = Union[Literal, Reference, UnaryOp, BinaryOp, Call]
