"""
Parse tree for infix expressions.

One frozen dataclass per grammar symbol:

    Expr        -> MulDivChain ( ('+'|'-') MulDivChain )*
    MulDivChain -> PowChain ( ('*'|'/') PowChain )*
    PowChain    -> Primary ('^' PowChain)?
    Primary     -> Leaf | Paren

Left-associative chains keep their operands flat: `first` plus a tuple of
(operator, operand) continuations, applied left to right. An empty `rest`
tuple is the epsilon continuation. `PowChain` recurses on the right, so
`a^b^c` is `PowChain(a, PowChain(b, PowChain(c)))`.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class Leaf:
    lexeme: str


@dataclass(frozen=True)
class Paren:
    expr: 'Expr'


Primary = Union[Leaf, Paren]


@dataclass(frozen=True)
class PowChain:
    base: Primary
    exponent: Optional['PowChain'] = None


@dataclass(frozen=True)
class MulDivChain:
    first: PowChain
    rest: Tuple[Tuple[str, PowChain], ...] = ()


@dataclass(frozen=True)
class Expr:
    first: MulDivChain
    rest: Tuple[Tuple[str, MulDivChain], ...] = ()


AddSubChain = Expr
Chain = Union[Expr, MulDivChain]
Node = Union[Expr, MulDivChain, PowChain, Leaf, Paren]


def children(node: Node) -> List[Node]:
    """The child nodes of `node`, left to right (operators excluded)."""
    if isinstance(node, (Expr, MulDivChain)):
        return [node.first] + [operand for _, operand in node.rest]
    if isinstance(node, PowChain):
        return [node.base] if node.exponent is None else [node.base, node.exponent]
    if isinstance(node, Paren):
        return [node.expr]
    if isinstance(node, Leaf):
        return []
    raise TypeError(f"not a parse tree node: {node!r}")


def dump_tree(node: Node, indent: str = "  ") -> str:
    """Indented outline of a parse tree, one node per line."""
    lines: List[str] = []
    work: List[Tuple[Node, int, str]] = [(node, 0, "")]
    while work:
        n, depth, op = work.pop()
        pad = indent * depth
        prefix = f"{op} " if op else ""
        if isinstance(n, Leaf):
            lines.append(f"{pad}{prefix}Leaf {n.lexeme}")
            continue
        lines.append(f"{pad}{prefix}{type(n).__name__}")
        if isinstance(n, (Expr, MulDivChain)):
            labelled = [(n.first, "")] + [(operand, operator) for operator, operand in n.rest]
        elif isinstance(n, PowChain):
            labelled = [(n.base, "")] if n.exponent is None else [(n.base, ""), (n.exponent, "^")]
        elif isinstance(n, Paren):
            labelled = [(n.expr, "")]
        else:
            raise TypeError(f"not a parse tree node: {n!r}")
        # Pushed in reverse so children come out left to right
        work.extend((child, depth + 1, label) for child, label in reversed(labelled))
    return "\n".join(lines)
