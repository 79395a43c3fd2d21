"""
Render a parse tree as fully parenthesized infix, postfix, or prefix text.

All renderers read the tree only, so they can run in any order and any
number of times on the same tree. Each one describes a node as a list of
text pieces and child nodes, and `_walk` expands that description with an
explicit work stack, so arbitrarily deep trees render without recursion.
"""
from typing import Callable, List, NamedTuple, Union

from .Tree import Expr, Leaf, MulDivChain, Node, Paren, PowChain

Piece = Union[str, Node]


class Forms(NamedTuple):
    fully_parenthesized: str
    postfix: str
    prefix: str


def _unknown(node: object) -> TypeError:
    return TypeError(f"cannot render {type(node).__name__}: {node!r}")


def _walk(tree: Node, expand: Callable[[Node], List[Piece]]) -> List[str]:
    out: List[str] = []
    work: List[Piece] = [tree]
    while work:
        item = work.pop()
        if isinstance(item, str):
            out.append(item)
        else:
            work.extend(reversed(expand(item)))
    return out


# --- Fully parenthesized ---

def _parenthesized(node: Node) -> List[Piece]:
    if isinstance(node, Leaf):
        return [node.lexeme]
    if isinstance(node, Paren):
        # The user's own parentheses are replaced by the ones added for the inner chain
        return [node.expr]
    if isinstance(node, PowChain):
        if node.exponent is None:
            return [node.base]
        return ["(", node.base, "^", node.exponent, ")"]
    if isinstance(node, (Expr, MulDivChain)):
        # ((a+b)-c): each partial reduction gets its own pair
        pieces: List[Piece] = ["("] * len(node.rest) + [node.first]
        for op, operand in node.rest:
            pieces += [op, operand, ")"]
        return pieces
    raise _unknown(node)


def strip_outer_parens(text: str) -> str:
    """Remove one pair of parentheses if that pair encloses all of `text`."""
    if not (text.startswith("(") and text.endswith(")")):
        return text
    depth = 0
    for i, c in enumerate(text):
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0 and i != len(text) - 1:
                return text
    return text[1:-1]


def fully_parenthesized(tree: Node) -> str:
    """`a+b-c` -> `(a+b)-c`; every binary operation gets an explicit pair."""
    return strip_outer_parens("".join(_walk(tree, _parenthesized)))


# --- Postfix ---

def _postfix(node: Node) -> List[Piece]:
    if isinstance(node, Leaf):
        return [node.lexeme]
    if isinstance(node, Paren):
        return [node.expr]
    if isinstance(node, PowChain):
        if node.exponent is None:
            return [node.base]
        return [node.base, node.exponent, "^"]
    if isinstance(node, (Expr, MulDivChain)):
        pieces: List[Piece] = [node.first]
        for op, operand in node.rest:
            pieces += [operand, op]
        return pieces
    raise _unknown(node)


def postfix(tree: Node) -> str:
    """`a+b-c` -> `a b + c -`; `a^b^c` -> `a b c ^ ^`."""
    return " ".join(_walk(tree, _postfix))


# --- Prefix ---

def _prefix(node: Node) -> List[Piece]:
    if isinstance(node, Leaf):
        return [node.lexeme]
    if isinstance(node, Paren):
        return [node.expr]
    if isinstance(node, PowChain):
        if node.exponent is None:
            return [node.base]
        return ["^", node.base, node.exponent]
    if isinstance(node, (Expr, MulDivChain)):
        # Each later operator applies to everything before it, so it goes in front
        ops: List[Piece] = [op for op, _ in reversed(node.rest)]
        return ops + [node.first] + [operand for _, operand in node.rest]
    raise _unknown(node)


def prefix(tree: Node) -> str:
    """`a+b-c` -> `- + a b c`; `a^b^c` -> `^ a ^ b c`."""
    return " ".join(_walk(tree, _prefix))


def render_all(tree: Node) -> Forms:
    return Forms(fully_parenthesized(tree), postfix(tree), prefix(tree))
