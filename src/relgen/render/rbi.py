"""RBI renderer - Sorbet interface files from declaration trees."""

from __future__ import annotations

from typing import Protocol

from relgen.assembly.models import (
    ContainerDecl,
    ContainerKind,
    DeclarationTree,
    MethodDecl,
)
from relgen.config.constants import TYPED_SIGILS
from relgen.signatures.models import MethodSignature, Parameter, ParamKind

INDENT = "  "


class Renderer(Protocol):
    """Turns a declaration tree into file content."""

    def render(self, tree: DeclarationTree) -> str: ...


class RbiRenderer:
    """Renders trees as RBI.

    Containers are emitted in tree order. Within a container mixins come
    first, then constants, then methods, each group separated by a blank
    line. Output depends only on the tree.
    """

    def __init__(self, typed_sigil: str = "strong") -> None:
        if typed_sigil not in TYPED_SIGILS:
            raise ValueError(f"Unknown typed sigil: {typed_sigil}")
        self.typed_sigil = typed_sigil

    def render(self, tree: DeclarationTree) -> str:
        blocks = [f"# typed: {self.typed_sigil}"]
        blocks.extend(self.render_container(c) for c in tree.containers)
        return "\n\n".join(blocks) + "\n"

    def render_container(self, container: ContainerDecl) -> str:
        if container.kind is ContainerKind.MODULE:
            header = f"module {container.name}"
        elif container.superclass:
            header = f"class {container.name} < {container.superclass}"
        else:
            header = f"class {container.name}"

        groups: list[list[str]] = []
        if container.mixins:
            groups.append([f"{INDENT}{m.kind} {m.target}" for m in container.mixins])
        if container.constants:
            groups.append([f"{INDENT}{c.name} = {c.value}" for c in container.constants])
        for method in container.methods:
            groups.append([INDENT + line for line in render_method(method)])

        body = "\n\n".join("\n".join(lines) for lines in groups)
        if not body:
            return f"{header}; end"
        return f"{header}\n{body}\nend"


def render_method(method: MethodDecl | MethodSignature) -> list[str]:
    """Signature line and definition line for one method."""
    return [render_sig(method), render_def(method)]


def render_sig(method: MethodDecl | MethodSignature) -> str:
    parts = []
    if method.parameters:
        params = ", ".join(f"{p.name}: {p.type}" for p in method.parameters)
        parts.append(f"params({params})")
    parts.append("void" if method.return_type is None else f"returns({method.return_type})")
    return "sig { " + ".".join(parts) + " }"


def render_def(method: MethodDecl | MethodSignature) -> str:
    if not method.parameters:
        return f"def {method.name}; end"
    params = ", ".join(render_parameter(p) for p in method.parameters)
    return f"def {method.name}({params}); end"


def render_parameter(param: Parameter) -> str:
    match param.kind:
        case ParamKind.REST:
            return f"*{param.name}"
        case ParamKind.KEYWORD_REST:
            return f"**{param.name}"
        case ParamKind.BLOCK:
            return f"&{param.name}"
        case ParamKind.KEYWORD:
            return f"{param.name}:" if param.default is None else f"{param.name}: {param.default}"
        case _:
            return param.name if param.default is None else f"{param.name} = {param.default}"
