"""
Directive parsing.

Recognises the three verbs that bypass the free-text conversation:
`begin-integration <platform>`, `inspect-workspace` and `wrap-function <name>`.
A leading slash is tolerated, and hosts that send the verb separately
(e.g. a chat participant's slash command) can pass it as `command`.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DirectiveKind(str, Enum):
    BEGIN_INTEGRATION = "begin-integration"
    INSPECT_WORKSPACE = "inspect-workspace"
    WRAP_FUNCTION = "wrap-function"


@dataclass(frozen=True)
class Directive:
    kind: DirectiveKind
    argument: str = ""


def parse_directive(text: str, command: Optional[str] = None) -> Optional[Directive]:
    """
    Returns the directive carried by this turn, or None for free text.
    An unknown `command` is ignored and the text is treated as free text.
    """
    if command:
        kind = _lookup(command)
        if kind is not None:
            return Directive(kind=kind, argument=text.strip())

    head, _, rest = text.strip().partition(" ")
    kind = _lookup(head)
    if kind is None:
        return None
    return Directive(kind=kind, argument=rest.strip())


def _lookup(verb: str) -> Optional[DirectiveKind]:
    verb = verb.strip().lstrip("/").lower()
    for kind in DirectiveKind:
        if kind.value == verb:
            return kind
    return None
