"""Next Action directive grammar.

A directive is one of ``continue``, ``next_question``, ``end``,
``if_correct:<param>`` or ``if_incorrect:<param>``. Anything else resolves
to ``continue``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class ActionKind(str, Enum):
    CONTINUE = "continue"
    NEXT_QUESTION = "next_question"
    IF_CORRECT = "if_correct"
    IF_INCORRECT = "if_incorrect"
    END = "end"


_PLAIN_ACTIONS = {ActionKind.CONTINUE, ActionKind.NEXT_QUESTION, ActionKind.END}
_BRANCH_ACTIONS = (ActionKind.IF_CORRECT, ActionKind.IF_INCORRECT)


@dataclass(frozen=True)
class NextAction:
    kind: ActionKind = ActionKind.CONTINUE
    # Branch target for if_correct/if_incorrect, or the resolved timestamp of a next_question
    param: Optional[Union[str, int]] = None

    def with_param(self, param: Optional[Union[str, int]]) -> "NextAction":
        return NextAction(kind=self.kind, param=param)


CONTINUE = NextAction()


def parse_next_action(raw: Any) -> NextAction:
    """Resolve a directive string into a NextAction; never raises.

    Directives are matched on the raw cell text, so surrounding whitespace
    makes them unrecognized. Only a branch parameter is trimmed.
    """
    if raw is None:
        return CONTINUE
    text = str(raw)
    if not text:
        return CONTINUE
    for kind in _PLAIN_ACTIONS:
        if text == kind.value:
            return NextAction(kind=kind)
    for kind in _BRANCH_ACTIONS:
        prefix = kind.value + ":"
        if text.startswith(prefix):
            return NextAction(kind=kind, param=text[len(prefix):].strip())
    return CONTINUE
