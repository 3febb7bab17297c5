from utils.next_action import ActionKind, NextAction, parse_next_action


def test_branch_directive_keeps_parameter():
    assert parse_next_action("if_correct:42") == NextAction(ActionKind.IF_CORRECT, "42")
    assert parse_next_action("if_incorrect: 10 ") == NextAction(ActionKind.IF_INCORRECT, "10")


def test_branch_parameter_is_everything_after_first_colon():
    assert parse_next_action("if_incorrect:1:30").param == "1:30"


def test_empty_and_missing_directives_continue():
    assert parse_next_action("") == NextAction(ActionKind.CONTINUE, None)
    assert parse_next_action(None) == NextAction(ActionKind.CONTINUE, None)
    assert parse_next_action("   ") == NextAction(ActionKind.CONTINUE, None)


def test_unknown_directives_fall_back_to_continue():
    assert parse_next_action("bogus") == NextAction(ActionKind.CONTINUE, None)
    assert parse_next_action("if_correct") == NextAction(ActionKind.CONTINUE, None)
    assert parse_next_action("jump:5") == NextAction(ActionKind.CONTINUE, None)


def test_plain_actions():
    assert parse_next_action("continue").kind is ActionKind.CONTINUE
    assert parse_next_action("next_question") == NextAction(ActionKind.NEXT_QUESTION, None)
    assert parse_next_action("end") == NextAction(ActionKind.END, None)


def test_directives_are_matched_without_trimming():
    assert parse_next_action(" end ") == NextAction(ActionKind.CONTINUE, None)
    assert parse_next_action("next_question\n") == NextAction(ActionKind.CONTINUE, None)
    assert parse_next_action(" if_correct:5") == NextAction(ActionKind.CONTINUE, None)


def test_with_param_returns_new_action():
    action = NextAction(ActionKind.NEXT_QUESTION)
    linked = action.with_param(20)
    assert linked == NextAction(ActionKind.NEXT_QUESTION, 20)
    assert action.param is None
