from db.schema import TABLE_COLUMNS
from utils.next_action import ActionKind
from utils.row_parser import (
    AUTO_SIZE,
    DEFAULT_CORRECT_FEEDBACK,
    DEFAULT_INCORRECT_FEEDBACK,
    Option,
    parse_overlay_row,
    parse_overlay_rows,
)

VIDEO = "Sample Tutorial"


def _row(**values):
    base = {
        "video_title": VIDEO,
        "timestamp": 10,
        "title": "Checkpoint",
        "content": "Which option is correct?",
    }
    base.update(values)
    return [base.get(column) for column in TABLE_COLUMNS["overlays"]]


def test_rows_for_other_videos_are_dropped():
    assert parse_overlay_row(_row(video_title="Other"), 1, VIDEO) is None
    assert parse_overlay_row(_row(video_title=None), 1, VIDEO) is None


def test_rows_missing_required_fields_are_skipped():
    assert parse_overlay_row(_row(timestamp="abc"), 1, VIDEO) is None
    assert parse_overlay_row(_row(timestamp=0), 1, VIDEO) is None
    assert parse_overlay_row(_row(timestamp=None), 1, VIDEO) is None
    assert parse_overlay_row(_row(title=""), 1, VIDEO) is None
    assert parse_overlay_row(_row(content=None), 1, VIDEO) is None


def test_info_row_defaults():
    overlay = parse_overlay_row(_row(timestamp="12.5"), 7, VIDEO)
    assert overlay.id == "overlay-7"
    assert overlay.video_title == VIDEO
    assert overlay.timestamp == 12
    assert overlay.type == "info"
    assert overlay.next_action.kind is ActionKind.CONTINUE
    assert overlay.next_action.param is None
    assert overlay.options == ()
    assert overlay.image is None
    assert overlay.group_name == ""


def test_interaction_type_is_normalized():
    assert parse_overlay_row(_row(interaction_type="QUIZ"), 1, VIDEO).type == "quiz"
    assert parse_overlay_row(_row(interaction_type=" True_False "), 1, VIDEO).type == "true_false"
    assert parse_overlay_row(_row(interaction_type="poll"), 1, VIDEO).type == "info"


def test_next_action_is_resolved_once():
    overlay = parse_overlay_row(_row(next_action="if_correct:25"), 1, VIDEO)
    assert overlay.next_action.kind is ActionKind.IF_CORRECT
    assert overlay.next_action.param == "25"


def test_quiz_options_from_correct_and_incorrect_columns():
    overlay = parse_overlay_row(
        _row(
            interaction_type="quiz",
            correct_answer="Paris | Lutetia",
            incorrect_answer_1="London",
            incorrect_answer_2="",
            incorrect_answer_3="Rome",
        ),
        1,
        VIDEO,
    )
    assert [option.text for option in overlay.options] == ["Paris", "Lutetia", "London", "Rome"]
    assert [option.is_correct for option in overlay.options] == [True, True, False, False]
    assert overlay.options[0].feedback == DEFAULT_CORRECT_FEEDBACK
    assert overlay.options[2].feedback == DEFAULT_INCORRECT_FEEDBACK


def test_quiz_options_use_row_feedback():
    overlay = parse_overlay_row(
        _row(
            interaction_type="quiz",
            correct_answer="4",
            incorrect_answer_1="5",
            correct_feedback="Well done!",
            incorrect_feedback="Not quite.",
        ),
        1,
        VIDEO,
    )
    assert overlay.options == (
        Option(text="4", is_correct=True, feedback="Well done!"),
        Option(text="5", is_correct=False, feedback="Not quite."),
    )


def test_quiz_without_correct_answer_has_no_options():
    overlay = parse_overlay_row(
        _row(interaction_type="quiz", correct_answer="", incorrect_answer_1="London"),
        1,
        VIDEO,
    )
    assert overlay is not None
    assert overlay.options == ()


def test_matching_rows_get_no_options():
    overlay = parse_overlay_row(_row(interaction_type="matching", correct_answer="a-1"), 1, VIDEO)
    assert overlay.type == "matching"
    assert overlay.options == ()


def test_true_false_synthesizes_missing_false():
    overlay = parse_overlay_row(_row(interaction_type="true_false", correct_answer="TRUE"), 1, VIDEO)
    assert overlay.options == (
        Option(text="TRUE", is_correct=True, feedback=DEFAULT_CORRECT_FEEDBACK),
        Option(text="FALSE", is_correct=False, feedback=DEFAULT_INCORRECT_FEEDBACK),
    )


def test_true_false_synthesized_true_is_always_incorrect():
    overlay = parse_overlay_row(_row(interaction_type="true_false", correct_answer="FALSE"), 1, VIDEO)
    assert [(option.text, option.is_correct) for option in overlay.options] == [
        ("FALSE", True),
        ("TRUE", False),
    ]


def test_true_false_matches_case_insensitively():
    overlay = parse_overlay_row(
        _row(interaction_type="true_false", correct_answer="true", incorrect_answer_1="false"),
        1,
        VIDEO,
    )
    assert [option.text for option in overlay.options] == ["true", "false"]


def test_image_is_attached_only_with_url():
    overlay = parse_overlay_row(_row(image_url="https://example.com/a.png", image_width=320), 1, VIDEO)
    assert overlay.image.url == "https://example.com/a.png"
    assert overlay.image.width == 320
    assert overlay.image.height == AUTO_SIZE
    assert parse_overlay_row(_row(image_width=320), 1, VIDEO).image is None


def test_parse_rows_keeps_valid_rows_in_source_order():
    rows = [
        (1, _row(timestamp=30, title="Late")),
        (2, _row(video_title="Other")),
        (3, _row(timestamp=5, title="Early")),
        (4, _row(title="")),
    ]
    overlays = parse_overlay_rows(rows, VIDEO)
    assert [overlay.id for overlay in overlays] == ["overlay-1", "overlay-3"]


def test_to_dict_exposes_action_and_image():
    overlay = parse_overlay_row(
        _row(next_action="if_incorrect:5", image_url="https://example.com/a.png", group_name="intro"),
        2,
        VIDEO,
    )
    data = overlay.to_dict()
    assert data["next_action"] == "if_incorrect"
    assert data["action_param"] == "5"
    assert data["group_name"] == "intro"
    assert data["image"] == {"url": "https://example.com/a.png", "width": "auto", "height": "auto"}


def test_non_finite_timestamps_are_skipped():
    assert parse_overlay_row(_row(timestamp=float("inf")), 1, VIDEO) is None
    assert parse_overlay_row(_row(timestamp=float("nan")), 1, VIDEO) is None


def test_true_false_without_correct_answer_has_no_options():
    overlay = parse_overlay_row(
        _row(interaction_type="true_false", correct_answer="", incorrect_answer_1="TRUE"),
        1,
        VIDEO,
    )
    assert overlay.type == "true_false"
    assert overlay.options == ()


def test_incorrect_answers_keep_cell_text():
    overlay = parse_overlay_row(
        _row(interaction_type="quiz", correct_answer=" Paris ", incorrect_answer_1=" London ", incorrect_answer_2="  "),
        1,
        VIDEO,
    )
    assert [option.text for option in overlay.options] == ["Paris", " London "]
