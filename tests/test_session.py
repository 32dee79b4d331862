import pytest

from phrasele.models.game import Verdict
from .conftest import submit_word, type_word

HELLO = ["HELLO"]
ACT_ONE = [{"text": "act one", "hint": "Opening scene"}]


class TestLoadPhrase:

    def test_loads_phrase_and_resets(self, make_session):
        session = make_session(ACT_ONE)
        assert session.status == "playing"
        assert session.solution == "ACT ONE"
        assert session.cols == 7
        assert session.row_input == [""] * 7
        assert session.cursor_col == 0
        assert session.hint_text == "Opening scene"
        assert session.subtitle == "Phrase 1 of 1"

    def test_index_is_clamped(self, make_session):
        session = make_session(["ONE", "TWO"], index=5)
        assert session.phrase_index == 1
        assert session.solution == "TWO"

    def test_empty_source_reports_error(self, make_session):
        session = make_session([])
        assert session.status == "loading"
        assert session.message == "No phrases found. Check the phrase list."
        assert not session.put_letter("A").accepted

    def test_malformed_entry_reports_error(self, make_session):
        session = make_session([{"hint": "missing text"}])
        assert session.status == "loading"
        assert session.message == "Invalid phrase format."

    def test_phrase_change_clears_keyboard_and_hints(self, make_session):
        session = make_session(["HELLO", "WORLD"])
        submit_word(session, "HXLLO")
        session.give_hint()
        assert session.key_state

        update = session.next_phrase()

        assert update.reload_board
        assert session.solution == "WORLD"
        assert session.key_state == {}
        assert session.hints_used == 0
        assert session.history == []
        assert session.message == "New phrase. Start typing."

    def test_next_phrase_wraps(self, make_session):
        session = make_session(["ONE", "TWO"], index=1)
        session.next_phrase()
        assert session.phrase_index == 0

    def test_restart_keeps_phrase(self, make_session):
        session = make_session(["ONE", "TWO"], index=1)
        submit_word(session, "OWT")
        session.restart_phrase()
        assert session.phrase_index == 1
        assert session.history == []
        assert session.message == "Restarted. Go again."

    def test_random_phrase_draws_from_bag(self, make_session):
        session = make_session(["A", "B", "C"])
        seen = set()
        for _ in range(3):
            session.random_phrase()
            seen.add(session.phrase_index)
        assert seen == {0, 1, 2}


class TestRowEditing:

    def test_put_letter_skips_spaces(self, make_session):
        session = make_session(ACT_ONE)
        type_word(session, "ACT")
        assert session.row_input[:4] == ["A", "C", "T", ""]
        assert session.cursor_col == 4

    def test_put_letter_normalises_and_filters(self, make_session):
        session = make_session(HELLO)
        assert session.put_letter("h").accepted
        assert not session.put_letter("1").accepted
        assert not session.put_letter("AB").accepted
        assert session.row_input == ["H", "", "", "", ""]

    def test_put_letter_reports_changed_cell(self, make_session):
        session = make_session(HELLO)
        update = session.put_letter("H")
        assert [(c.row, c.col, c.letter) for c in update.cells] == [(0, 0, "H")]

    def test_full_row_ignores_more_letters(self, make_session):
        session = make_session(HELLO)
        type_word(session, "HELLO")
        assert session.cursor_col == 5
        assert not session.put_letter("X").accepted
        assert session.row_string() == "HELLO"

    def test_backspace_removes_last_letter(self, make_session):
        session = make_session(HELLO)
        type_word(session, "HEL")
        session.backspace()
        assert session.row_input == ["H", "E", "", "", ""]
        assert session.cursor_col == 2

    def test_backspace_on_full_row(self, make_session):
        session = make_session(HELLO)
        type_word(session, "HELLO")
        session.backspace()
        assert session.row_input == ["H", "E", "L", "L", ""]
        assert session.cursor_col == 4

    def test_backspace_crosses_spaces(self, make_session):
        session = make_session(ACT_ONE)
        type_word(session, "ACT")
        session.backspace()
        assert session.row_input[:3] == ["A", "C", ""]
        assert session.cursor_col == 2

    def test_backspace_clears_filled_slot_under_cursor(self, make_session):
        session = make_session(HELLO)
        session.put_letter("H")
        session.row_input[1] = "E"  # e.g. revealed by a hint
        session.backspace()
        assert session.row_input == ["H", "", "", "", ""]
        assert session.cursor_col == 1

    def test_backspace_skips_only_one_empty_slot(self, make_session):
        session = make_session(HELLO)
        session.put_letter("H")
        session.cursor_col = 2  # two empty slots behind the cursor
        update = session.backspace()
        assert update.accepted
        assert session.row_input[0] == "H"
        assert session.cursor_col == 1

    def test_backspace_on_empty_row_is_ignored(self, make_session):
        session = make_session(HELLO)
        assert not session.backspace().accepted
        assert session.cursor_col == 0

    def test_is_row_complete_ignores_spaces(self, make_session):
        session = make_session(ACT_ONE)
        type_word(session, "ACTON")
        assert not session.is_row_complete()
        session.put_letter("E")
        assert session.is_row_complete()
        assert session.row_string() == "ACT ONE"


class TestSubmitRow:

    def test_incomplete_row_is_rejected(self, make_session):
        session = make_session(HELLO)
        type_word(session, "HEL")
        update = session.submit_row()
        assert not update.accepted
        assert update.message == "Fill all letters before pressing Enter."
        assert session.history == []
        assert session.row_input[:3] == ["H", "E", "L"]

    def test_wrong_row_advances(self, make_session):
        session = make_session(HELLO)
        update = submit_word(session, "LLHEO")
        assert update.accepted
        assert [c.verdict for c in update.cells] == ["present"] * 4 + ["correct"]
        assert all(c.locked for c in update.cells)
        assert update.keys == {"L": "present", "H": "present", "E": "present", "O": "correct"}
        assert session.current_row == 1
        assert session.row_input == [""] * 5
        assert session.message == "Try again (5 guesses left)"

    def test_winning_after_wrong_rows(self, make_session):
        session = make_session(HELLO)
        submit_word(session, "WORLD")
        submit_word(session, "HOLLE")
        update = submit_word(session, "HELLO")

        assert update.message == "Correct! You solved it."
        assert session.game_over
        assert session.won
        assert session.status == "won"
        assert session.history == ["WORLD", "HOLLE", "HELLO"]
        assert session.current_row == 2

    def test_running_out_of_rows_loses(self, make_session):
        session = make_session(HELLO)
        for _ in range(5):
            submit_word(session, "WORLD")
        update = submit_word(session, "WORLD")

        assert session.game_over
        assert not session.won
        assert session.status == "lost"
        assert "HELLO" in update.message
        assert update.message == 'Out of guesses. Answer: "HELLO"'
        assert len(session.history) == 6

    def test_game_over_blocks_input(self, make_session):
        session = make_session(HELLO)
        submit_word(session, "HELLO")
        assert not session.put_letter("A").accepted
        assert not session.backspace().accepted
        assert not session.submit_row().accepted
        assert not session.give_hint().accepted

    def test_space_positions_score_as_space(self, make_session):
        session = make_session(ACT_ONE)
        update = submit_word(session, "ACT ONX")
        assert update.cells[3].verdict == "space"
        assert update.cells[3].letter == ""
        assert session.verdicts[0][6] is Verdict.ABSENT

    def test_keyboard_never_downgrades(self, make_session):
        session = make_session(HELLO)
        submit_word(session, "HXXXX")
        submit_word(session, "XHXXX")
        assert session.key_state["H"] is Verdict.CORRECT


class TestHints:

    def test_hint_fills_an_empty_letter_slot(self, make_session):
        session = make_session(ACT_ONE)
        type_word(session, "ACT")
        update = session.give_hint()

        assert update.accepted
        col = update.cells[0].col
        assert col in (4, 5, 6)
        assert session.row_input[col] == "ACT ONE"[col]
        assert session.row_input[:3] == ["A", "C", "T"]
        assert session.row_input[3] == ""
        assert session.cursor_col == 4
        assert session.hints_used == 1
        assert session.hint_info == "Hints: 5/6"

    def test_hints_never_overwrite_or_reveal_spaces(self, make_session):
        session = make_session(ACT_ONE)
        session.put_letter("X")
        for _ in range(5):
            session.give_hint()
        assert session.row_input[0] == "X"
        assert session.row_input[3] == ""
        assert session.row_input[1:3] + session.row_input[4:] == ["C", "T", "O", "N", "E"]

    def test_hint_budget(self, make_session):
        session = make_session(HELLO, max_hints=2)
        session.give_hint()
        session.give_hint()
        update = session.give_hint()
        assert not update.accepted
        assert update.message == "No hints left."
        assert session.hints_used == 2

    def test_nothing_to_hint_on_full_row(self, make_session):
        session = make_session(HELLO)
        type_word(session, "WORLD")
        update = session.give_hint()
        assert update.message == "Nothing left to hint on this row!"
        assert session.hints_used == 0

    def test_no_hint_once_rows_are_used_up(self, make_session):
        session = make_session(HELLO, max_guesses=2)
        session.current_row = 2
        update = session.give_hint()
        assert not update.accepted
        assert session.hints_used == 0
        assert session.row_input == [""] * 5
        assert not session.render().hint_available

    def test_hinted_row_can_be_submitted(self, make_session):
        session = make_session(["HI"])
        session.give_hint()
        session.give_hint()
        assert session.submit_row().message == "Correct! You solved it."

    def test_show_clue(self, make_session):
        assert make_session(ACT_ONE).show_clue().message == "Hint: Opening scene"
        assert make_session(HELLO).show_clue().message == "No hint available for this phrase."


class TestRender:

    def test_board_view(self, make_session):
        session = make_session(ACT_ONE)
        submit_word(session, "ACTXONE")  # typed X lands on O's slot, E is dropped
        type_word(session, "AC")
        view = session.render()

        assert view.subtitle == "Phrase 1 of 1"
        assert len(view.rows) == 6
        assert view.rows[0][0].verdict == "correct"
        assert view.rows[0][0].locked
        assert view.rows[0][3].is_space
        assert [t.letter for t in view.rows[1][:3]] == ["A", "C", ""]
        assert view.rows[1][0].verdict is None
        assert view.status == "playing"
        assert view.answer is None
        assert view.hint_available

    def test_answer_revealed_when_over(self, make_session):
        session = make_session(HELLO)
        submit_word(session, "HELLO")
        view = session.render()
        assert view.answer == "HELLO"
        assert view.won
        assert not view.hint_available
