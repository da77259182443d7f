"""Tests for bullet line recognition and hunk splitting."""

from taskcollect.vault.lines import CheckState, ListLine, parse_checkbox, split_hunks


class TestListLine:
    def test_bullet_with_content(self):
        line = ListLine.from_line("  - buy milk")
        assert line is not None
        assert line.indent_len == 2
        assert line.content == "buy milk"
        assert line.raw_text == "  - buy milk"

    def test_tab_indent_counts_characters(self):
        line = ListLine.from_line("\t\t- nested")
        assert line is not None
        assert line.indent_len == 2

    def test_empty_bullet(self):
        for raw in ("-", "- ", "  -", "-  "):
            line = ListLine.from_line(raw)
            assert line is not None, raw
            assert line.content == ""

    def test_non_bullets(self):
        for raw in ("", "plain text", "* star bullet", "-no space", "1. numbered", "# heading"):
            assert ListLine.from_line(raw) is None, raw

    def test_indent_level(self):
        line = ListLine.from_line("    - x")
        assert line is not None
        assert line.indent_level(2) == 2
        assert line.indent_level(4) == 1
        assert line.indent_level(3) is None


class TestParseCheckbox:
    def test_undone(self):
        assert parse_checkbox("[ ] write report") == (" ", "write report")

    def test_done_with_any_mark(self):
        assert parse_checkbox("[x] shipped") == ("x", "shipped")
        assert parse_checkbox("[-] cancelled") == ("-", "cancelled")

    def test_no_checkbox(self):
        assert parse_checkbox("just text") is None
        assert parse_checkbox("[x]") is None
        assert parse_checkbox("[xx] two chars") is None
        assert parse_checkbox("[x]no space") is None


class TestCheckState:
    def test_from_mark(self):
        assert CheckState.from_mark(" ") is CheckState.UNDONE
        assert CheckState.from_mark("x") is CheckState.DONE
        assert CheckState.from_mark("X") is CheckState.DONE
        assert CheckState.from_mark(None) is None


class TestSplitHunks:
    def test_splits_on_non_bullet_lines(self):
        content = "- a\n  - b\ntext\n- c\n\n- d\n"
        hunks = list(split_hunks(content))
        assert [[line.content for line in hunk] for hunk in hunks] == [["a", "b"], ["c"], ["d"]]

    def test_no_empty_hunks(self):
        content = "intro\n\n\nmore prose\n"
        assert list(split_hunks(content)) == []

    def test_trailing_hunk_without_newline(self):
        hunks = list(split_hunks("prose\n- last"))
        assert len(hunks) == 1
        assert hunks[0][0].content == "last"

    def test_preserves_order(self):
        hunks = list(split_hunks("- one\n- two\n- three"))
        assert [line.content for line in hunks[0]] == ["one", "two", "three"]
