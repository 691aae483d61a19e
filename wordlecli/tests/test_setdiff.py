"""
Tests for the setdiff tool.
"""

from ..setdiff import diff_records, main, record_key

FIRST = [
    "1|A|apple pie recipe\n",
    "2|B|brown sugar cookies\n",
    "3|C|cinnamon rolls\n",
]
SECOND = [
    "9|Z|apple pie recipe\n",
    "6|F|fresh bread\n",
    "2|B|brown sugar cookies\n",
    "7|G|green salad\n",
    "8|H|fresh bread\n",
]


class TestDiffRecords:
    """Tests for diff_records."""

    def test_leading_fields_are_ignored(self):
        assert list(diff_records(FIRST, SECOND)) == [
            "6|F|fresh bread",
            "7|G|green salad",
            "8|H|fresh bread",
        ]

    def test_identical_files(self):
        assert list(diff_records(FIRST, FIRST)) == []

    def test_empty_first_file_returns_everything(self):
        assert len(list(diff_records([], SECOND))) == len(SECOND)

    def test_custom_delimiter_and_skip(self):
        first = ["a,x\n"]
        second = ["b,x\n", "c,y\n"]
        assert list(diff_records(first, second, delimiter=",", skip_fields=1)) == ["c,y"]

    def test_short_lines_share_the_empty_key(self):
        assert record_key("only|two") == ()
        assert list(diff_records(["x\n"], ["y\n", "1|2|z\n"])) == ["1|2|z"]


class TestMain:
    """Tests for the setdiff command."""

    def test_prints_new_records(self, tmp_path, capsys):
        first = tmp_path / "first.txt"
        second = tmp_path / "second.txt"
        first.write_text("".join(FIRST))
        second.write_text("".join(SECOND))
        assert main([str(first), str(second)]) == 0
        assert capsys.readouterr().out == "6|F|fresh bread\n7|G|green salad\n8|H|fresh bread\n"

    def test_missing_file(self, tmp_path, capsys):
        first = tmp_path / "first.txt"
        first.write_text("".join(FIRST))
        assert main([str(first), str(tmp_path / "nope.txt")]) == 1
        assert "nope.txt" in capsys.readouterr().err
