"""Tests for stashtree.diff.render module."""

from stashtree.diff import (
    DiffDocument,
    DiffItem,
    DiffLine,
    FileHeader,
    Hunk,
    HunkHeader,
    LineRecord,
    format_diff_stat,
    iter_diff_events,
    reconstruct,
    render_document,
    render_item,
)


def sample_document():
    return reconstruct(
        [
            FileHeader("a.txt", "a.txt"),
            HunkHeader(1, 1, 1, 2),
            LineRecord(" ", "x"),
            LineRecord("+", "y"),
            FileHeader(None, "b.txt"),
            HunkHeader(0, 0, 1, 1),
            LineRecord("+", "z"),
        ]
    )


class TestRenderDocument:
    """Tests for render_document function."""

    def test_unified_output(self):
        """Test the exact unified diff text."""
        expected = (
            "--- a/a.txt\n"
            "+++ b/a.txt\n"
            "@@ -1,1 +1,2 @@\n"
            " x\n"
            "+y\n"
            "+++ b/b.txt\n"
            "@@ -0,0 +1,1 @@\n"
            "+z\n"
        )

        assert render_document(sample_document()) == expected

    def test_deleted_file_omits_new_path(self):
        """Test that a deleted file has no +++ line."""
        item = DiffItem(old_path="gone.txt", new_path=None, hunks=[Hunk(1, 1, 0, 0, [DiffLine("-", "bye")])])

        assert render_item(item) == ["--- a/gone.txt", "@@ -1,1 +0,0 @@", "-bye"]

    def test_empty_document(self):
        """Test that an empty document renders as empty text."""
        assert render_document(DiffDocument()) == ""

    def test_rendered_text_parses_back(self):
        """Test that the rendered text reconstructs to the same document."""
        document = sample_document()

        again = reconstruct(iter_diff_events(render_document(document).splitlines()))

        assert again == document


class TestFormatDiffStat:
    """Tests for format_diff_stat function."""

    def test_counts(self):
        """Test per-file and total counts."""
        stat = format_diff_stat(sample_document())

        lines = stat.split("\n")
        assert lines[0].startswith(" a.txt")
        assert lines[0].endswith("| 1 +")
        assert lines[1].endswith("| 1 +")
        assert lines[-1] == " 2 files changed, 2 insertions(+), 0 deletions(-)"

    def test_empty(self):
        """Test the summary for an empty document."""
        assert format_diff_stat(DiffDocument()) == " 0 files changed"
