"""Tests for stashtree.diff.engine module."""

from stashtree.diff import (
    DiffBuilder,
    DiffDocument,
    DiffLine,
    FileHeader,
    HunkHeader,
    LineRecord,
    reconstruct,
)


def scenario_events():
    return [
        FileHeader("a.txt", "a.txt"),
        HunkHeader(1, 1, 1, 2),
        LineRecord(" ", "x"),
        LineRecord("+", "y"),
        FileHeader(None, "b.txt"),
        HunkHeader(0, 0, 1, 1),
        LineRecord("+", "z"),
    ]


class TestReconstructScenario:
    """Tests for the two-file reconstruction scenario."""

    def test_two_items(self):
        """Test that two file headers yield two items in order."""
        document = reconstruct(scenario_events())

        assert len(document) == 2
        assert document[0].old_path == "a.txt"
        assert document[0].new_path == "a.txt"
        assert document[1].old_path is None
        assert document[1].new_path == "b.txt"

    def test_first_item_hunk(self):
        """Test the first item's hunk header and lines."""
        document = reconstruct(scenario_events())

        hunks = document[0].hunks
        assert len(hunks) == 1
        hunk = hunks[0]
        assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (1, 1, 1, 2)
        assert hunk.lines == [DiffLine(" ", "x"), DiffLine("+", "y")]

    def test_second_item_hunk(self):
        """Test the second item's hunk header and lines."""
        document = reconstruct(scenario_events())

        hunk = document[1].hunks[0]
        assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (0, 0, 1, 1)
        assert hunk.lines == [DiffLine("+", "z")]


class TestBoundaries:
    """Tests for file and hunk boundary detection."""

    def test_repeated_file_header_same_pair(self):
        """Test that a repeated header for the same pair does not split the item."""
        events = [
            FileHeader("a.py", "a.py"),
            HunkHeader(1, 2, 1, 2),
            LineRecord(" ", "one"),
            FileHeader("a.py", "a.py"),
            HunkHeader(10, 1, 10, 2),
            LineRecord("+", "two"),
        ]

        document = reconstruct(events)

        assert len(document) == 1
        assert len(document[0].hunks) == 2

    def test_hunk_splitting(self):
        """Test that different hunk starts split lines between two hunks."""
        events = [
            FileHeader("a.py", "a.py"),
            HunkHeader(1, 2, 1, 3),
            LineRecord(" ", "a"),
            LineRecord("+", "b"),
            HunkHeader(20, 2, 21, 1),
            LineRecord("-", "c"),
            LineRecord(" ", "d"),
        ]

        document = reconstruct(events)

        hunks = document[0].hunks
        assert len(hunks) == 2
        assert [line.content for line in hunks[0].lines] == ["a", "b"]
        assert [line.content for line in hunks[1].lines] == ["c", "d"]

    def test_repeated_hunk_header_continues_hunk(self):
        """Test that a hunk header with the same starts continues the hunk."""
        events = [
            FileHeader("a.py", "a.py"),
            HunkHeader(5, 1, 5, 2),
            LineRecord(" ", "a"),
            HunkHeader(5, 1, 5, 2),
            LineRecord("+", "b"),
        ]

        document = reconstruct(events)

        assert len(document[0].hunks) == 1
        assert len(document[0].hunks[0].lines) == 2

    def test_same_old_start_different_new_start_splits(self):
        """Test that either start differing opens a new hunk."""
        events = [
            FileHeader("a.py", "a.py"),
            HunkHeader(5, 1, 5, 1),
            LineRecord(" ", "a"),
            HunkHeader(5, 1, 6, 1),
            LineRecord(" ", "b"),
        ]

        document = reconstruct(events)

        assert len(document[0].hunks) == 2

    def test_file_header_closes_hunk(self):
        """Test that lines after a new file header go to the new file's hunk."""
        events = [
            FileHeader("a.py", "a.py"),
            HunkHeader(1, 1, 1, 1),
            LineRecord("-", "old"),
            FileHeader("b.py", "b.py"),
            HunkHeader(1, 1, 1, 1),
            LineRecord("+", "new"),
        ]

        document = reconstruct(events)

        assert [line.content for line in document[0].hunks[0].lines] == ["old"]
        assert [line.content for line in document[1].hunks[0].lines] == ["new"]

    def test_file_without_hunks(self):
        """Test that a file header alone yields an item with no hunks."""
        document = reconstruct([FileHeader("image.png", "image.png")])

        assert len(document) == 1
        assert document[0].hunks == []

    def test_source_order_preserved(self):
        """Test that items are not re-sorted by path."""
        events = [FileHeader("z.py", "z.py"), FileHeader("a.py", "a.py"), FileHeader("m.py", "m.py")]

        document = reconstruct(events)

        assert [item.new_path for item in document] == ["z.py", "a.py", "m.py"]

    def test_non_adjacent_repeat_is_new_item(self):
        """Test that a pair seen again after another file opens a new item."""
        events = [FileHeader("a.py", "a.py"), FileHeader("b.py", "b.py"), FileHeader("a.py", "a.py")]

        document = reconstruct(events)

        assert [item.new_path for item in document] == ["a.py", "b.py", "a.py"]


class TestMalformedInput:
    """Tests for graceful handling of malformed event streams."""

    def test_noise_origins_dropped(self):
        """Test that non-line origins never reach a hunk."""
        events = [
            FileHeader("a.py", "a.py"),
            HunkHeader(1, 1, 1, 1),
            LineRecord("H", "@@ -1 +1 @@"),
            LineRecord("F", "diff --git a/a.py b/a.py"),
            LineRecord("=", "x"),
            LineRecord(">", "y"),
            LineRecord("<", "z"),
            LineRecord("\\", " No newline at end of file"),
            LineRecord("+", "kept"),
        ]

        document = reconstruct(events)

        lines = document[0].hunks[0].lines
        assert lines == [DiffLine("+", "kept")]
        assert all(line.origin in (" ", "+", "-") for line in lines)

    def test_line_before_hunk_dropped(self):
        """Test that lines before the first hunk header are dropped."""
        events = [
            FileHeader("a.py", "a.py"),
            LineRecord("+", "metadata"),
            HunkHeader(1, 1, 1, 1),
            LineRecord("+", "real"),
        ]

        document = reconstruct(events)

        assert [line.content for line in document[0].hunks[0].lines] == ["real"]

    def test_events_before_any_file_header(self):
        """Test that a hunk with no file item is discarded."""
        events = [
            HunkHeader(1, 1, 1, 1),
            LineRecord("+", "orphan"),
            FileHeader("a.py", "a.py"),
            HunkHeader(3, 1, 3, 1),
            LineRecord("+", "real"),
        ]

        document = reconstruct(events)

        assert len(document) == 1
        assert len(document[0].hunks) == 1
        assert document[0].hunks[0].lines[0].content == "real"

    def test_empty_stream(self):
        """Test that no events give an empty document."""
        assert reconstruct([]) == DiffDocument(items=[])

    def test_unknown_event_ignored(self):
        """Test that unrelated objects in the stream are ignored."""
        document = reconstruct([FileHeader("a", "a"), "garbage", None, HunkHeader(1, 0, 1, 1)])

        assert len(document) == 1
        assert len(document[0].hunks) == 1

    def test_invalid_bytes_replaced(self):
        """Test that invalid UTF-8 content is replaced, not fatal."""
        events = [
            FileHeader("a.bin", "a.bin"),
            HunkHeader(1, 0, 1, 1),
            LineRecord("+", b"caf\xe9 ok"),
        ]

        document = reconstruct(events)

        content = document[0].hunks[0].lines[0].content
        assert content.startswith("caf")
        assert content.endswith(" ok")
        assert "�" in content

    def test_header_counts_trusted(self):
        """Test that hunk counts are kept from the header, not recounted."""
        events = [FileHeader("a", "a"), HunkHeader(1, 9, 1, 9), LineRecord("+", "only")]

        hunk = reconstruct(events)[0].hunks[0]

        assert hunk.old_lines == 9
        assert hunk.new_lines == 9
        assert len(hunk.lines) == 1


class TestDiffBuilder:
    """Tests for the incremental DiffBuilder API."""

    def test_idempotent(self):
        """Test that the same events produce equal documents."""
        assert reconstruct(scenario_events()) == reconstruct(scenario_events())

    def test_feed_and_finish(self):
        """Test incremental feeding matches reconstruct."""
        builder = DiffBuilder()
        for event in scenario_events():
            builder.feed(event)

        assert builder.finish() == reconstruct(scenario_events())

    def test_consumes_generator_once(self):
        """Test that a one-shot generator is fully consumed."""
        consumed = []

        def events():
            for event in scenario_events():
                consumed.append(event)
                yield event

        document = reconstruct(events())

        assert len(consumed) == 7
        assert len(document) == 2
