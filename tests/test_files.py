import os
import stat
from datetime import datetime, timezone

import pytest

from buildgen.output import FileOutput, SkipFile, license_header, preamble, set_preamble, strip_preamble


class NotesOutput(FileOutput):
    def __init__(self, files, permissions=None):
        self.files = files
        self._permissions = permissions or {}

    def filenames(self):
        return list(self.files)

    def permissions(self, filename):
        return self._permissions.get(filename, super().permissions(filename))

    def generate_file(self, filename, stream):
        body = self.files[filename]
        if isinstance(body, Exception):
            raise body
        stream.write(preamble("# "))
        stream.write(body)


class TestStripPreamble:
    def test_drops_leading_comments_and_blanks(self):
        text = "# generated\n# on monday\n\n---\nkey: value\n# kept\n"

        assert strip_preamble(text) == ["key: value", "# kept"]

    def test_html_comments(self):
        text = "<!-- generated -->\n\nHello\n"

        assert strip_preamble(text) == ["Hello"]

    def test_custom_markers(self):
        text = "<!-- generated -->\n# Heading\n"

        assert strip_preamble(text, ("<!--",)) == ["# Heading"]

    def test_only_preamble(self):
        assert strip_preamble("# a\n\n# b\n") == []

    def test_form_feed_is_not_a_line_break(self):
        assert strip_preamble("a\x0cb\n") == ["a\x0cb"]

    def test_carriage_return_before_newline_is_dropped(self):
        assert strip_preamble("# header\r\nvalue\r\n") == ["value"]

    def test_lone_carriage_return_is_content(self):
        assert strip_preamble("a\rb\n") == ["a\rb"]

    def test_empty(self):
        assert strip_preamble("") == []


class TestGenerate:
    def test_writes_missing_file(self, tmp_path):
        output = NotesOutput({"notes.txt": "hello\n"})

        written = output.generate(tmp_path)

        assert written == [tmp_path / "notes.txt"]
        content = (tmp_path / "notes.txt").read_text()
        assert content.startswith("# THIS FILE WAS AUTOMATICALLY GENERATED")
        assert content.endswith("\n\nhello\n")

    def test_creates_parent_directories(self, tmp_path):
        output = NotesOutput({"nested/dir/notes.txt": "hello\n"})

        output.generate(tmp_path)

        assert (tmp_path / "nested" / "dir" / "notes.txt").exists()

    def test_timestamp_only_change_is_not_rewritten(self, tmp_path):
        output = NotesOutput({"notes.txt": "hello\n"})
        assert output.generate(tmp_path) == [tmp_path / "notes.txt"]
        before = (tmp_path / "notes.txt").read_text()

        set_preamble(timestamp=datetime(2030, 1, 1, tzinfo=timezone.utc), creator="other")

        assert output.generate(tmp_path) == []
        assert (tmp_path / "notes.txt").read_text() == before

    def test_changed_content_is_rewritten(self, tmp_path):
        NotesOutput({"notes.txt": "hello\n"}).generate(tmp_path)

        written = NotesOutput({"notes.txt": "goodbye\n"}).generate(tmp_path)

        assert written == [tmp_path / "notes.txt"]
        assert (tmp_path / "notes.txt").read_text().endswith("goodbye\n")

    def test_hand_edited_file_is_restored(self, tmp_path):
        output = NotesOutput({"notes.txt": "hello\n"})
        output.generate(tmp_path)
        (tmp_path / "notes.txt").write_text("# header\n\nedited\n")

        assert output.generate(tmp_path) == [tmp_path / "notes.txt"]
        assert strip_preamble((tmp_path / "notes.txt").read_text()) == ["hello"]

    def test_form_feed_change_is_rewritten(self, tmp_path):
        NotesOutput({"notes.txt": "a\x0cb\n"}).generate(tmp_path)

        written = NotesOutput({"notes.txt": "a\nb\n"}).generate(tmp_path)

        assert written == [tmp_path / "notes.txt"]

    def test_crlf_file_with_same_lines_is_not_rewritten(self, tmp_path):
        (tmp_path / "notes.txt").write_bytes(b"# old header\r\n\r\nhello\r\n")

        assert NotesOutput({"notes.txt": "hello\n"}).generate(tmp_path) == []

    def test_undecodable_existing_file_is_replaced(self, tmp_path):
        (tmp_path / "notes.txt").write_bytes(b"# old\n\xff\xfe broken\n")

        written = NotesOutput({"notes.txt": "hello\n"}).generate(tmp_path)

        assert written == [tmp_path / "notes.txt"]
        assert strip_preamble((tmp_path / "notes.txt").read_text()) == ["hello"]

    def test_skip_file(self, tmp_path):
        output = NotesOutput({"skipped.txt": SkipFile(), "kept.txt": "kept\n"})

        written = output.generate(tmp_path)

        assert written == [tmp_path / "kept.txt"]
        assert not (tmp_path / "skipped.txt").exists()

    def test_render_failure_writes_nothing(self, tmp_path):
        output = NotesOutput({"first.txt": "first\n", "second.txt": RuntimeError("broken")})

        with pytest.raises(RuntimeError, match="broken"):
            output.generate(tmp_path)

        assert list(tmp_path.iterdir()) == []

    def test_permissions(self, tmp_path):
        output = NotesOutput(
            {"run.sh": "echo hi\n", "plain.txt": "plain\n"},
            permissions={"run.sh": 0o755},
        )

        output.generate(tmp_path)

        assert stat.S_IMODE(os.stat(tmp_path / "run.sh").st_mode) == 0o755
        assert stat.S_IMODE(os.stat(tmp_path / "plain.txt").st_mode) == 0o644

    def test_no_temporary_files_left_behind(self, tmp_path):
        NotesOutput({"notes.txt": "hello\n"}).generate(tmp_path)

        assert [p.name for p in tmp_path.iterdir()] == ["notes.txt"]


def test_license_header():
    header = license_header("# ")

    assert header.startswith("# This Source Code Form is subject to the terms of the Mozilla Public\n")
    assert header.endswith("http://mozilla.org/MPL/2.0/.\n\n")
