"""Unit tests for the local delivery sink and browser surface."""

import pytest

from diffexport.delivery import BrowserSurface, DeliverySink, DisplaySurface, LocalDeliverySink, apply_title


@pytest.mark.unit
class TestLocalDeliverySink:
    """Saving staged files."""

    def test_copies_staged_file(self, tmp_path):
        staged = tmp_path / "staged.tmp"
        staged.write_bytes(b"report")
        sink = LocalDeliverySink(output_dir=tmp_path / "out" / "nested")

        sink.save_file(staged, "diff_2024-03-15.md", "text/markdown;charset=utf-8")

        destination = tmp_path / "out" / "nested" / "diff_2024-03-15.md"
        assert destination.read_bytes() == b"report"
        assert sink.saved_paths == [destination]
        assert staged.exists()

    @pytest.mark.parametrize("filename", ["../../evil.txt", "sub/report.txt", "sub\\report.txt", "", ".."])
    def test_rejects_filenames_with_directory_parts(self, tmp_path, filename):
        staged = tmp_path / "staged.tmp"
        staged.write_bytes(b"x")
        sink = LocalDeliverySink(output_dir=tmp_path / "out")

        with pytest.raises(ValueError):
            sink.save_file(staged, filename, "text/plain")

        assert sink.saved_paths == []
        assert not (tmp_path / "out").exists()

    def test_defaults_to_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        staged = tmp_path / "staged.tmp"
        staged.write_bytes(b"x")

        LocalDeliverySink().save_file(staged, "a.txt", "text/plain")

        assert (tmp_path / "a.txt").read_bytes() == b"x"

    def test_missing_staged_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            LocalDeliverySink(output_dir=tmp_path).save_file(tmp_path / "missing", "a.txt", "text/plain")

    def test_satisfies_protocol(self):
        sink = LocalDeliverySink()

        assert isinstance(sink, DeliverySink)
        assert isinstance(sink.open_surface(), DisplaySurface)
        assert len(sink.surfaces) == 1


@pytest.mark.unit
class TestBrowserSurface:
    """Browser-backed preview surface."""

    def test_close_writes_file_and_opens_browser(self, no_browser):
        surface = BrowserSurface()
        surface.write("<html><head><title>x</title></head>")
        surface.write("<body>hi</body></html>")
        surface.set_title("Diff Export Preview")

        surface.close()

        try:
            assert surface.path is not None
            assert surface.path.name.startswith("diffexport-preview-")
            content = surface.path.read_text(encoding="utf-8")
            assert "<title>Diff Export Preview</title>" in content
            assert "<body>hi</body>" in content
            assert no_browser == [surface.path.as_uri()]
        finally:
            surface.path.unlink()

    def test_environment_disables_browser(self, no_browser, monkeypatch):
        monkeypatch.setenv("DIFFEXPORT_NO_BROWSER", "1")
        surface = BrowserSurface()
        surface.write("<p>x</p>")

        surface.close()

        try:
            assert no_browser == []
        finally:
            surface.path.unlink()

    def test_open_browser_flag(self, no_browser):
        surface = BrowserSurface(open_browser=False)
        surface.close()

        try:
            assert no_browser == []
            assert surface.path.read_text(encoding="utf-8") == ""
        finally:
            surface.path.unlink()

    def test_write_after_close_fails(self, no_browser):
        surface = BrowserSurface(open_browser=False)
        surface.close()
        surface.path.unlink()

        with pytest.raises(ValueError):
            surface.write("late")


@pytest.mark.unit
class TestApplyTitle:
    """Title replacement in HTML documents."""

    def test_replaces_existing_title(self):
        assert apply_title("<head><title>Old</title></head>", "New") == "<head><title>New</title></head>"

    def test_inserts_into_head(self):
        assert apply_title('<head lang="en"></head>', "T") == '<head lang="en"><title>T</title></head>'

    def test_prepends_without_head(self):
        assert apply_title("<p>x</p>", "A & B") == "<title>A &amp; B</title><p>x</p>"
