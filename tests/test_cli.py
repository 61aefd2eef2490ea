"""Tests for the wire-schema command line."""

import json

import pytest

from wire_schema import __version__
from wire_schema.cli import main
from wire_schema.logging import disable_verbose

CANONICAL_COMMENTED = (
    "#wire-schema 1\n"
    "C ram 0 p:-12,-23\n"
    "C rom 1 p:-12,-10\n"
    "W 6 ns:[-12,3 p:insFetch/addr|-17,3,0]\n"
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo -v between tests."""
    yield
    disable_verbose()


class TestMain:
    """Tests for top-level argument handling."""

    def test_no_command_prints_help(self, capsys):
        """Running without a command shows help."""
        assert main([]) == 0
        assert "wire-schema" in capsys.readouterr().out

    def test_version(self, capsys):
        """--version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_bad_config_exits_2(self, isolated_config, cpu_layout_file, capsys):
        """An unreadable project config stops the command."""
        (isolated_config / ".wire-schema.toml").write_text("[defaults\n")
        assert main(["check", str(cpu_layout_file)]) == 2
        assert "Invalid TOML" in capsys.readouterr().err


class TestCheck:
    """Tests for the check command."""

    def test_clean_file(self, isolated_config, cpu_layout_file, capsys):
        """A canonical file passes with a summary line."""
        assert main(["check", str(cpu_layout_file)]) == 0
        out = capsys.readouterr().out
        assert "cpu.wires: 8 component(s), 7 wire(s), no issues" in out

    def test_quiet_clean_file(self, isolated_config, cpu_layout_file, capsys):
        """-q suppresses the summary."""
        assert main(["check", "-q", str(cpu_layout_file)]) == 0
        assert capsys.readouterr().out == ""

    def test_broken_file(self, isolated_config, broken_layout_file, capsys):
        """Errors fail the check and are listed."""
        assert main(["check", str(broken_layout_file)]) == 1
        out = capsys.readouterr().out
        assert "Issues in broken.wires" in out
        assert "5 error(s)" in out

    def test_warnings_pass_unless_strict(self, isolated_config, commented_layout_file):
        """Round-trip warnings fail only with --strict."""
        assert main(["check", str(commented_layout_file)]) == 0
        assert main(["check", "--strict", str(commented_layout_file)]) == 1

    def test_normalized(self, isolated_config, commented_layout_file, capsys):
        """--normalized ignores comments and spacing."""
        assert main(["check", "--strict", "--normalized", str(commented_layout_file)]) == 0
        assert "no issues" in capsys.readouterr().out

    def test_no_verify(self, isolated_config, commented_layout_file):
        """--no-verify skips the round-trip check."""
        assert main(["check", "--strict", "--no-verify", str(commented_layout_file)]) == 0

    def test_exact_overrides_config(self, isolated_config, commented_layout_file):
        """--exact wins over a configured normalized mode."""
        (isolated_config / ".wire-schema.toml").write_text(
            '[import]\nround_trip_mode = "normalized"\nstrict = true\n'
        )
        assert main(["check", str(commented_layout_file)]) == 0
        assert main(["check", "--exact", str(commented_layout_file)]) == 1

    def test_config_bad_mode(self, isolated_config, cpu_layout_file, capsys):
        """An unknown configured mode is a usage error."""
        (isolated_config / ".wire-schema.toml").write_text('[import]\nround_trip_mode = "fuzzy"\n')
        assert main(["check", str(cpu_layout_file)]) == 2
        assert "fuzzy" in capsys.readouterr().err

    def test_json(self, isolated_config, broken_layout_file, capsys):
        """JSON output carries every issue and a summary."""
        assert main(["check", "--format", "json", str(broken_layout_file)]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["file"] == str(broken_layout_file)
        assert data["state"] == "done"
        assert data["components"] == 2
        assert data["wires"] == 1
        assert data["summary"] == {"total": 6, "errors": 5, "warnings": 1}
        assert data["issues"][0]["line_number"] == 2
        assert data["issues"][-1]["kind"] == "round_trip"

    def test_json_from_config(self, isolated_config, cpu_layout_file, capsys):
        """The configured default format is used when no flag is given."""
        (isolated_config / ".wire-schema.toml").write_text('[defaults]\nformat = "json"\n')
        assert main(["check", str(cpu_layout_file)]) == 0
        assert json.loads(capsys.readouterr().out)["summary"]["total"] == 0

    def test_aborted(self, isolated_config, tmp_path, capsys):
        """An unsupported version fails the check."""
        path = tmp_path / "v2.wires"
        path.write_text("#wire-schema 2\n")
        assert main(["check", str(path)]) == 1
        assert "Import aborted" in capsys.readouterr().out

    def test_missing_file(self, isolated_config, tmp_path, capsys):
        """A missing file exits 2."""
        assert main(["check", str(tmp_path / "nope.wires")]) == 2
        assert "Layout file not found" in capsys.readouterr().err

    def test_verbose_logs(self, isolated_config, commented_layout_file, capsys):
        """-v logs the round-trip mismatch to stderr."""
        assert main(["-v", "check", str(commented_layout_file)]) == 0
        assert "Exported data does not match imported data" in capsys.readouterr().err


class TestFormat:
    """Tests for the format command."""

    def test_stdout(self, isolated_config, commented_layout_file, capsys):
        """Canonical text goes to stdout."""
        assert main(["format", str(commented_layout_file)]) == 0
        assert capsys.readouterr().out == CANONICAL_COMMENTED

    def test_canonical_unchanged(self, isolated_config, cpu_layout_file, capsys, cpu_text):
        """A canonical file formats to itself."""
        assert main(["format", str(cpu_layout_file)]) == 0
        assert capsys.readouterr().out == cpu_text

    def test_check(self, isolated_config, cpu_layout_file, commented_layout_file, capsys):
        """--check reports whether the file is canonical."""
        assert main(["format", "--check", str(cpu_layout_file)]) == 0
        assert main(["format", "--check", str(commented_layout_file)]) == 1
        assert "not in canonical form" in capsys.readouterr().err

    def test_in_place(self, isolated_config, commented_layout_file):
        """--in-place rewrites the input."""
        assert main(["format", "--in-place", str(commented_layout_file)]) == 0
        assert commented_layout_file.read_text() == CANONICAL_COMMENTED

    def test_output(self, isolated_config, commented_layout_file, tmp_path):
        """-o writes to another file and leaves the input alone."""
        out = tmp_path / "out" / "clean.wires"
        original = commented_layout_file.read_text()
        assert main(["format", "-o", str(out), str(commented_layout_file)]) == 0
        assert out.read_text() == CANONICAL_COMMENTED
        assert commented_layout_file.read_text() == original

    def test_refuses_lossy_format(self, isolated_config, broken_layout_file, capsys):
        """A file with errors is not formatted without --force."""
        original = broken_layout_file.read_text()
        assert main(["format", "--in-place", str(broken_layout_file)]) == 1
        assert "Refusing to format" in capsys.readouterr().err
        assert broken_layout_file.read_text() == original

    def test_force(self, isolated_config, broken_layout_file):
        """--force writes what could be imported."""
        assert main(["format", "--in-place", "--force", str(broken_layout_file)]) == 0
        assert broken_layout_file.read_text().splitlines() == [
            "#wire-schema 1",
            "C ram 0 p:0,0",
            "C rom 1 p:-12,-10",
            "W 3 ns:[13,6|22,6,0]",
        ]

    def test_aborted(self, isolated_config, tmp_path, capsys):
        """A rejected header exits 2."""
        path = tmp_path / "v2.wires"
        path.write_text("#wire-schema 2\n")
        assert main(["format", str(path)]) == 2
        assert "only version 1 is supported" in capsys.readouterr().err

    def test_missing_file(self, isolated_config, tmp_path):
        """A missing file exits 2."""
        assert main(["format", str(tmp_path / "nope.wires")]) == 2

    def test_import_settings_ignored(self, isolated_config, commented_layout_file, capsys):
        """[import] settings belong to check and do not change formatting."""
        (isolated_config / ".wire-schema.toml").write_text(
            '[import]\nround_trip_mode = "fuzzy"\nstrict = true\n'
        )
        assert main(["format", str(commented_layout_file)]) == 0
        assert capsys.readouterr().out == CANONICAL_COMMENTED


class TestConfigCommand:
    """Tests for the config command."""

    def test_show_defaults(self, isolated_config, capsys):
        """--show lists every key with its source."""
        assert main(["config", "--show"]) == 0
        out = capsys.readouterr().out
        assert "[defaults]" in out
        assert "[import]" in out
        assert 'round_trip_mode = "exact"  # from: default' in out

    def test_show_project_value(self, isolated_config, capsys):
        """Values from a project file name the file."""
        (isolated_config / ".wire-schema.toml").write_text("[import]\nstrict = true\n")
        assert main(["config"]) == 0
        assert "strict = true  # from: .wire-schema.toml" in capsys.readouterr().out

    def test_init(self, isolated_config, capsys):
        """--init writes a template once."""
        assert main(["config", "--init"]) == 0
        assert (isolated_config / ".wire-schema.toml").is_file()
        assert main(["config", "--init"]) == 1
        assert "already exists" in capsys.readouterr().err

    def test_init_user(self, isolated_config, tmp_path):
        """--init --user writes the user config."""
        assert main(["config", "--init", "--user"]) == 0
        assert (tmp_path / "user" / "config.toml").is_file()

    def test_paths(self, isolated_config, capsys):
        """--paths reports both locations."""
        assert main(["config", "--paths"]) == 0
        out = capsys.readouterr().out
        assert "User config:" in out
        assert ".wire-schema.toml, wire-schema.toml" in out

    def test_show_bad_config(self, isolated_config, capsys):
        """A broken config file makes --show fail."""
        (isolated_config / ".wire-schema.toml").write_text("[import\n")
        assert main(["config", "--show"]) == 1
        assert "Error" in capsys.readouterr().err
