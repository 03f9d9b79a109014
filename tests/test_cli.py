"""Tests for the command line entry point."""
import pytest

from constenum import __version__
from constenum.compiler.cli import build_parser, main, parse_line, resolve_config
from constenum.compiler.config import GenerateConfig
from constenum.internals import errors as er
from constenum.semantics.naming import NamingStrategy
from tests.conftest import TESTDATA

GO_GENERATE_ENV = ("GOFILE", "GOPACKAGE", "GOLINE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in GO_GENERATE_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def in_example(example_dir, monkeypatch):
    monkeypatch.chdir(example_dir)
    return example_dir


def config_for(*argv) -> GenerateConfig:
    return resolve_config(build_parser().parse_args(list(argv)))


class TestResolveConfig:

    def test_flags(self):
        config = config_for("-i", "a.go", "-p", "pkg", "-t", "T", "-r", "self", "-n", "kebab-case", "-o", "out.go", "-v")
        assert config == GenerateConfig(
            input="a.go", package="pkg", type_name="T", receiver="self",
            naming_strategy=NamingStrategy.KEBAB, output="out.go", verbose=True,
        )

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("GOFILE", "example.go")
        monkeypatch.setenv("GOPACKAGE", "example")
        monkeypatch.setenv("GOLINE", "5")
        config = config_for()
        assert (config.input, config.package, config.line) == ("example.go", "example", 5)
        assert config.type_name is None

    def test_flags_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("GOFILE", "env.go")
        monkeypatch.setenv("GOPACKAGE", "env")
        config = config_for("--input", "flag.go", "--pkg", "flag")
        assert (config.input, config.package) == ("flag.go", "flag")

    def test_package_left_to_input(self):
        assert config_for("-i", "a.go").package is None

    def test_missing_input(self):
        with pytest.raises(er.ConfigError) as info:
            config_for("-t", "T")
        assert info.value.code == "CE5001"

    @pytest.mark.parametrize("text, line", [(None, 0), ("", 0), ("12", 12), (" 7 ", 7)])
    def test_parse_line(self, text, line):
        assert parse_line(text) == line

    @pytest.mark.parametrize("text", ["x", "-1", "1.5"])
    def test_parse_line_invalid(self, text):
        with pytest.raises(er.ConfigError) as info:
            parse_line(text)
        assert info.value.code == "CE5002"


class TestMain:

    def test_writes_output(self, in_example):
        assert main(["--input", "example.go", "--type", "Kind", "--output", "kind_enum.go"]) == 0
        written = (in_example / "kind_enum.go").read_text(encoding="utf-8")
        assert written == (TESTDATA / "golden" / "kind_enum.go").read_text(encoding="utf-8")

    def test_go_generate_environment(self, in_example, monkeypatch):
        monkeypatch.setenv("GOFILE", "example.go")
        monkeypatch.setenv("GOPACKAGE", "example")
        monkeypatch.setenv("GOLINE", "16")
        assert main([]) == 0
        written = (in_example / "strKind_enum.go").read_text(encoding="utf-8")
        assert written.splitlines()[1] == '// Command: constenum --input="example.go" --pkg="example" --line=16'
        assert "func (s StrKind) String() string {" in written

    def test_stdout(self, in_example, capsys):
        assert main(["-i", "example.go", "-t", "StrKind", "-o", "<STDOUT>"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("// Code generated by constenum; DO NOT EDIT.\n")
        assert not (in_example / "<STDOUT>").exists()

    def test_verbose_notes_on_stderr(self, in_example, capsys):
        assert main(["-i", "example.go", "-t", "Kind", "-v"]) == 0
        err = capsys.readouterr().err
        assert "3 integral constants of type Kind" in err
        assert "wrote kind_enum.go" in err

    def test_missing_type(self, in_example, capsys):
        assert main(["-i", "example.go", "-t", "Nope"]) == 2
        err = capsys.readouterr().err
        assert "[CE2001]" in err
        assert "type 'Nope' not found in package 'example'" in err

    def test_package_mismatch(self, in_example, capsys):
        assert main(["-i", "example.go", "-p", "other", "-t", "Kind"]) == 2
        err = capsys.readouterr().err
        assert "[CE1003]" in err
        assert "example.go:1:9" in err

    def test_bad_line(self, in_example, monkeypatch, capsys):
        monkeypatch.setenv("GOLINE", "abc")
        assert main(["-i", "example.go"]) == 2
        assert "[CE5002]" in capsys.readouterr().err

    def test_no_input(self, in_example, capsys):
        assert main(["-t", "Kind"]) == 2
        assert "constenum: error [CE5001]" in capsys.readouterr().err

    def test_bad_strategy(self, in_example, capsys):
        assert main(["-i", "example.go", "-t", "Kind", "-n", "title"]) == 2
        assert "[CE5003]" in capsys.readouterr().err

    def test_no_type_and_no_line_takes_first_declaration(self, in_example):
        assert main(["-i", "example.go"]) == 0
        assert (in_example / "kind_enum.go").exists()

    def test_directive_before_constant(self, in_example, monkeypatch, capsys):
        monkeypatch.setenv("GOLINE", "7")
        assert main(["-i", "example.go"]) == 2
        err = capsys.readouterr().err
        assert "[CE2003]" in err
        assert "is 'Kind1', which is not a type" in err

    def test_nothing_after_line(self, in_example, monkeypatch, capsys):
        monkeypatch.setenv("GOLINE", "500")
        assert main(["-i", "example.go"]) == 2
        assert "[CE2002]" in capsys.readouterr().err

    def test_duplicate_values_write_nothing(self, in_example, capsys):
        (in_example / "dup.go").write_text(
            "package example\n\ntype Dup int\n\nconst (\n\tDupA Dup = 1\n\tDupB Dup = 1\n)\n",
            encoding="utf-8",
        )
        assert main(["-i", "dup.go", "-t", "Dup"]) == 2
        assert "duplicate value 1 for 'DupB' and 'DupA'" in capsys.readouterr().err
        assert not (in_example / "dup_enum.go").exists()

    def test_missing_input_file(self, in_example, capsys):
        assert main(["-i", "missing.go", "-t", "Kind"]) == 2
        assert "[CE1001]" in capsys.readouterr().err

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        out = capsys.readouterr().out
        assert out.startswith(f"constenum {__version__}")
        assert "lark" in out
