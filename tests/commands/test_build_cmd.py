"""Tests for the build, deps and init commands via cli.main()."""

from __future__ import annotations

import pytest

from preproc.cli import create_parser, main
from preproc.config import CONFIG_FILENAME, parse_toml


@pytest.fixture
def project(write_tree, monkeypatch):
    """A small C-like project in a temporary working directory."""
    root = write_tree(
        {
            "main.c": 'int main;\n//&include <util.h>\n//&include "local.c"\nend main\n',
            "local.c": "int local;\n",
            "inc/util.h": "int util;\n",
        }
    )
    monkeypatch.chdir(root)
    return root


class TestParser:
    """Tests for argument parsing."""

    def test_attached_include_dir(self):
        args = create_parser().parse_args(["build", "main.c", "-Iinc", "-I", "lib"])
        assert args.include == ["inc", "lib"]

    def test_depfile_option(self):
        args = create_parser().parse_args(["build", "main.c", "-MF", "main.i.d"])
        assert str(args.depfile) == "main.i.d"

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestBuildCommand:
    """Tests for `preproc build`."""

    def test_writes_default_output(self, project, capsys):
        assert main(["build", "main.c", "-I", "inc"]) == 0

        output = (project / "main.i").read_text()
        assert output == "int main;\nint util;\nint local;\nend main"

        out = capsys.readouterr().out
        assert "processed " in out
        assert "wrote to main.i" in out

    def test_explicit_output(self, project):
        assert main(["-q", "build", "main.c", "-Iinc", "-o", "out/flat.c"]) == 1

        (project / "out").mkdir()
        assert main(["-q", "build", "main.c", "-Iinc", "-o", "out/flat.c"]) == 0
        assert (project / "out" / "flat.c").exists()

    def test_quiet_prints_nothing(self, project, capsys):
        assert main(["-q", "build", "main.c", "-I", "inc"]) == 0
        assert capsys.readouterr().out == ""

    def test_writes_depfile(self, project):
        assert main(["-q", "build", "main.c", "-I", "inc", "-o", "a.i", "-MF", "a.i.d"]) == 0

        depfile = (project / "a.i.d").read_text()
        root = str(project.resolve()).replace("\\", "/")
        assert depfile == (f"a.i: {root}/main.c {root}/inc/util.h {root}/local.c\n")

    def test_depfile_strip_prefix(self, project):
        prefix = str(project.resolve()) + "/"
        assert (
            main(["-q", "build", "main.c", "-Iinc", "-MF", "d", "--strip-prefix", prefix]) == 0
        )

        assert (project / "d").read_text() == "main.i: main.c inc/util.h local.c\n"

    def test_comment_marker_option(self, write_tree, monkeypatch):
        root = write_tree({"app.py": "x = 1\n#&include <more.py>\n", "more.py": "y = 2\n"})
        monkeypatch.chdir(root)

        assert main(["-q", "build", "app.py", "-c", "#"]) == 0

        assert (root / "app.i").read_text() == "x = 1\ny = 2"

    def test_missing_include_fails(self, project, capsys):
        assert main(["build", "main.c"]) == 1

        err = capsys.readouterr().err
        assert "Error: file not found <util.h>" in err
        assert not (project / "main.i").exists()

    def test_missing_seed_fails(self, project, capsys):
        assert main(["build", "nope.c"]) == 1
        assert "file not found" in capsys.readouterr().err

    def test_malformed_directive_fails(self, write_tree, monkeypatch, capsys):
        root = write_tree({"bad.c": "ok\n//&wrong <not read>\n"})
        monkeypatch.chdir(root)

        assert main(["build", "bad.c"]) == 1

        assert "line 1: invalid preproc statement `wrong <not read>`" in capsys.readouterr().err

    def test_verbose_reraises(self, project):
        from preproc.errors import NotFoundError

        with pytest.raises(NotFoundError):
            main(["-v", "build", "main.c"])

    def test_uses_config_file(self, project):
        (project / CONFIG_FILENAME).write_text(
            '[preprocess]\ninclude_paths = ["inc"]\noutput_suffix = ".flat"\n'
        )

        assert main(["-q", "build", "main.c"]) == 0

        assert (project / "main.flat").exists()


class TestDepsCommand:
    """Tests for `preproc deps`."""

    def test_prints_rule(self, project, capsys):
        prefix = str(project.resolve()) + "/"

        assert main(["deps", "main.c", "-I", "inc", "--strip-prefix", prefix]) == 0

        assert capsys.readouterr().out == "main.i: main.c inc/util.h local.c\n"

    def test_custom_target(self, project, capsys):
        prefix = str(project.resolve()) + "/"

        assert main(["deps", "main.c", "-Iinc", "--target", "x.o", "--strip-prefix", prefix]) == 0

        assert capsys.readouterr().out.startswith("x.o: main.c")


class TestInitCommand:
    """Tests for `preproc init`."""

    def test_creates_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert main(["-q", "init"]) == 0

        config = parse_toml((tmp_path / CONFIG_FILENAME).read_text())
        assert config["preprocess"]["comment"] == "//"
        assert config["preprocess"]["include_paths"] == []
        assert config["depfile"]["strip_prefix"] == ""

    def test_refuses_to_overwrite(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / CONFIG_FILENAME).write_text("# mine\n")

        assert main(["init"]) == 1
        assert "already exists" in capsys.readouterr().err
        assert (tmp_path / CONFIG_FILENAME).read_text() == "# mine\n"

    def test_force_overwrites(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / CONFIG_FILENAME).write_text("# mine\n")

        assert main(["-q", "init", "--force"]) == 0
        assert "[preprocess]" in (tmp_path / CONFIG_FILENAME).read_text()
