"""
Command line tests for vicc.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import vicc


SUM = "    read\n    store a\n    read\n    add a\n    write\n    stop\n"


@pytest.fixture
def write_file(tmp_path):
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


class TestAssemble:
    def test_stdout(self, write_file, capsys):
        path = write_file("prog.vic", "store x\nadd x\n")
        assert vicc.main(["assemble", path]) == 0
        assert capsys.readouterr().out == "490\n190\n"

    def test_output_file(self, write_file, tmp_path):
        path = write_file("prog.vic", "foo:\ngoto foo\n")
        out = tmp_path / "prog.vicbin"
        assert vicc.main(["assemble", path, "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == "500\n"

    def test_listing(self, write_file, capsys):
        path = write_file("prog.vic", SUM)
        assert vicc.main(["assemble", path, "--listing"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("ADDR  CODE  SOURCE")
        assert "0490" in out

    def test_diagnostics_are_one_based(self, write_file, capsys):
        path = write_file("bad.vic", "  stop\n  bogus\n  load x\n")
        assert vicc.main(["assemble", path]) == 1
        err = capsys.readouterr().err
        assert f'{path}:2:3: error: Unknown instruction "BOGUS"' in err
        assert f'{path}:3:8: error: No such variable "x"' in err

    def test_rejects_binary_input(self, write_file):
        path = write_file("prog.vicbin", "0\n")
        assert vicc.main(["assemble", path]) == 1


class TestCheck:
    def test_ok(self, write_file):
        assert vicc.main(["check", write_file("prog.vic", SUM)]) == 0

    def test_parse_errors_before_assembly_errors(self, write_file, capsys):
        path = write_file("bad.vic", "  goto end\n  stop now\n")
        assert vicc.main(["check", path]) == 1
        err = capsys.readouterr().err.splitlines()
        assert err == [
            f"{path}:2:8: error: Unexpected argument to STOP instruction",
            f'{path}:1:8: error: No such label "end"',
        ]

    def test_binary(self, write_file, capsys):
        path = write_file("prog.vicbin", "1\n2000\n")
        assert vicc.main(["check", path]) == 1
        assert f"{path}:2:1: error: Value out of range: 2000" in capsys.readouterr().err

    def test_binary_flag(self, write_file):
        path = write_file("prog.txt", "303\n900\n")
        assert vicc.main(["check", "--binary", path]) == 0

    def test_missing_file(self, tmp_path):
        assert vicc.main(["check", str(tmp_path / "nope.vic")]) == 1


class TestRun:
    def test_assembly(self, write_file, capsys):
        path = write_file("sum.vic", SUM)
        assert vicc.main(["run", path, "--input", "3", "4"]) == 0
        assert capsys.readouterr().out == "7\n"

    def test_binary(self, write_file, capsys):
        path = write_file("prog.vicbin", "303\n900\n0\n42\n")
        assert vicc.main(["run", path]) == 0
        assert capsys.readouterr().out == "42\n"

    def test_no_input(self, write_file):
        path = write_file("sum.vic", SUM)
        assert vicc.main(["run", path, "--input", "3"]) == 3

    def test_budget_exhausted(self, write_file):
        path = write_file("loop.vic", "loop:\n  goto loop\n")
        assert vicc.main(["run", path, "--max-iterations", "10"]) == 4

    def test_trace_and_dump(self, write_file, capsys):
        path = write_file("prog.vicbin", "303\n900\n0\n42\n")
        assert vicc.main(["run", path, "--trace", "--dump"]) == 0
        err = capsys.readouterr().err
        assert "00: LOAD 03" in err
        assert "00:  303  900    0   42" in err

    @pytest.mark.parametrize("value", ["1500", "-1000"])
    def test_input_out_of_range(self, write_file, value):
        path = write_file("sum.vic", SUM)
        assert vicc.main(["run", path, "--input", "3", value]) == 1

    def test_compile_errors(self, write_file):
        path = write_file("bad.vic", "load x\n")
        assert vicc.main(["run", path]) == 1


class TestHighlight:
    def test_variable(self, write_file, capsys):
        path = write_file("prog.vic", "store foo\nfoo:\nadd foo\n")
        assert vicc.main(["highlight", path, "3", "6"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            f"{path}:1:7-10",
            f"{path}:3:5-8",
        ]

    def test_nothing_there(self, write_file):
        path = write_file("prog.vic", "stop\n")
        assert vicc.main(["highlight", path, "1", "1"]) == 1


class TestFormat:
    def test_assembly(self, write_file, capsys):
        path = write_file("prog.vic", "  start:\nread   // in\n")
        assert vicc.main(["format", path]) == 0
        assert capsys.readouterr().out == "start:\n    read // in\n"

    def test_tabs_to_file(self, write_file, tmp_path):
        path = write_file("prog.vic", "write\n")
        out = tmp_path / "out.vic"
        assert vicc.main(["format", path, "--tabs", "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == "\twrite\n"

    def test_binary(self, write_file, capsys):
        path = write_file("prog.vicbin", "  303 \n\t900\n")
        assert vicc.main(["format", path]) == 0
        assert capsys.readouterr().out == "303\n900\n"
