"""
CLI Tests for bfrun.

Drives bfrun.main(argv) in-process and checks stdout bytes, stderr
messages and exit codes.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import bfrun


@pytest.fixture
def prog_file(tmp_path):
    def _write(source: str, name: str = "prog.bf"):
        p = tmp_path / name
        p.write_text(source, encoding="utf-8")
        return str(p)
    return _write


class TestRun:
    def test_example_hello(self, capsysbinary):
        assert bfrun.main(["--example", "hello"]) == 0
        assert capsysbinary.readouterr().out == b"Hello, World!"

    def test_example_cat_default_input(self, capsysbinary):
        assert bfrun.main(["-e", "cat"]) == 0
        assert capsysbinary.readouterr().out == b"cool cat :3"

    def test_file_with_input_text(self, prog_file, capsysbinary):
        path = prog_file(",+[-.,+]")
        assert bfrun.main([path, "-i", "abc"]) == 0
        assert capsysbinary.readouterr().out == b"abc"

    def test_input_file(self, prog_file, tmp_path, capsysbinary):
        data = tmp_path / "in.bin"
        data.write_bytes(b"\x00\x01z")
        assert bfrun.main([prog_file(",.,.,."), "-f", str(data)]) == 0
        assert capsysbinary.readouterr().out == b"\x00\x01z"

    def test_non_utf8_comment_bytes(self, tmp_path, capsysbinary):
        p = tmp_path / "latin.bf"
        p.write_bytes(b"caf\xe9 comment +++.")
        assert bfrun.main([str(p)]) == 0
        assert capsysbinary.readouterr().out == b"\x03"

    def test_verbose_summary(self, prog_file, capsys):
        assert bfrun.main([prog_file("+>"), "-v"]) == 0
        err = capsys.readouterr().err
        assert "[bfrun] Program:" in err
        assert "HALT after 2 steps" in err


class TestDump:
    def test_dump_listing(self, prog_file, capsys):
        assert bfrun.main([prog_file("+[-]"), "--dump"]) == 0
        out = capsys.readouterr().out
        assert "0001: [  -> 0003" in out
        assert "0003: ]  -> 0001" in out


class TestErrors:
    def test_unmatched_bracket(self, prog_file, capsys):
        assert bfrun.main([prog_file("+]")]) == 1
        assert "Translation error" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert bfrun.main([str(tmp_path / "nope.bf")]) == 1
        assert "Error reading input" in capsys.readouterr().err

    def test_step_budget_abort(self, prog_file, capsysbinary):
        assert bfrun.main([prog_file("+[.]"), "--max-steps", "10"]) == 1
        captured = capsysbinary.readouterr()
        assert captured.out == b"\x01" * 4
        assert b"exceeded step budget" in captured.err

    def test_underflow_abort(self, prog_file, capsys):
        assert bfrun.main([prog_file("<")]) == 1
        assert "pointer underflow" in capsys.readouterr().err

    def test_needs_program_or_example(self):
        with pytest.raises(SystemExit):
            bfrun.main([])

    def test_not_both(self, prog_file):
        with pytest.raises(SystemExit):
            bfrun.main([prog_file("+"), "--example", "hello"])


class TestLogging:
    def test_setup_logging_file_handler(self, tmp_path):
        import logging
        from tapevm.log_setup import setup_logging
        from rich.logging import RichHandler
        logger = setup_logging("tapevm.test_setup", log_dir=tmp_path)
        logger.debug("hello file")
        for h in logger.handlers:
            h.flush()
        files = list(tmp_path.glob("tapevm.test_setup_*.log"))
        assert len(files) == 1
        assert "hello file" in files[0].read_text(encoding="utf-8")
        # second call reuses the configured handlers
        assert setup_logging("tapevm.test_setup", console_level=logging.DEBUG) is logger
        assert len(logger.handlers) == 2
        rich_levels = [h.level for h in logger.handlers if isinstance(h, RichHandler)]
        assert rich_levels == [logging.DEBUG]

    def test_trace_flag_runs(self, prog_file, capsysbinary):
        assert bfrun.main([prog_file("++."), "--trace"]) == 0
        assert capsysbinary.readouterr().out == b"\x02"


if __name__ == '__main__':
    pytest.main([__file__, "-v"])
