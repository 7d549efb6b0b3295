import io

from exprcompiler.cli import main


def test_main_with_arguments(tmp_path, capsys):
    source = tmp_path / "in.txt"
    source.write_text("decl x = 1;")
    output = tmp_path / "out.asm"
    assert main([str(source), str(output)]) == 0
    assert output.read_text().startswith("section .text\n")
    assert "Compilation finished with no errors" in capsys.readouterr().out


def test_main_failure_returns_one(tmp_path, capsys):
    output = tmp_path / "out.asm"
    assert main([str(tmp_path / "nope.txt"), str(output)]) == 1
    assert "does not exist" in capsys.readouterr().out
    assert not output.exists()


def test_main_prompts_for_names(tmp_path, capsys, monkeypatch):
    source = tmp_path / "in.txt"
    source.write_text("decl y; print y;")
    output = tmp_path / "out.asm"
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{source}\n{output}\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Please input the name of the input file: " in out
    assert "Please input the name of the output file: " in out
    assert "\tcall _print\n" in output.read_text()