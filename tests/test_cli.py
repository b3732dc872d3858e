import geoconstruct.__main__ as cli


def test_main_replays_script_and_prints_elements(tmp_path, capsys):
    script_path = tmp_path / "triangle.txt"
    script_path.write_text(
        "tool line\nclick 0 0\nclick 10 0\ntool label\nclick 0 0\nclick 10 0\n",
        encoding="utf-8",
    )

    cli.main([str(script_path), "--zoom", "10"])

    out = capsys.readouterr().out.splitlines()
    assert out[:3] == [
        "point A (0, 0) fixed",
        "point B (10, 0) fixed",
        "line A-B",
    ]
    assert out[-1] == "# elements=3 can_undo=True can_redo=False"


def test_main_pick_radius_override(tmp_path, capsys):
    script_path = tmp_path / "points.txt"
    script_path.write_text("tool point\nclick 0 0\nclick 3 0\n", encoding="utf-8")

    # 12 px at zoom 1 swallows the second click, 1 px does not
    cli.main([str(script_path)])
    assert capsys.readouterr().out.splitlines()[-1].startswith("# elements=1 ")

    cli.main([str(script_path), "--pick-radius", "1"])
    assert capsys.readouterr().out.splitlines()[-1].startswith("# elements=2 ")
