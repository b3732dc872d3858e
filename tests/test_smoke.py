from geoconstruct import demo


def test_demo_runs_end_to_end(capsys):
    demo.run()
    out = capsys.readouterr().out.splitlines()

    assert out[0] == "Elements (9):"
    assert "point A (0, 0) fixed" in out
    assert "point B (10, 0) fixed" in out
    assert "circle center A through B" in out
    assert "perp-bisector of A-B" in out
    assert sum(1 for line in out if line.endswith("derived")) == 2
    assert out[-1] == "can_undo=True can_redo=False"
