import logging

from winding_cooling.run_simulation import build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.criterion == "top_oil"
    assert args.discs == [33, 33, 32]
    assert args.repeat == 1


def test_small_coil_runs(caplog):
    caplog.set_level(logging.INFO, logger="winding_cooling")
    assert main(["--discs", "5", "5", "5", "--repeat", "2"]) == 0
    assert "Hottest disc" in caplog.text
    assert "Space factors from layout" in caplog.text


def test_bad_settings_fail_cleanly():
    assert main(["--discs", "4", "--p-relax", "0"]) == 1
    assert main(["--discs", "4", "--rad-height", "0"]) == 1
