import pytest

from baka.main import build_parser


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.air_type == "sub"
    assert args.refresh is False
    assert args.week is None


def test_parser_options():
    args = build_parser().parse_args(["--week", "12", "--year", "2024", "--air-type", "dub", "--refresh", "--log-level", "debug"])
    assert (args.week, args.year, args.air_type, args.refresh, args.log_level) == (12, 2024, "dub", True, "DEBUG")


def test_parser_rejects_unknown_air_type():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--air-type", "fansub"])
