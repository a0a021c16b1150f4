"""
Tests for the harmonic-pickups command line front end.
"""

import json

import pytest

from harmonic_pickups.cli import build_parser, config_from_args, main

SECOND_HARMONIC_ONLY = ['--length', '648', '--search-limit', '648',
                        '--weights', '1', '0', '0', '0', '0', '0']


class TestArguments:
    """Parser defaults and weight overrides."""

    def test_defaults(self):
        config = config_from_args(build_parser().parse_args([]))
        assert config.length == 650.0
        assert config.search_limit == 325.0
        assert config.harmonic_weights == (0.15, 1.5, 1.5, 1.5, 0.75, 0.75)

    def test_single_weight_override(self):
        args = build_parser().parse_args(['--weight', '5=2.0', '--weight', '2=0'])
        config = config_from_args(args)
        assert config.weight(5) == 2.0
        assert config.weight(2) == 0.0
        assert config.weight(3) == 1.5

    def test_malformed_weight_override(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['--weight', 'five'])

    def test_debug_and_quiet_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['--debug', '--quiet'])


class TestMain:
    """End-to-end runs."""

    def test_text_output(self, capsys):
        assert main(SECOND_HARMONIC_ONLY) == 0
        out = capsys.readouterr().out
        assert "Bridge Pickup: 324.00 mm from bridge (50.0%)" in out
        assert "Neck Pickup:   324.00 mm from bridge (50.0%)" in out

    def test_json_output(self, capsys):
        assert main(SECOND_HARMONIC_ONLY + ['--json']) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["bridge"]["position_mm"] == 324.0
        assert data["neck"]["position_mm"] == 324.0
        assert data["separated"] is False
        assert "curve" not in data

    def test_json_with_curves(self, capsys):
        assert main(SECOND_HARMONIC_ONLY + ['--json', '--curves']) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["curve"]["intensities"]) == 1001

    def test_search_limit_beyond_length(self, capsys):
        assert main(['--length', '648', '--search-limit', '700']) == 2
        assert "error:" in capsys.readouterr().err

    def test_unknown_harmonic_override(self, capsys):
        assert main(['--weight', '9=1.0']) == 2
        assert "Unknown harmonic 9" in capsys.readouterr().err

    def test_coarse_resolution_rejected(self, capsys):
        assert main(['--resolution', '50']) == 2

    def test_plot(self, tmp_path, capsys):
        target = tmp_path / "heatmap.png"
        assert main(SECOND_HARMONIC_ONLY + ['--plot', str(target), '--quiet']) == 0
        assert target.exists()
        assert "Figure saved" in capsys.readouterr().out
