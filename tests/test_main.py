"""
Tests for the demo command line (argument parsing and config assembly only).
"""

import json

from flowlines.config import FlowConfig
from flowlines.main import build_config, parse_args


class TestArgs:

    def test_defaults(self):
        args = parse_args([])
        assert (args.width, args.height) == (960, 600)
        assert args.seed is None
        assert args.log_file is None

    def test_log_file(self, tmp_path):
        args = parse_args(["--log-file", str(tmp_path / "demo.log")])
        assert args.log_file.endswith("demo.log")


class TestBuildConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        args = parse_args(["--config", str(tmp_path / "none.json")])
        assert build_config(args) == FlowConfig()

    def test_overrides_applied_over_file(self, tmp_path):
        path = tmp_path / "flow.json"
        path.write_text(json.dumps({"line_width": 2.0, "seed": 3}))
        args = parse_args(["--config", str(path), "--seed", "9", "--fps", "20"])
        config = build_config(args)
        assert config.line_width == 2.0
        assert config.seed == 9.0
        assert config.frame_interval_ms == 50
