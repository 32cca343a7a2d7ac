"""Tests for the command-line interface and text rendering."""

import json
from pathlib import Path

import pytest

from pathfinder.cli import build_parser, config_from_args, main
from pathfinder.query import QueryMode
from tests.helpers import FIXTURE_TOKENS, USDC, USDE, WETH


def run_cli(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, str, str]:
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestConfigFromArgs:
    """Tests for argument handling."""

    def test_defaults(self) -> None:
        config = config_from_args(build_parser().parse_args(["--in", "A", "--out", "B"]))
        assert config.k == 1
        assert config.max_depth == 5
        assert config.effective_mode is QueryMode.PATHS

    def test_camel_case_aliases(self) -> None:
        args = build_parser().parse_args(["--maxDepth", "3", "--listTokens"])
        config = config_from_args(args)
        assert config.max_depth == 3
        assert config.mode is QueryMode.TOKENS

    def test_unique_flag(self) -> None:
        config = config_from_args(build_parser().parse_args(["--unique", "--k", "4"]))
        assert config.effective_mode is QueryMode.UNION

    def test_out_of_range_values_are_clamped(self) -> None:
        config = config_from_args(build_parser().parse_args(["--k", "-3", "--max-depth", "0"]))
        assert config.k == 0
        assert config.max_depth == 1


class TestMain:
    """Tests for main() over the fixture dataset."""

    def test_list_tokens(self, capsys, pools_path: Path) -> None:
        code, out, _ = run_cli(capsys, "--file", str(pools_path), "--list-tokens")
        assert code == 0
        lines = out.strip().splitlines()
        assert lines[0] == f"Found {len(FIXTURE_TOKENS)} tokens:"
        assert lines[1:] == FIXTURE_TOKENS

    def test_single_path(self, capsys, pools_path: Path) -> None:
        code, out, _ = run_cli(
            capsys, "--file", str(pools_path), "--in", "USDe", "--out", WETH.lower()
        )
        assert code == 0
        assert f"Found 1 path(s) from {USDE} → {WETH} (maxDepth=5, k=1)" in out
        assert "=== PATH #1 ===" in out
        assert f"Tokens: {USDE} -> {USDC} -> {WETH}" in out
        assert "  1. [EthenaMint] EthenaMint::" in out
        assert "  2. [UniswapV3] UniswapV3::" in out

    def test_union_text(self, capsys, pools_path: Path) -> None:
        code, out, _ = run_cli(
            capsys, "--file", str(pools_path), "--in", "USDe", "--out", WETH, "--k", "0",
            "--max-depth", "3",
        )
        assert code == 0
        assert "## Adapters to Whitelist (union over all valid routes)" in out
        assert "1. **CurveStableSwap**" in out
        assert "2. **EthenaMint**" in out
        assert "3. **UniswapV3**" in out
        assert "     - chain: ethereum" in out
        assert "     - fee: 500" in out
        assert "**Tokens to add as collaterals (5):**" in out
        assert f"- {USDE}" in out

    def test_union_json(self, capsys, pools_path: Path) -> None:
        code, out, _ = run_cli(
            capsys, "--file", str(pools_path), "--in", "USDe", "--out", WETH, "--unique",
            "--max-depth", "2", "--format", "json",
        )
        assert code == 0
        data = json.loads(out)
        assert data["mode"] == "union"
        assert [g["adapter"] for g in data["groups"]] == ["EthenaMint", "UniswapV3"]

    def test_no_path(self, capsys, pools_path: Path) -> None:
        code, out, _ = run_cli(
            capsys, "--file", str(pools_path), "--in", "FOO", "--out", "USDe"
        )
        assert code == 0
        assert out.strip() == f"No path found from FOO → {USDE}."

    def test_no_union(self, capsys, pools_path: Path) -> None:
        code, out, _ = run_cli(
            capsys, "--file", str(pools_path), "--in", "FOO", "--out", "USDe", "--unique"
        )
        assert code == 0
        assert "No adapters found" in out

    def test_unknown_token(self, capsys, pools_path: Path) -> None:
        code, out, err = run_cli(
            capsys, "--file", str(pools_path), "--in", "USDe", "--out", "NOPE"
        )
        assert code == 1
        assert out == ""
        assert "TokenOut not found in graph: NOPE" in err
        assert "--list-tokens" in err

    def test_missing_tokens(self, capsys, pools_path: Path) -> None:
        code, _, err = run_cli(capsys, "--file", str(pools_path), "--in", "USDe")
        assert code == 1
        assert "token_in and token_out" in err

    def test_missing_file(self, capsys, tmp_path: Path) -> None:
        code, out, err = run_cli(capsys, "--file", str(tmp_path / "nope.json"), "--list-tokens")
        assert code == 1
        assert out == ""
        assert "File not found" in err

    def test_undecodable_file(self, capsys, tmp_path: Path) -> None:
        path = tmp_path / "pools.json"
        path.write_bytes(b'[{"adapter": "\xff\xfe", "pools": []}]')
        code, out, err = run_cli(capsys, "--file", str(path), "--list-tokens")
        assert code == 1
        assert out == ""
        assert "Error: Dataset is not valid UTF-8" in err
