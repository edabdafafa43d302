"""Unit tests for the forc toolchain wrapper."""

import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, List

import pytest

from hyperlane_fuel_deploy import toolchain
from hyperlane_fuel_deploy.exceptions import ToolchainError
from hyperlane_fuel_deploy.toolchain import (
    Forc,
    format_call_arg,
    parse_call_output,
    parse_deploy_output,
)

NODE_URL = "http://127.0.0.1:4000/graphql"
CONTRACT_ID = "0x" + "ab" * 32
TX_ID = "cd" * 32


@pytest.fixture
def recorded_runs(monkeypatch) -> List[Dict[str, Any]]:
    """Replace subprocess.run with a recorder returning canned stdout."""
    runs: List[Dict[str, Any]] = []

    def fake_run(command, **kwargs):
        runs.append({"command": command, **kwargs})
        return subprocess.CompletedProcess(command, 0, stdout=f"result: 7\ntx id: 0x{TX_ID}\n", stderr="")

    monkeypatch.setattr(toolchain.subprocess, "run", fake_run)
    return runs


class TestFormatCallArg:
    """Test rendering of call arguments."""

    def test_integers(self):
        assert format_call_arg(420) == "420"

    def test_bytes_as_hex(self):
        assert format_call_arg(b"\x69\x00") == "0x6900"

    def test_vectors(self):
        assert format_call_arg([1, 2, 3, 5, 6]) == "[1, 2, 3, 5, 6]"

    def test_booleans(self):
        assert format_call_arg(True) == "true"

    def test_strings_pass_through(self):
        assert format_call_arg(CONTRACT_ID) == CONTRACT_ID


class TestParseOutput:
    """Test parsing of forc stdout."""

    def test_call_output_with_value_and_transaction(self):
        output = f"Calling dispatch...\ntransaction id: 0x{TX_ID}\nresult: (0x01, 0)\n"
        assert parse_call_output(output) == ("(0x01, 0)", f"0x{TX_ID}")

    def test_call_output_without_transaction(self):
        assert parse_call_output("result: 42") == ("42", None)

    def test_call_output_without_anything(self):
        assert parse_call_output("") == (None, None)

    def test_deploy_output(self):
        output = f"Contract hyperlane-mailbox Deployed!\n\nContract ID: {CONTRACT_ID.upper()[2:]}\n"
        assert parse_deploy_output(output) == CONTRACT_ID

    def test_deploy_output_without_id(self):
        assert parse_deploy_output("Compiling...\nFinished") is None


class TestForcRun:
    """Test error handling of Forc.run."""

    def test_returns_stdout(self, recorded_runs):
        output = Forc(NODE_URL).run(["--version"])

        assert output.startswith("result:")
        assert recorded_runs[0]["command"] == ["forc", "--version"]
        assert recorded_runs[0]["check"] is True
        assert recorded_runs[0]["capture_output"] is True

    def test_missing_binary(self, monkeypatch):
        def fake_run(command, **kwargs):
            raise FileNotFoundError(command[0])

        monkeypatch.setattr(toolchain.subprocess, "run", fake_run)

        with pytest.raises(ToolchainError) as exc_info:
            Forc(NODE_URL, binary="no-such-forc").run(["deploy"])

        assert "no-such-forc" in str(exc_info.value)

    def test_non_zero_exit_carries_stderr(self, monkeypatch):
        def fake_run(command, **kwargs):
            raise subprocess.CalledProcessError(1, command, output="", stderr="Revert(42)\n")

        monkeypatch.setattr(toolchain.subprocess, "run", fake_run)

        with pytest.raises(ToolchainError) as exc_info:
            Forc(NODE_URL).run(["call"])

        assert "Revert(42)" in str(exc_info.value)
        assert "forc call" in str(exc_info.value)

    def test_non_zero_exit_does_not_leak_signing_key(self, monkeypatch, caplog):
        """The failed command line holds the key, so it must not travel with the error."""
        signing_key = "0x" + "5a" * 32

        def fake_run(command, **kwargs):
            raise subprocess.CalledProcessError(1, command, output="", stderr="Revert(42)\n")

        monkeypatch.setattr(toolchain.subprocess, "run", fake_run)

        with pytest.raises(ToolchainError) as exc_info:
            Forc(NODE_URL).call(CONTRACT_ID, Path("/abi.json"), "dispatch", [], signing_key=signing_key)

        error = exc_info.value
        assert signing_key not in str(error)
        assert error.__cause__ is None
        assert error.__suppress_context__

        caplog.set_level(logging.DEBUG)
        logging.getLogger("test").debug("Traceback:", exc_info=(type(error), error, error.__traceback__))
        assert signing_key not in caplog.text


class TestForcCommands:
    """Test command lines built for deploy and call."""

    def test_deploy_passes_salt_key_and_node(self, recorded_runs):
        Forc(NODE_URL).deploy(
            Path("/contracts/hyperlane-mailbox"),
            salt="0x" + "00" * 32,
            signing_key="0x" + "11" * 32,
            build_profile="debug",
        )

        command = recorded_runs[0]["command"]
        assert command[:2] == ["forc", "deploy"]
        assert "--path=/contracts/hyperlane-mailbox" in command
        assert f"--node-url={NODE_URL}" in command
        assert "--salt=0x" + "00" * 32 in command
        assert "--signing-key=0x" + "11" * 32 in command
        assert "--build-profile=debug" in command

    def test_call_declares_callees_and_renders_args(self, recorded_runs):
        Forc(NODE_URL).call(
            CONTRACT_ID,
            Path("/abi.json"),
            "dispatch",
            [[1, 2, 3], 420],
            signing_key="0x" + "11" * 32,
            mode="live",
            contracts=["0x" + "ee" * 32],
        )

        command = recorded_runs[0]["command"]
        assert command[:2] == ["forc", "call"]
        assert "--mode=live" in command
        assert "--abi=/abi.json" in command
        assert "--contracts=0x" + "ee" * 32 in command
        assert command[-4:] == [CONTRACT_ID, "dispatch", "[1, 2, 3]", "420"]

    def test_simulate_mode_has_no_callees(self, recorded_runs):
        Forc(NODE_URL).call(
            CONTRACT_ID, Path("/abi.json"), "latest_checkpoint", [], "0x" + "11" * 32, mode="simulate"
        )

        command = recorded_runs[0]["command"]
        assert "--mode=simulate" in command
        assert not any(arg.startswith("--contracts") for arg in command)
        assert command[-2:] == [CONTRACT_ID, "latest_checkpoint"]
