import signal
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from sigtalk.client import Client, main
from sigtalk.protocol import TransferTimeout, bits_to_byte, encode_message

SERVER_PID = 4242
USR1 = SimpleNamespace(si_signo=signal.SIGUSR1, si_pid=SERVER_PID)
USR2 = SimpleNamespace(si_signo=signal.SIGUSR2, si_pid=SERVER_PID)


def _sent_signals(kill_mock):
    return [c.args[1] for c in kill_mock.call_args_list if c.args[1] != 0]


def _decode(signals):
    bits = [1 if s == signal.SIGUSR1 else 0 for s in signals]
    return bytes(bits_to_byte(bits[i:i + 8]) for i in range(0, len(bits), 8))


@patch("signal.sigtimedwait", return_value=USR1)
@patch("os.kill")
def test_send_byte_all_ones(kill, _wait):
    Client(SERVER_PID).send_byte(0xFF)
    assert _sent_signals(kill) == [signal.SIGUSR1] * 8
    assert all(c.args[0] == SERVER_PID for c in kill.call_args_list)


@patch("signal.sigtimedwait", return_value=USR1)
@patch("os.kill")
def test_send_byte_all_zeros(kill, _wait):
    Client(SERVER_PID).send_byte(0)
    signals = _sent_signals(kill)
    assert signals == [signal.SIGUSR2] * 8
    assert _decode(signals) == b"\x00"


@patch("signal.sigtimedwait", return_value=USR1)
@patch("os.kill")
def test_send_byte_most_significant_first(kill, wait):
    Client(SERVER_PID).send_byte(0x80)
    signals = _sent_signals(kill)
    assert signals == [signal.SIGUSR1] + [signal.SIGUSR2] * 7
    assert _decode(signals) == b"\x80"
    assert wait.call_count == 8


@patch("signal.sigtimedwait", return_value=None)
@patch("os.kill")
def test_send_byte_times_out(_kill, _wait):
    with pytest.raises(TransferTimeout):
        Client(SERVER_PID, timeout=0.01).send_byte(1)


@patch("signal.sigtimedwait", return_value=None)
@patch("os.kill")
def test_transfer_timeout_is_timeout_error(_kill, _wait):
    with pytest.raises(TimeoutError):
        Client(SERVER_PID, timeout=0.01).send_byte(1)


@patch("signal.sigtimedwait", return_value=USR1)
@patch("os.kill", side_effect=ProcessLookupError)
def test_send_byte_failing_kill(_kill, _wait):
    with pytest.raises(ConnectionError):
        Client(SERVER_PID).send_byte(1)


@patch("signal.sigtimedwait", return_value=USR1)
@patch("os.kill")
def test_send_round_trip(kill, _wait):
    Client(SERVER_PID).send(b"ok\x00")
    assert _decode(_sent_signals(kill)) == b"ok\x00"


def test_send_rejects_text():
    with pytest.raises(TypeError):
        Client(SERVER_PID).send("text")


@patch("signal.sigtimedwait", return_value=USR1)
@patch("os.kill")
def test_send_message_wire_form(kill, _wait):
    length = Client(SERVER_PID).send_message("hi")
    assert length == 2
    assert kill.call_args_list[0].args == (SERVER_PID, 0)
    assert _decode(_sent_signals(kill)) == encode_message("hi")


@patch("os.kill", side_effect=ProcessLookupError)
def test_send_message_invalid_pid(_kill):
    with pytest.raises(ProcessLookupError):
        Client(SERVER_PID).send_message("hi")


@patch("os.kill")
def test_send_message_confirmed(kill):
    bits = len(encode_message("hi")) * 8
    with patch("signal.sigtimedwait", side_effect=[USR1] * bits + [USR1, USR2]) as wait:
        Client(SERVER_PID, confirm=True).send_message("hi")
    assert wait.call_count == bits + 2


@patch("os.kill")
def test_send_message_confirmation_missing(_kill):
    bits = len(encode_message("hi")) * 8
    with patch("signal.sigtimedwait", side_effect=[USR1] * bits + [None]):
        with pytest.raises(TransferTimeout):
            Client(SERVER_PID, confirm=True).send_message("hi")


@pytest.mark.parametrize("pid", [0, -1])
def test_client_rejects_bad_pid(pid):
    with pytest.raises(ValueError):
        Client(pid)


def test_main_wrong_arguments(capsys):
    assert main(["123"]) == 1
    assert "Error: Wrong Format. Enter: [./client <PID> <string>]" in capsys.readouterr().out


def test_main_invalid_pid(capsys):
    assert main(["abc", "hi"]) == 1
    assert capsys.readouterr().out.endswith("Error: Invalid PID.\n")


@patch("signal.sigtimedwait", return_value=USR1)
@patch("os.kill")
def test_main_sends(kill, _wait, capsys):
    assert main([str(SERVER_PID), "hi"]) == 0
    assert capsys.readouterr().out == "Message length: 2\nFinish sending.\n"
    assert _decode(_sent_signals(kill)) == encode_message("hi")


@patch("os.kill")
def test_main_confirmed(_kill, capsys):
    bits = len(encode_message("hi")) * 8
    with patch("signal.sigtimedwait", side_effect=[USR1] * bits + [USR2]):
        assert main([str(SERVER_PID), "hi", "--confirm"]) == 0
    assert capsys.readouterr().out == (
        "[Message length: 2]\nFinish sending.\nServer already receive message.\n"
    )


@patch("signal.sigtimedwait", return_value=None)
@patch("os.kill")
def test_main_timeout(_kill, _wait, capsys):
    assert main([str(SERVER_PID), "hi"]) == 1
    assert capsys.readouterr().out.endswith("Time out: ack signal from server may missing.\n")