"""
LogEvent / ApplyResult value types: argument validation, canonical ordering,
JSON-friendly round trips.
"""
import pytest

from execution.errors import Revert, error_to_result_fields
from execution.types.events import LogEvent
from execution.types.result import ApplyResult
from execution.types.status import TxStatus

ADDR = b"\x01" * 20


def test_args_are_sorted_and_typed() -> None:
    ev = LogEvent(ADDR, "BidPlaced", {"bidder": bytearray(b"\x02" * 20), "amount": 5, "ok": True})
    assert [k for k, _ in ev.args] == ["amount", "bidder", "ok"]
    assert ev.get("bidder") == b"\x02" * 20
    assert ev.get("missing", 0) == 0


@pytest.mark.parametrize(
    "args,exc",
    [
        ({"amount": -1}, ValueError),
        ({"amount": 1 << 256}, ValueError),
        ({"f": 1.5}, TypeError),
        ({"": 1}, TypeError),
    ],
)
def test_bad_args_rejected(args, exc) -> None:
    with pytest.raises(exc):
        LogEvent(ADDR, "X", args)


def test_bad_name_or_address_rejected() -> None:
    with pytest.raises(ValueError):
        LogEvent(b"", "X")
    with pytest.raises(ValueError):
        LogEvent(ADDR, "")


def test_to_dict_roundtrip() -> None:
    ev = LogEvent(ADDR, "Withdrawn", {"drop_id": 1, "bidder": b"\x09" * 20, "note": None})
    d = ev.to_dict()
    assert d["address"] == "0x" + "01" * 20
    assert d["args"]["bidder"] == "0x" + "09" * 20
    assert LogEvent.from_dict(d) == ev


def test_apply_result_surface() -> None:
    logs = [LogEvent(ADDR, "A"), LogEvent(ADDR, "B"), LogEvent(ADDR, "A")]
    ok = ApplyResult(status=TxStatus.SUCCESS, return_value=3, logs=logs, block_height=4)
    assert ok.is_success and ok.reason is None
    assert len(ok.events("A")) == 2
    assert ok.to_dict()["blockHeight"] == 4

    err = Revert("nope", reason="T:NOPE")
    failed = ApplyResult(status=TxStatus.REVERT, error=err.to_dict())
    assert not failed.is_success
    assert failed.reason == "T:NOPE"
    assert error_to_result_fields(err)["status"] == "REVERT"

    with pytest.raises(TypeError):
        ApplyResult(status=TxStatus.SUCCESS, logs=[{"name": "A"}])


def test_status_parsing() -> None:
    assert TxStatus.from_str("success") is TxStatus.SUCCESS
    assert TxStatus.from_str("bogus", default=TxStatus.ERROR) is TxStatus.ERROR
