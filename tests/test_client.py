"""Tests for the HTTP / file bill sources.  No network access."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from bill_tracker.client import BillSource, load_bills_file


def _response(payload=None, *, status_error: Exception | None = None, bad_json: bool = False):
    resp = MagicMock()
    if status_error is not None:
        resp.raise_for_status.side_effect = status_error
    if bad_json:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = payload
    return resp


class TestFetchBills:
    def test_data_envelope(self, raw_payload: dict) -> None:
        source = BillSource(base_url="http://api.test/")
        with patch.object(source._session, "get", return_value=_response(raw_payload)) as get:
            bills = source.fetch_bills()
        assert [b.bill_number for b in bills] == ["SB 7", "SB 9"]
        url = get.call_args.args[0]
        assert url == "http://api.test/api/bills"
        assert get.call_args.kwargs["timeout"] == source.timeout_seconds

    def test_legacy_envelope(self, raw_bill: dict) -> None:
        source = BillSource(base_url="http://api.test")
        with patch.object(source._session, "get", return_value=_response({"bills": [raw_bill]})):
            assert len(source.fetch_bills()) == 1

    def test_connection_error_is_empty(self, caplog) -> None:
        source = BillSource(base_url="http://api.test")
        with patch.object(
            source._session, "get", side_effect=requests.ConnectionError("refused")
        ):
            assert source.fetch_bills() == []
        assert "Failed to fetch" in caplog.text

    def test_http_error_is_empty(self) -> None:
        source = BillSource(base_url="http://api.test")
        resp = _response(status_error=requests.HTTPError("503 Server Error"))
        with patch.object(source._session, "get", return_value=resp):
            assert source.fetch_bills() == []

    def test_invalid_json_is_empty(self) -> None:
        source = BillSource(base_url="http://api.test")
        with patch.object(source._session, "get", return_value=_response(bad_json=True)):
            assert source.fetch_bills() == []

    def test_retry_adapter_mounted(self) -> None:
        source = BillSource(base_url="http://api.test", max_retries=5)
        adapter = source._session.get_adapter("http://api.test/api/bills")
        assert adapter.max_retries.total == 5
        assert 503 in adapter.max_retries.status_forcelist


class TestFetchBill:
    def test_unwraps_data(self, raw_bill: dict) -> None:
        source = BillSource(base_url="http://api.test")
        with patch.object(
            source._session, "get", return_value=_response({"success": True, "data": raw_bill})
        ) as get:
            bill = source.fetch_bill("tx-sb-7")
        assert bill.bill_number == "SB 7"
        assert get.call_args.args[0] == "http://api.test/api/bills/tx-sb-7"

    def test_quotes_id(self) -> None:
        source = BillSource(base_url="http://api.test")
        with patch.object(source._session, "get", return_value=_response({})) as get:
            source.fetch_bill("SB 7")
        assert get.call_args.args[0] == "http://api.test/api/bills/SB%207"

    def test_failure_is_none(self) -> None:
        source = BillSource(base_url="http://api.test")
        with patch.object(source._session, "get", side_effect=requests.Timeout("slow")):
            assert source.fetch_bill("tx-sb-7") is None


class TestLoadBillsFile:
    def test_reads_envelope(self, tmp_path: Path, raw_payload: dict) -> None:
        path = tmp_path / "bills.json"
        path.write_text(json.dumps(raw_payload), encoding="utf-8")
        assert [b.bill_number for b in load_bills_file(path)] == ["SB 7", "SB 9"]

    def test_missing_file(self, tmp_path: Path) -> None:
        assert load_bills_file(tmp_path / "missing.json") == []

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bills.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_bills_file(str(path)) == []
