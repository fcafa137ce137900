"""Tests for QuoteBoard — symbol rebuilds, sequencing and publishing."""

import threading

from conftest import quote_line

from ministock.board import QuoteBoard
from ministock.models.quote import SENTINEL
from ministock.parser import parse_response


class TestSetSymbols:
    def test_trims_and_drops_empties(self):
        board = QuoteBoard()
        records = board.set_symbols(" sh600000, ,sz000001 ,, hk00700")
        assert [r.symbol for r in records] == ["sh600000", "sz000001", "hk00700"]
        assert all(r.price_text == SENTINEL and r.change_text == SENTINEL for r in records)
        assert all(r.name == "" for r in records)

    def test_accepts_list(self):
        board = QuoteBoard(["sz000001", "  ", "sh600000"])
        assert board.symbols == ["sz000001", "sh600000"]

    def test_duplicates_kept(self):
        board = QuoteBoard("sh600000,sh600000")
        assert len(board) == 2

    def test_rebuild_discards_old_records(self, board, sample_response):
        board.apply(parse_response(sample_response))
        old_ids = {r.id for r in board.records}
        board.set_symbols("sh600000")
        assert board.records[0].price_text == SENTINEL
        assert board.records[0].id not in old_ids

    def test_empty(self):
        board = QuoteBoard("")
        assert board.records == ()
        assert board.symbols == []


class TestApply:
    def test_updates_matched_only(self, board):
        board.apply(parse_response(quote_line("sz000001", "平安银行", "11.00", "10.00")))
        first, second = board.records
        assert first.price_text == SENTINEL
        assert second.price_text == "11.00"
        assert second.change_text == "10.00%"

    def test_stale_sequence_dropped(self, board):
        assert board.apply(parse_response(quote_line("sh600000", price="10.80")), sequence=5)
        assert not board.apply(parse_response(quote_line("sh600000", price="10.10")), sequence=3)
        assert board.records[0].price_text == "10.80"

    def test_unsequenced_always_applies(self, board):
        board.apply(parse_response(quote_line("sh600000", price="10.80")), sequence=5)
        assert board.apply(parse_response(quote_line("sh600000", price="10.10")))
        assert board.records[0].price_text == "10.10"

    def test_records_is_snapshot(self, board, sample_response):
        before = board.records
        board.apply(parse_response(sample_response))
        assert before[0].price_text == SENTINEL
        assert board.records[0].price_text == "10.50"


class TestSubscribe:
    def test_publishes_on_apply_and_rebuild(self, board, sample_response):
        seen = []
        board.subscribe(seen.append)
        board.apply(parse_response(sample_response))
        board.set_symbols("hk00700")
        assert len(seen) == 2
        assert seen[0][0].price_text == "10.50"
        assert [r.symbol for r in seen[1]] == ["hk00700"]

    def test_unsubscribe(self, board, sample_response):
        seen = []
        unsubscribe = board.subscribe(seen.append)
        unsubscribe()
        board.apply(parse_response(sample_response))
        assert seen == []

    def test_failing_listener_does_not_block_others(self, board, sample_response):
        seen = []

        def broken(records):
            raise RuntimeError("listener bug")

        board.subscribe(broken)
        board.subscribe(seen.append)
        assert board.apply(parse_response(sample_response))
        assert len(seen) == 1

    def test_concurrent_applies_keep_length(self, board):
        texts = [quote_line("sh600000", price=f"10.{i:02d}") for i in range(20)]
        threads = [
            threading.Thread(target=board.apply, args=(parse_response(t), i))
            for i, t in enumerate(texts)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(board) == 2
        assert board.records[0].price_text.startswith("10.")
