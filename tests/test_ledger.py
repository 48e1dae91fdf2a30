import random
from decimal import Decimal
from conftest import D1, D2, D3, make_bet, make_fund, make_withdrawal
from syndicate_ledger.domain.ledger import LedgerBuilder, build_ledger
from syndicate_ledger.domain.scope import ALL_PARTNERS
from syndicate_ledger.domain.stats import aggregate_stats

def _ascending(entries):
    return list(reversed(entries))

def test_deposit_stake_return_same_day_sequence(partners):
    bets = [make_bet("A", "P1", D2, 20000, "2.0", "WON")]
    funds = [make_fund("F1", "P1", D1, 100000)]
    entries = build_ledger(bets, funds, [], ALL_PARTNERS, partners)

    asc = _ascending(entries)
    assert [(e.category, e.amount, e.running_balance) for e in asc] == [
        ("DEPOSIT", 100000, 100000),
        ("BET_STAKE", -20000, 80000),
        ("BET_RETURN", 40000, 120000),
    ]
    assert entries[0].running_balance == 120000
    assert aggregate_stats(bets, partners, ALL_PARTNERS, funds, []).current_balance == 120000

def test_full_book_order_and_balances(book):
    entries = build_ledger(book["bets"], book["funds"], book["withdrawals"], ALL_PARTNERS, book["partners"])
    asc = _ascending(entries)
    assert [e.entry_id for e in asc] == [
        "F1", "F2", "F3",
        "B1-STAKE", "B2-STAKE", "B3-STAKE", "B1-RETURN", "B2-RETURN", "B3-RETURN",
        "B4-STAKE", "B5-STAKE", "B6-STAKE", "B4-RETURN", "B6-RETURN",
        "W1",
    ]
    assert [e.running_balance for e in asc] == [
        100000, 150000, 180000,
        160000, 150000, 140000, 180000, 180000, 188000,
        183000, 176000, 172000, 177000, 183000,
        178000,
    ]

def test_lost_bet_still_gets_zero_return_marker(partners):
    entries = build_ledger([make_bet("L1", status="LOST")], [], [], ALL_PARTNERS, partners)
    returns = [e for e in entries if e.category == "BET_RETURN"]
    assert len(returns) == 1
    assert returns[0].amount == 0
    assert returns[0].record_id == "L1"

def test_pending_bet_has_stake_but_no_return(partners):
    entries = build_ledger([make_bet("P", status="PENDING")], [], [], ALL_PARTNERS, partners)
    assert [e.category for e in entries] == ["BET_STAKE"]
    assert entries[0].running_balance == -10000

def test_only_paid_withdrawals_appear(book):
    entries = build_ledger(book["bets"], book["funds"], book["withdrawals"], "P2", book["partners"])
    assert [e.record_id for e in entries if e.category == "WITHDRAWAL"] == []
    assert all(e.partner_name == "Bruno" for e in entries)

def test_cross_consistency_with_stats_for_every_scope(book):
    for scope in [ALL_PARTNERS, "P1", "P2"]:
        entries = build_ledger(book["bets"], book["funds"], book["withdrawals"], scope, book["partners"])
        stats = aggregate_stats(book["bets"], book["partners"], scope, book["funds"], book["withdrawals"])
        assert entries[0].running_balance == stats.current_balance

def test_cross_consistency_with_fractional_returns(partners):
    bets = [
        make_bet("X1", "P1", D2, 15555, "1.73", "WON"),
        make_bet("X2", "P1", D2, 333, "1.5", "WON"),
        make_bet("X3", "P2", D3, 1001, "2.05", "WON"),
    ]
    funds = [make_fund("F1", "P1", D1, 50000), make_fund("F2", "P2", D1, 50000)]
    entries = build_ledger(bets, funds, [], ALL_PARTNERS, partners)
    stats = aggregate_stats(bets, partners, ALL_PARTNERS, funds, [])
    assert entries[0].running_balance == stats.current_balance
    assert all(e.running_balance == e.running_balance.to_integral_value() for e in entries)

def test_shuffled_input_gives_identical_ledger(book):
    expected = build_ledger(book["bets"], book["funds"], book["withdrawals"], ALL_PARTNERS, book["partners"])
    rng = random.Random(42)
    for _ in range(5):
        bets, funds, withdrawals = list(book["bets"]), list(book["funds"]), list(book["withdrawals"])
        rng.shuffle(bets); rng.shuffle(funds); rng.shuffle(withdrawals)
        assert build_ledger(bets, funds, withdrawals, ALL_PARTNERS, book["partners"]) == expected

def test_build_is_idempotent(book):
    args = (book["bets"], book["funds"], book["withdrawals"], ALL_PARTNERS, book["partners"])
    first = [e.model_dump_json() for e in build_ledger(*args)]
    assert first == [e.model_dump_json() for e in build_ledger(*args)]

def test_partner_labels(partners):
    bets = [make_bet("G1", partner_id="GHOST", status="VOID")]
    funds = [make_fund("F0", None, D1, 1000)]
    entries = build_ledger(bets, funds, [], ALL_PARTNERS, partners)
    by_id = {e.entry_id: e for e in entries}
    assert by_id["F0"].partner_name == "General" and by_id["F0"].partner_known
    assert by_id["G1-STAKE"].partner_name == "Unknown"
    assert not by_id["G1-RETURN"].partner_known

    # 未知合伙人的注单进不了任何单人视角
    assert build_ledger(bets, funds, [], "P1", partners) == []

def test_withdrawal_sorts_after_bets_on_the_same_day(partners):
    bets = [make_bet("B1", "P1", D3, 1000, "2.0", "WON")]
    withdrawals = [make_withdrawal("W0", "P1", D3, 500, "PAID")]
    funds = [make_fund("F9", "P1", D3, 2000)]
    asc = _ascending(build_ledger(bets, funds, withdrawals, "P1", partners))
    assert [e.category for e in asc] == ["DEPOSIT", "BET_STAKE", "BET_RETURN", "WITHDRAWAL"]
    assert asc[-1].running_balance == 2500

def test_balance_history_is_oldest_first_and_thinned(partners):
    bets = [make_bet(f"B{i:03d}", "P1", D2, 100, "2.0", "LOST") for i in range(60)]
    entries = build_ledger(bets, [make_fund("F1", "P1", D1, 100000)], [], ALL_PARTNERS, partners)
    assert len(entries) == 121

    points = LedgerBuilder.balance_history(entries, max_points=50)
    assert len(points) == 41  # ceil(121 / 50) = 3
    assert points[0].balance == 100000
    assert points[0].date == D1

    full = LedgerBuilder.balance_history(entries, max_points=500)
    assert [p.balance for p in full] == [e.running_balance for e in reversed(entries)]
    assert full[-1].balance == Decimal(100000 - 60 * 100)

def test_paid_withdrawal_for_unknown_partner(partners):
    funds = [make_fund("F1", "P1", D1, 10000)]
    withdrawals = [make_withdrawal("WX", "GHOST", D2, 3000, "PAID")]

    entries = build_ledger([], funds, withdrawals, ALL_PARTNERS, partners)
    assert entries[0].entry_id == "WX"
    assert entries[0].partner_name == "Unknown" and not entries[0].partner_known
    assert entries[0].running_balance == 7000
    assert aggregate_stats([], partners, ALL_PARTNERS, funds, withdrawals).total_withdrawn == 3000

    for p in partners:
        assert all(e.entry_id != "WX" for e in build_ledger([], funds, withdrawals, p.partner_id, partners))
        assert aggregate_stats([], partners, p.partner_id, funds, withdrawals).total_withdrawn == 0
