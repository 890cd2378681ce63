import pytest

from palletchain.blockchain.core.balances import BalancesPallet, Transfer
from palletchain.protocol.config.params import RuntimeConfig
from palletchain.protocol.types.common import InsufficientFunds, Overflow, UnknownCall
from palletchain.protocol.types.numeric import U32, U128


@pytest.fixture
def balances():
    return BalancesPallet(RuntimeConfig(runtime_id="test", balance=U32))


def test_init_balances(balances):
    assert balances.balance("alice") == 0
    balances.set_balance("alice", 100)
    assert balances.balance("alice") == 100
    assert balances.balance("bob") == 0

    balances.transfer("alice", "bob", 100)
    assert balances.balance("alice") == 0
    assert balances.balance("bob") == 100


def test_set_balance_overwrites(balances):
    balances.set_balance("alice", 100)
    balances.set_balance("alice", 7)
    assert balances.balance("alice") == 7


def test_set_balance_rejects_values_outside_type(balances):
    with pytest.raises(Overflow):
        balances.set_balance("alice", U32.max_value + 1)
    with pytest.raises(Overflow):
        balances.set_balance("alice", -1)
    assert balances.accounts() == {}


def test_transfer_conserves_total(balances):
    balances.set_balance("alice", 100)
    balances.set_balance("bob", 20)
    before = balances.balance("alice") + balances.balance("bob")

    balances.transfer("alice", "bob", 30)

    assert balances.balance("alice") == 70
    assert balances.balance("bob") == 50
    assert balances.balance("alice") + balances.balance("bob") == before
    assert balances.total_issuance() == 120


def test_insufficient_funds_leaves_balances(balances):
    balances.set_balance("alice", 10)
    balances.set_balance("bob", 5)

    with pytest.raises(InsufficientFunds, match="Insufficient balance"):
        balances.transfer("alice", "bob", 11)

    assert balances.balance("alice") == 10
    assert balances.balance("bob") == 5


def test_transfer_from_unknown_account(balances):
    with pytest.raises(InsufficientFunds):
        balances.transfer("nobody", "bob", 1)
    assert balances.accounts() == {}


def test_overflow_leaves_balances(balances):
    balances.set_balance("alice", 10)
    balances.set_balance("bob", U32.max_value - 5)

    with pytest.raises(Overflow) as exc:
        balances.transfer("alice", "bob", 6)

    assert exc.value.to_dict()["kind"] == "OVERFLOW"
    assert balances.balance("alice") == 10
    assert balances.balance("bob") == U32.max_value - 5

    # Exactly reaching the maximum is fine
    balances.transfer("alice", "bob", 5)
    assert balances.balance("bob") == U32.max_value


def test_zero_transfer_creates_recipient_entry(balances):
    balances.set_balance("alice", 10)
    balances.transfer("alice", "bob", 0)
    assert balances.accounts() == {"alice": 10, "bob": 0}


def test_self_transfer_is_noop(balances):
    balances.set_balance("alice", 50)
    balances.transfer("alice", "alice", 50)
    assert balances.balance("alice") == 50
    assert balances.total_issuance() == 50

    with pytest.raises(InsufficientFunds):
        balances.transfer("alice", "alice", 51)
    assert balances.balance("alice") == 50


def test_self_transfer_at_max_does_not_overflow():
    balances = BalancesPallet(RuntimeConfig(runtime_id="test", balance=U128))
    balances.set_balance("alice", U128.max_value)
    balances.transfer("alice", "alice", U128.max_value)
    assert balances.balance("alice") == U128.max_value


def test_dispatch_transfer(balances):
    balances.set_balance("alice", 100)
    balances.dispatch("alice", Transfer(to="bob", amount=40))
    assert balances.balance("alice") == 60
    assert balances.balance("bob") == 40


def test_dispatch_propagates_failure(balances):
    with pytest.raises(InsufficientFunds):
        balances.dispatch("alice", Transfer(to="bob", amount=1))


def test_dispatch_unknown_call(balances):
    with pytest.raises(UnknownCall):
        balances.dispatch("alice", object())


def test_transfer_call_rejects_negative_amount():
    from pydantic import ValidationError
    with pytest.raises(ValidationError):
        Transfer(to="bob", amount=-1)


def test_transfer_rejects_amounts_outside_balance_type(balances):
    balances.set_balance("alice", 100)
    balances.set_balance("bob", 10)

    with pytest.raises(Overflow, match="not a valid"):
        balances.transfer("alice", "bob", -5)
    with pytest.raises(Overflow, match="not a valid"):
        balances.transfer("alice", "bob", U32.max_value + 1)

    assert balances.balance("alice") == 100
    assert balances.balance("bob") == 10
    assert balances.total_issuance() == 110
