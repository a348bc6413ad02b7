"""
Tests for ContractDispatcher.
"""

import json

import pytest

from ledgerkv.contract.dispatcher import ContractDispatcher
from ledgerkv.contract.transaction import Intent, TransactionInfo, transaction
from ledgerkv.models.exceptions import (
    DecodingError,
    IntentError,
    InvalidArgumentsError,
    NotFoundError,
    UnknownTransactionError,
)


class TestDiscovery:
    """Tests for transaction registration."""

    def test_registered_transactions(self, dispatcher):
        """Test that every contract operation is registered with its intent."""
        assert dispatcher.transactions() == [
            TransactionInfo("delete", Intent.SUBMIT, "delete"),
            TransactionInfo("get", Intent.EVALUATE, "get"),
            TransactionInfo("getAll", Intent.EVALUATE, "get_all"),
            TransactionInfo("instantiate", Intent.SUBMIT, "instantiate"),
            TransactionInfo("keyExists", Intent.EVALUATE, "key_exists"),
            TransactionInfo("put", Intent.SUBMIT, "put"),
        ]

    def test_metadata(self, dispatcher):
        """Test the contract metadata document."""
        metadata = dispatcher.metadata()

        assert metadata["name"] == "ledgerkv.contract"
        assert metadata["version"] == "0.1.0"
        assert {"name": "getAll", "intent": "evaluate"} in metadata["transactions"]

    def test_duplicate_names_rejected(self, ledger):
        """Test that two methods cannot share a transaction name."""

        class Clashing:
            @transaction(name="op")
            def first(self, ctx):
                pass

            @transaction(name="op")
            def second(self, ctx):
                pass

        with pytest.raises(ValueError, match="Duplicate"):
            ContractDispatcher(Clashing(), ledger)

    def test_undecorated_methods_ignored(self, ledger):
        """Test that plain methods are not exposed."""

        class Partial:
            @transaction(intent=Intent.EVALUATE)
            def visible(self, ctx):
                return "yes"

            def hidden(self, ctx):
                return "no"

        dispatcher = ContractDispatcher(Partial(), ledger)

        assert [info.name for info in dispatcher.transactions()] == ["visible"]
        with pytest.raises(UnknownTransactionError):
            dispatcher.evaluate("hidden")


class TestInvoke:
    """Tests for submit and evaluate."""

    def test_submit_and_evaluate(self, dispatcher, ledger):
        """Test a full put/get cycle through the dispatcher."""
        assert dispatcher.submit("put", '{"k": "0a0b"}') == ""
        assert dispatcher.evaluate("get", "k") == "0a0b"
        assert ledger.get("k") == b"\x0a\x0b"

    def test_bool_serialization(self, dispatcher):
        """Test that booleans serialize as true/false."""
        assert dispatcher.evaluate("keyExists", "k") == "false"

        dispatcher.submit("put", '{"k": "01"}')
        assert dispatcher.evaluate("keyExists", "k") == "true"

    def test_get_all(self, dispatcher, sample_batch):
        """Test getAll through the dispatcher."""
        dispatcher.submit("put", json.dumps(sample_batch))

        assert json.loads(dispatcher.evaluate("getAll")) == sample_batch

    def test_submit_query(self, dispatcher):
        """Test that evaluate-intent transactions may also be submitted."""
        assert dispatcher.submit("keyExists", "k") == "false"

    def test_evaluate_submit_transaction(self, dispatcher, ledger):
        """Test that evaluate refuses transactions that write."""
        with pytest.raises(IntentError):
            dispatcher.evaluate("put", '{"k": "01"}')

        assert len(ledger) == 0

    def test_unknown_transaction(self, dispatcher):
        """Test invoking a name that is not registered."""
        with pytest.raises(UnknownTransactionError) as exc_info:
            dispatcher.submit("truncate")

        assert exc_info.value.code == "UNKNOWN_TRANSACTION"

    @pytest.mark.parametrize(
        "name,args",
        [("get", ()), ("get", ("a", "b")), ("getAll", ("x",)), ("instantiate", ("x",))],
    )
    def test_wrong_arity(self, dispatcher, name, args):
        """Test that argument count is checked against the signature."""
        with pytest.raises(InvalidArgumentsError, match="expects"):
            dispatcher.submit(name, *args)

    def test_non_string_argument(self, dispatcher):
        """Test that arguments must be strings."""
        with pytest.raises(InvalidArgumentsError, match="strings"):
            dispatcher.submit("get", 42)

    def test_contract_errors_propagate(self, dispatcher):
        """Test that contract errors reach the caller unchanged."""
        with pytest.raises(NotFoundError):
            dispatcher.evaluate("get", "missing")
        with pytest.raises(NotFoundError):
            dispatcher.submit("delete", "missing")
        with pytest.raises(DecodingError):
            dispatcher.submit("put", '{"a1": "zz"}')

    def test_fresh_context_per_call(self, ledger):
        """Test that every invocation gets its own transaction id."""

        class Recorder:
            def __init__(self):
                self.tx_ids = []

            @transaction()
            def record(self, ctx):
                self.tx_ids.append(ctx.tx_id)
                assert ctx.ledger is ledger

        recorder = Recorder()
        dispatcher = ContractDispatcher(recorder, ledger)
        dispatcher.submit("record")
        dispatcher.submit("record")

        assert len(set(recorder.tx_ids)) == 2


class TestSerialize:
    """Tests for result serialization."""

    def test_serialize(self):
        """Test the supported result types."""
        assert ContractDispatcher.serialize(None) == ""
        assert ContractDispatcher.serialize(True) == "true"
        assert ContractDispatcher.serialize(False) == "false"
        assert ContractDispatcher.serialize("abc") == "abc"

    def test_serialize_unsupported(self):
        """Test that other result types are rejected."""
        with pytest.raises(TypeError):
            ContractDispatcher.serialize(3.5)
