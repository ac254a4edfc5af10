"""Tests for the per-chaincode operation registry."""

import pytest

from chaincore.framework.registry import RESERVED_NAMES, OperationRegistry


def transfer(stub, tx_helper):
    """Move an asset.

    Longer description.
    """


def undocumented(stub, tx_helper):
    pass


class TestOperationRegistry:
    def test_register_and_resolve(self):
        registry = OperationRegistry()
        assert registry.register("transfer", transfer) is transfer
        assert registry.resolve("transfer") is transfer
        assert "transfer" in registry
        assert len(registry) == 1

    def test_resolve_unknown_returns_none(self):
        assert OperationRegistry().resolve("missing") is None

    def test_duplicate_rejected(self):
        registry = OperationRegistry()
        registry.register("transfer", transfer)
        with pytest.raises(ValueError, match="already registered"):
            registry.register("transfer", undocumented)

    @pytest.mark.parametrize("name", sorted(RESERVED_NAMES))
    def test_reserved_names_rejected(self, name):
        with pytest.raises(ValueError, match="reserved"):
            OperationRegistry().register(name, transfer)

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_invalid_names_rejected(self, name):
        with pytest.raises(ValueError):
            OperationRegistry().register(name, transfer)  # type: ignore[arg-type]

    def test_non_callable_rejected(self):
        with pytest.raises(ValueError, match="not callable"):
            OperationRegistry().register("x", "not a function")  # type: ignore[arg-type]

    def test_names_sorted(self):
        registry = OperationRegistry()
        registry.register("b", transfer)
        registry.register("a", undocumented)
        assert registry.names() == ["a", "b"]

    def test_describe_first_doc_line(self):
        registry = OperationRegistry()
        registry.register("transfer", transfer)
        registry.register("other", undocumented)
        assert registry.describe() == {"other": "", "transfer": "Move an asset."}
