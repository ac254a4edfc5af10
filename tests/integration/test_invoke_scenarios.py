"""End-to-end invocation scenarios against a local environment."""

import json

import pytest

from chaincore import Chaincode, ChaincodeError, ErrorKind, LocalEnvironment
from chaincore.framework import parse_parameters


@pytest.fixture
def cc():
    chaincode = Chaincode("Ledger")

    @chaincode.operation()
    async def explode(stub, tx_helper):
        raise Exception("boom")

    return chaincode


@pytest.mark.asyncio
async def test_unknown_operation(cc):
    response = await cc.invoke(LocalEnvironment(fcn="doesNotExist"))

    error = ChaincodeError.from_serialized(response.message)
    assert error.kind is ErrorKind.UNKNOWN_FUNCTION
    assert error.data["fn"] == "doesNotExist"


@pytest.mark.asyncio
async def test_ping(cc):
    response = await cc.invoke(LocalEnvironment(fcn="ping"))
    assert response.ok
    assert json.loads(response.payload.decode("utf-8")) == "pong"


def test_parse_parameters():
    assert parse_parameters(["123", '"abc"', "not-json"]) == [123, "abc", "not-json"]


@pytest.mark.asyncio
async def test_migrations_without_path(cc):
    assert cc.migrating is False
    response = await cc.invoke(LocalEnvironment(fcn="runMigrations"))
    assert cc.migrating is False

    error = ChaincodeError.from_serialized(response.message)
    assert error.kind is ErrorKind.MIGRATION_PATH_NOT_DEFINED


@pytest.mark.asyncio
async def test_untyped_error(cc):
    response = await cc.invoke(LocalEnvironment(fcn="explode"))

    error = ChaincodeError.from_serialized(response.message)
    assert error.kind is ErrorKind.UNKNOWN_ERROR
    assert error.data["message"] == "boom"
