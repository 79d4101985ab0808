import pytest

from deployment.exceptions import DeploymentReverted, DeploymentTimeout
from deployment.params import Deployer, DeployerAddress
from deployment.registry import RegistryEntry
from deployment.types import DeploymentRecord, DeploymentUnit
from tests.conftest import DEPLOYER_ADDRESS, ERC20_ABI, contract_address

PREVIOUS_ADDRESS = contract_address(0xABC)


@pytest.fixture
def deployer(fake_chain, registry, local_network, funded_account):
    return Deployer(
        chain=fake_chain,
        registry=registry,
        network=local_network,
        account=funded_account,
        autosign=True,
    )


def _existing_entry(network: str, name: str) -> RegistryEntry:
    return RegistryEntry(
        network=network,
        name=name,
        address=PREVIOUS_ADDRESS,
        abi=ERC20_ABI,
        args=[],
        tx_hash="0x" + "ee" * 32,
        block_hash="0x" + "ff" * 32,
        block_number=1,
        deployer=DEPLOYER_ADDRESS,
    )


def test_deploy_counter_and_token(deployer, fake_chain, registry, capsys):
    capsys.readouterr()
    units = [
        DeploymentUnit(name="Counter", constructor_args=(), skip_if_already_deployed=False),
        DeploymentUnit(
            name="Token", constructor_args=("Test Token", "TST"), skip_if_already_deployed=False
        ),
    ]

    records = deployer.deploy_all(units)

    address_a, address_b = contract_address(1), contract_address(2)
    assert fake_chain.deployments == [("Counter", []), ("Token", ["Test Token", "TST"])]
    assert records == [
        DeploymentRecord(name="Counter", address=address_a),
        DeploymentRecord(name="Token", address=address_b),
    ]
    assert registry.get("localfhenix", "Counter").address == address_a
    token = registry.get("localfhenix", "Token")
    assert token.address == address_b
    assert token.args == ["Test Token", "TST"]

    output = capsys.readouterr().out.splitlines()
    assert output == [f"Counter contract: {address_a}", f"Token contract: {address_b}"]


def test_skip_if_already_deployed_reuses_record(deployer, fake_chain, registry, capsys):
    registry.record(_existing_entry("localfhenix", "Counter"))
    capsys.readouterr()

    records = deployer.deploy_all(
        [DeploymentUnit(name="Counter", skip_if_already_deployed=True)]
    )

    assert fake_chain.deployments == []
    assert records == [DeploymentRecord(name="Counter", address=PREVIOUS_ADDRESS)]
    assert registry.get("localfhenix", "Counter").tx_hash == "0x" + "ee" * 32
    assert capsys.readouterr().out.splitlines() == [f"Counter contract: {PREVIOUS_ADDRESS}"]


def test_skip_if_already_deployed_without_record_deploys(deployer, fake_chain, registry):
    registry.record(_existing_entry("helium", "Counter"))

    records = deployer.deploy_all(
        [DeploymentUnit(name="Counter", skip_if_already_deployed=True)]
    )

    assert fake_chain.deployments == [("Counter", [])]
    assert records[0].address == contract_address(1)
    # records on other networks are untouched
    assert registry.get("helium", "Counter").address == PREVIOUS_ADDRESS


def test_redeploy_overwrites_record(deployer, fake_chain, registry):
    registry.record(_existing_entry("localfhenix", "Counter"))

    records = deployer.deploy_all(
        [DeploymentUnit(name="Counter", skip_if_already_deployed=False)]
    )

    assert fake_chain.deployments == [("Counter", [])]
    assert records[0].address == contract_address(1)
    entries = registry.entries("localfhenix")
    assert len(entries) == 1
    assert entries[0].address == contract_address(1)
    assert entries[0].tx_hash != "0x" + "ee" * 32


@pytest.mark.parametrize("failure", [DeploymentReverted, DeploymentTimeout])
def test_halts_on_first_failure(deployer, fake_chain, registry, capsys, failure):
    fake_chain.failures["Token"] = failure("Token", "boom")
    capsys.readouterr()
    units = [
        DeploymentUnit(name="Counter"),
        DeploymentUnit(name="Token", constructor_args=("Test Token", "TST")),
        DeploymentUnit(name="VickreyAuction"),
    ]

    with pytest.raises(failure) as exc_info:
        deployer.deploy_all(units)

    assert exc_info.value.contract_name == "Token"
    assert fake_chain.deployments == [("Counter", [])]
    assert registry.get("localfhenix", "Counter") is not None
    assert registry.get("localfhenix", "Token") is None
    assert registry.get("localfhenix", "VickreyAuction") is None
    assert capsys.readouterr().out.splitlines() == [f"Counter contract: {contract_address(1)}"]


def test_deployer_variable_resolves_to_deployer_address(deployer, fake_chain):
    unit = DeploymentUnit(name="Vault", constructor_args=(DeployerAddress(), 42))

    assert deployer.resolve(unit) == [DEPLOYER_ADDRESS, 42]
    deployer.deploy(unit)
    assert fake_chain.deployments == [("Vault", [DEPLOYER_ADDRESS, 42])]


def test_interactive_deployment_asks_for_confirmation(
    fake_chain, registry, local_network, funded_account, monkeypatch
):
    prompts = list()
    monkeypatch.setattr(
        "click.confirm", lambda text, abort=False: prompts.append(text) or True
    )
    deployer = Deployer(
        chain=fake_chain, registry=registry, network=local_network, account=funded_account
    )

    deployer.deploy(DeploymentUnit(name="Counter"))

    assert prompts == ["Deploy Counter?"]
    assert fake_chain.deployments == [("Counter", [])]
