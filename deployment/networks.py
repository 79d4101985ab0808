from ape import networks

from deployment.types import NetworkContext


def active_network() -> NetworkContext:
    """Returns the network the ape provider is connected to."""
    return NetworkContext(name=networks.provider.network.name)
