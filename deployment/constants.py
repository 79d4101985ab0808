from pathlib import Path

import deployment

#
# Filesystem
#

DEPLOYMENT_DIR = Path(deployment.__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"
ARTIFACTS_DIR = DEPLOYMENT_DIR / "artifacts"

DEFAULT_PARAMS_FILEPATH = CONSTRUCTOR_PARAMS_DIR / "fhenix.yml"
DEFAULT_REGISTRY_FILEPATH = ARTIFACTS_DIR / "fhenix.json"

#
# Networks
#

LOCALFHENIX = "localfhenix"

# the only network on which the deployer may fund itself
LOCAL_TEST_NETWORK = LOCALFHENIX

#
# Funding
#

LOCAL_FAUCET_URL = "http://localhost:42000/faucet"
FUNDING_URL = "https://faucet.fhenix.zone"

#
# Contracts
#

WRAPPING_ERC20 = "WrappingERC20"
