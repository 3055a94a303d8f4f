"""Deploy a Uniswap V2 factory/router stack and seed pairs on a dev chain"""

from dataclasses import dataclass

import structlog
from web3.contract import Contract

from ...contracts.artifacts import deploy_contract
from ...contracts.erc20 import ExpandedERC20
from .contracts.factory import Factory

logger = structlog.get_logger()


@dataclass
class UniswapV2Deployment:
    """Deployed Uniswap V2 contracts."""

    #: UniswapV2Factory, feeToSetter is the deployer
    factory: Contract

    #: WETH9, required by the router constructor
    weth: Contract

    #: UniswapV2Router02
    router: Contract


def deploy_uniswap_v2(manager, deployer=None, artifacts_dir=None):
    """
    Deploy factory, WETH9 and Router02 from compiled artifacts.

    Looks for UniswapV2Factory.json, WETH9.json and UniswapV2Router02.json
    under artifacts_dir (default AMM_ARTIFACTS_DIR).
    """
    deployer = deployer or manager.address
    factory = deploy_contract(manager, "UniswapV2Factory", deployer, sender=deployer, artifacts_dir=artifacts_dir)
    weth = deploy_contract(manager, "WETH9", sender=deployer, artifacts_dir=artifacts_dir)
    router = deploy_contract(
        manager, "UniswapV2Router02", factory.address, weth.address, sender=deployer, artifacts_dir=artifacts_dir
    )
    logger.info("uniswap_v2_deployed", factory=factory.address, router=router.address)
    return UniswapV2Deployment(factory, weth, router)


def create_seeded_pair(manager, factory_address, token_a, token_b, amount_a, amount_b, minter=None):
    """
    Create a pair and set its reserves directly.

    Mints amount_a / amount_b of two ExpandedERC20 tokens straight into the
    pair and syncs, so the starting price is exactly amount_a / amount_b
    without an LP position. minter must hold the minter role on both tokens.

    Returns:
        Pair wrapper
    """
    minter = minter or manager.address
    factory = Factory(manager, factory_address)
    pair = factory.create_pair(token_a, token_b, sender=minter)

    ExpandedERC20(manager, token_a).mint(pair.address, amount_a, sender=minter)
    ExpandedERC20(manager, token_b).mint(pair.address, amount_b, sender=minter)
    pair.sync(sender=minter)

    logger.info("pair_seeded", pair=pair.address, reserve_a=amount_a, reserve_b=amount_b)
    return pair
