"""Deploy the Uniswap V3 core and periphery contracts on a dev chain"""

from dataclasses import dataclass

import structlog
from web3.contract import Contract

from ...contracts.artifacts import deploy_contract

logger = structlog.get_logger()


@dataclass
class UniswapV3Deployment:
    """Deployed Uniswap V3 contracts."""

    weth: Contract
    factory: Contract

    #: SwapRouter (factory, weth)
    router: Contract

    #: NonfungibleTokenPositionDescriptor, linked against NFTDescriptor
    position_descriptor: Contract

    #: NonfungiblePositionManager (factory, weth, descriptor)
    position_manager: Contract

    tick_lens: Contract


def deploy_uniswap_v3(manager, deployer=None, artifacts_dir=None):
    """
    Deploy WETH9, factory, router, position manager and TickLens.

    NonfungibleTokenPositionDescriptor carries an external NFTDescriptor
    library; it is deployed first and its address linked into the
    descriptor's bytecode.
    """
    deployer = deployer or manager.address

    def deploy(name, *args, libraries=None):
        return deploy_contract(
            manager, name, *args, sender=deployer, libraries=libraries, artifacts_dir=artifacts_dir
        )

    weth = deploy("WETH9")
    factory = deploy("UniswapV3Factory")
    router = deploy("SwapRouter", factory.address, weth.address)

    nft_descriptor = deploy("NFTDescriptor")
    position_descriptor = deploy(
        "NonfungibleTokenPositionDescriptor",
        weth.address,
        libraries={"NFTDescriptor": nft_descriptor.address},
    )
    position_manager = deploy(
        "NonfungiblePositionManager", factory.address, weth.address, position_descriptor.address
    )
    tick_lens = deploy("TickLens")

    logger.info(
        "uniswap_v3_deployed",
        factory=factory.address,
        router=router.address,
        position_manager=position_manager.address,
        tick_lens=tick_lens.address,
    )
    return UniswapV3Deployment(weth, factory, router, position_descriptor, position_manager, tick_lens)
