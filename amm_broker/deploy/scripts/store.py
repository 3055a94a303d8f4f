"""Deploy the DVM Store with both fees initialized to zero"""

from ..framework import ZERO_ADDRESS, deploy_script


@deploy_script(tags=["Store", "dvm"], order=11)
def deploy_store(context):
    deployer = context.get_named_account("deployer")

    # FixedPoint.Unsigned fees
    initial_fixed_oracle_fee_per_second_per_pfc = {"rawValue": 0}
    initial_weekly_delay_fee_per_second_per_pfc = {"rawValue": 0}

    return context.deployments.deploy(
        "Store",
        from_=deployer,
        args=[
            initial_fixed_oracle_fee_per_second_per_pfc,
            initial_weekly_delay_fee_per_second_per_pfc,
            ZERO_ADDRESS,
        ],
        log=True,
    )
